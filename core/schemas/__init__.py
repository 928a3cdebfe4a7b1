"""
Schemas
File: __init__.py

Purpose: Export the error taxonomy.
The proof wire format lives in core.schemas.proof and is imported from
there directly, since it depends on core.merkle.
"""

from .errors import (
    CommitmentError,
    CommitmentException,
    EmptyInputError,
    ErrorCodes,
    IndexOutOfRangeError,
    ProofFormatException,
)

__all__ = [
    "CommitmentError",
    "CommitmentException",
    "EmptyInputError",
    "ErrorCodes",
    "IndexOutOfRangeError",
    "ProofFormatException",
]
