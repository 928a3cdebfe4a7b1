"""
Schemas - Errors
File: errors.py

Purpose: Error taxonomy for the commitment toolkit.
Defines both Pydantic models for structured error reporting
and Python exceptions for control flow.

Only caller mistakes are exceptions (empty input, index out of range,
undecodable proof). A proof that does not verify is a normal False result.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Construction Errors
    EMPTY_INPUT = "EMPTY_INPUT"

    # Proof Generation Errors
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"

    # Proof Transport Errors
    PROOF_FORMAT_INVALID = "PROOF_FORMAT_INVALID"

    # Verification (reported, never raised by the core)
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"

    # Front end
    CONFIG_INVALID = "CONFIG_INVALID"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class CommitmentError(BaseModel):
    """
    Error model for structured error reporting.

    Used by the CLI to emit machine-readable errors with --json.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "CommitmentException":
        """Convert this error model to a raisable exception."""
        return CommitmentException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class CommitmentException(Exception):
    """
    Base exception for all commitment toolkit errors.

    Carries structured error information and converts to a
    CommitmentError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "COMMITMENT_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> CommitmentError:
        """Convert this exception to a CommitmentError model."""
        return CommitmentError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputError(CommitmentException, ValueError):
    """Raised when a tree is built from zero items."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree from an empty item list",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class IndexOutOfRangeError(CommitmentException, IndexError):
    """Raised when a proof is requested for an index outside the tree."""

    def __init__(
        self,
        index: int,
        num_leaves: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["index"] = index
        full_details["num_leaves"] = num_leaves
        super().__init__(
            message=f"Leaf index {index} out of range for {num_leaves} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )
        self.index = index
        self.num_leaves = num_leaves


class ProofFormatException(CommitmentException, ValueError):
    """Raised when a serialized proof cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_FORMAT_INVALID,
            details=details,
            retryable=False,
        )


__all__ = [
    "ErrorCodes",
    "CommitmentError",
    "CommitmentException",
    "EmptyInputError",
    "IndexOutOfRangeError",
    "ProofFormatException",
]
