"""
Core cryptographic utilities.

Provides the commitment primitive and digest encoding helpers.
"""
from .hashing import (
    DIGEST_SIZE,
    sha256,
    commit,
    hash_concat,
    to_bytes,
    to_hex,
    from_hex,
)

__all__ = [
    "DIGEST_SIZE",
    "sha256",
    "commit",
    "hash_concat",
    "to_bytes",
    "to_hex",
    "from_hex",
]
