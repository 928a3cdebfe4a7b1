"""
Commitment Primitive - Hashing Utilities
SHA-256 commitment over raw bytes plus digest display helpers.

This module provides:
- commit(): the one-way commitment used for leaves AND parent nodes
- hash_concat(): parent digest of two child digests
- to_bytes(): normalize text/bytes items before committing
- Hex encoding/decoding for display and transport (lowercase, no prefix)

Commitment Rules (Hard Contracts):
1. Leaf digest:   commit(item_bytes)
2. Parent digest: commit(left_digest + right_digest), left first
3. No domain separation: leaves and parents use the same function
4. Digests are DIGEST_SIZE (32) bytes, compared byte-wise
"""
from __future__ import annotations

import hashlib
from typing import Union


DIGEST_SIZE: int = 32

ItemLike = Union[bytes, bytearray, memoryview, str]


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def commit(data: bytes) -> bytes:
    """
    Commit to a byte sequence.

    Deterministic and fixed-size. Accepts any byte sequence, including
    the empty one.

    Args:
        data: Raw bytes to commit to

    Returns:
        32-byte digest
    """
    return sha256(bytes(data))


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two digests.

    This is used for computing parent digests:
    parent = commit(left + right)

    Args:
        left: Left child digest
        right: Right child digest

    Returns:
        32-byte digest of the concatenation
    """
    return commit(bytes(left) + bytes(right))


def to_bytes(item: ItemLike, encoding: str = "utf-8") -> bytes:
    """
    Normalize a data item to bytes.

    Text is encoded (UTF-8 by default); bytes-like values are copied.

    Raises:
        TypeError: If item is neither text nor bytes-like
    """
    if isinstance(item, str):
        return item.encode(encoding)
    if isinstance(item, (bytes, bytearray, memoryview)):
        return bytes(item)
    raise TypeError(
        f"Items must be bytes or str, got {type(item).__name__}"
    )


def to_hex(digest: bytes) -> str:
    """
    Convert a digest to its display form.

    Lowercase hex, two characters per byte, no separators, no prefix.

    Example:
        >>> to_hex(bytes.fromhex("DEADBEEF"))
        'deadbeef'
    """
    return bytes(digest).hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hex string (as produced by to_hex) back to bytes.

    Surrounding whitespace is ignored and upper case is accepted.

    Raises:
        ValueError: If the string has odd length or invalid hex characters
    """
    hex_content = hex_string.strip()

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length, got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "DIGEST_SIZE",
    "ItemLike",
    "sha256",
    "commit",
    "hash_concat",
    "to_bytes",
    "to_hex",
    "from_hex",
]
