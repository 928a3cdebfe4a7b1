"""
Test fixtures package for the Merkle commitment tests.

- golden.py: hand-computed digests pinning the tree shape
"""

from .golden import (
    GOLDEN_LEAVES,
    GOLDEN_NODES,
    GOLDEN_ROOTS,
    SHA256_EMPTY,
    SHA256_HELLO,
    items_for,
)

__all__ = [
    "GOLDEN_LEAVES",
    "GOLDEN_NODES",
    "GOLDEN_ROOTS",
    "SHA256_EMPTY",
    "SHA256_HELLO",
    "items_for",
]
