"""
Merkle Proof Verification
Recompute a candidate root from one item and its sibling digests.

This module provides:
- verify_proof(): the stateless verifier; needs no tree, only the root
- verify_merkle_proof(): verify a bundled MerkleProof against an item
- MerkleProver / MerkleVerifier: class-based convenience wrappers

A failed verification is a normal negative result. Nothing here raises
on a wrong, truncated, extended or malformed proof; the answer is False.
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from core.crypto.hashing import ItemLike, commit, hash_concat, to_bytes
from core.merkle.merkle_tree import MerkleProof, MerkleTree, leaf_path


logger = logging.getLogger(__name__)


def verify_proof(
    root_digest: bytes,
    item: ItemLike,
    proof: Sequence[bytes],
    index: int,
    total_leaves: int,
) -> bool:
    """
    Verify that item sits at index in the tree committed to by root_digest.

    Algorithm:
    1. current = commit(item)
    2. For each sibling (leaf-to-root):
       - current is a left child:  current = commit(current + sibling)
       - current is a right child: current = commit(sibling + current)
    3. Compare current to root_digest

    Orientation at each level comes from leaf_path(index, total_leaves),
    the same midpoint-split walk the tree uses. For 2**k leaves this is
    "even index means left child, then halve the index".

    A proof whose length differs from the leaf's depth, an index outside
    [0, total_leaves), or a non-positive total_leaves is rejected up front.

    Args:
        root_digest: The claimed commitment
        item: The data item (bytes or text)
        proof: Sibling digests, leaf-to-root
        index: Claimed 0-based leaf index
        total_leaves: Leaf count of the committed list

    Returns:
        True if the recomputed root equals root_digest, False otherwise
    """
    if isinstance(index, bool) or not isinstance(index, int):
        return False
    if isinstance(total_leaves, bool) or not isinstance(total_leaves, int):
        return False
    if total_leaves < 1 or index < 0 or index >= total_leaves:
        logger.debug("Rejecting proof: index %s outside %s leaves", index, total_leaves)
        return False

    path = leaf_path(index, total_leaves)

    try:
        siblings = list(proof)
        if len(siblings) != len(path):
            logger.debug(
                "Rejecting proof: expected %d siblings for index %d, got %d",
                len(path), index, len(siblings),
            )
            return False

        current = commit(to_bytes(item))
        for sibling, is_right in zip(siblings, path):
            if is_right:
                current = hash_concat(sibling, current)
            else:
                current = hash_concat(current, sibling)

        return current == bytes(root_digest)
    except TypeError:
        logger.debug("Rejecting proof: item, sibling or root is not bytes")
        return False


def verify_merkle_proof(proof: MerkleProof, item: ItemLike) -> bool:
    """
    Verify a bundled proof against a data item.

    Also checks that the item commits to the leaf digest the proof carries.
    """
    try:
        if commit(to_bytes(item)) != proof.leaf:
            return False
    except TypeError:
        return False
    return verify_proof(
        proof.root,
        item,
        proof.siblings,
        proof.index,
        proof.total_leaves,
    )


class MerkleProver:
    """
    Convenience class for generating Merkle proofs from raw items.

    Example:
        >>> proof = MerkleProver.prove([b"a", b"b", b"c"], index=1)
        >>> MerkleVerifier.verify(proof, b"b")
        True
    """

    @staticmethod
    def prove(items: Iterable[ItemLike], index: int) -> MerkleProof:
        """
        Build a tree over items and prove the item at index.

        Raises:
            EmptyInputError: If items is empty
            IndexOutOfRangeError: If index is out of range
        """
        return MerkleTree.build(items).prove(index)

    @staticmethod
    def compute_root(items: Iterable[ItemLike]) -> bytes:
        """Compute the root digest for a sequence of items."""
        return MerkleTree.build(items).root_digest()


class MerkleVerifier:
    """Convenience class for verifying Merkle proofs."""

    @staticmethod
    def verify(proof: MerkleProof, item: ItemLike) -> bool:
        """Verify a bundled proof against the item it claims to prove."""
        return verify_merkle_proof(proof, item)

    @staticmethod
    def verify_leaf_in_root(
        item: ItemLike,
        index: int,
        siblings: Sequence[bytes],
        root: bytes,
        total_leaves: int,
    ) -> bool:
        """Verify an item is included in a root using raw components."""
        return verify_proof(root, item, siblings, index, total_leaves)


__all__ = [
    "verify_proof",
    "verify_merkle_proof",
    "MerkleProver",
    "MerkleVerifier",
]
