"""
Merkle Tree Implementation
Deterministic tree construction and inclusion-proof generation.

This module provides:
- Node: immutable tree node (leaf or internal)
- MerkleTree: owns the root node and the leaf count
- leaf_path(): left/right orientation of a leaf's path, shared with the verifier
- MerkleProof: a proof bundled with the values needed to check it

Canonical Commitment Rules (Hard Contracts):
1. Leaf digest:   commit(item)
2. Parent digest: commit(left.digest + right.digest)
3. Shape: the leaf range [start, end] splits at mid = start + (end - start) // 2;
   the left subtree covers [start, mid], the right subtree [mid + 1, end].
   The shape depends only on the number of leaves. There is no padding.
4. Empty input: rejected with EmptyInputError
5. Single leaf: root = commit(item), proof = []

Proof Shape Notes:
- Siblings are read off the actual midpoint-split topology, so proofs are
  valid for every leaf count, not only powers of two.
- Leaves of a non-power-of-two tree can sit at different depths, so proof
  length varies by index. For 2**k leaves every proof has k siblings and
  the orientation at each level is the parity of the halving index.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from core.crypto.hashing import ItemLike, commit, hash_concat, to_bytes, to_hex
from core.schemas.errors import EmptyInputError, IndexOutOfRangeError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Node:
    """
    A node of a Merkle tree.

    Leaf nodes have no children; internal nodes have exactly two and their
    digest is always commit(left.digest + right.digest).
    """
    digest: bytes
    left: Optional["Node"] = field(default=None, repr=False)
    right: Optional["Node"] = field(default=None, repr=False)

    @classmethod
    def leaf(cls, item: bytes) -> "Node":
        """Create a leaf node committing to raw item bytes."""
        return cls(digest=commit(item))

    @classmethod
    def parent(cls, left: "Node", right: "Node") -> "Node":
        """Create an internal node over two children."""
        return cls(
            digest=hash_concat(left.digest, right.digest),
            left=left,
            right=right,
        )

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single leaf.

    Attributes:
        root: The root digest this proof is against
        leaf: The leaf digest being proven (commit(item))
        index: The 0-based index of the leaf
        total_leaves: Leaf count of the tree the proof came from
        siblings: Sibling digests, leaf-to-root order
    """
    root: bytes
    leaf: bytes
    index: int
    total_leaves: int
    siblings: tuple[bytes, ...]

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")
        if self.total_leaves < 1:
            raise ValueError(f"Total leaves must be positive, got {self.total_leaves}")
        # Accept any sequence, store an immutable tuple
        object.__setattr__(self, "siblings", tuple(self.siblings))


def _split(start: int, end: int) -> int:
    """Midpoint of an inclusive leaf range; the left half is [start, mid]."""
    return start + (end - start) // 2


def leaf_path(index: int, total_leaves: int) -> list[bool]:
    """
    Orientation of every node on the path from a leaf to the root.

    Walks the midpoint splits from the root down to the leaf and returns
    one flag per level in leaf-to-root order: True when the node on the
    path is a right child (its sibling goes on the left when hashing).

    Args:
        index: 0-based leaf index
        total_leaves: Number of leaves in the tree

    Returns:
        List of orientation flags; empty for a single-leaf tree

    Raises:
        IndexOutOfRangeError: If index is not in [0, total_leaves)
    """
    if total_leaves < 1 or index < 0 or index >= total_leaves:
        raise IndexOutOfRangeError(index, total_leaves)

    path: list[bool] = []
    start, end = 0, total_leaves - 1
    while start != end:
        mid = _split(start, end)
        if index <= mid:
            path.append(False)
            end = mid
        else:
            path.append(True)
            start = mid + 1

    path.reverse()
    return path


def proof_length(index: int, total_leaves: int) -> int:
    """Number of sibling digests in the proof for a leaf (its depth)."""
    return len(leaf_path(index, total_leaves))


def _build_root(leaves: list[Node]) -> Node:
    """
    Combine leaf nodes into a tree using the midpoint-split rule.

    Uses an explicit work stack so stack usage does not grow with the
    number of leaves.
    """
    built: list[Node] = []
    # (start, end, children_built)
    work: list[tuple[int, int, bool]] = [(0, len(leaves) - 1, False)]

    while work:
        start, end, children_built = work.pop()

        if start == end:
            built.append(leaves[start])
            continue

        if children_built:
            right = built.pop()
            left = built.pop()
            built.append(Node.parent(left, right))
            continue

        mid = _split(start, end)
        work.append((start, end, True))
        work.append((mid + 1, end, False))
        work.append((start, mid, False))

    return built[0]


class MerkleTree:
    """
    A Merkle tree committing to an ordered list of data items.

    The tree is built once from the full item list and is read-only
    afterwards, so it can be shared between threads without locking.

    Example:
        >>> tree = MerkleTree.build([b"A", b"B", b"C", b"D"])
        >>> proof = tree.generate_proof(2)
        >>> len(proof)
        2
    """

    def __init__(self, items: Iterable[ItemLike]) -> None:
        data = [to_bytes(item) for item in items]
        if not data:
            raise EmptyInputError()

        self._leaves: tuple[Node, ...] = tuple(Node.leaf(item) for item in data)
        self._root: Node = _build_root(list(self._leaves))

        logger.debug(
            "Built Merkle tree: leaves=%d root=%s",
            len(self._leaves),
            to_hex(self._root.digest),
        )

    @classmethod
    def build(cls, items: Iterable[ItemLike]) -> "MerkleTree":
        """
        Build a tree over items.

        Args:
            items: Ordered byte (or text) items; order is significant

        Raises:
            EmptyInputError: If items is empty
        """
        return cls(items)

    @property
    def root(self) -> Node:
        return self._root

    @property
    def num_leaves(self) -> int:
        return len(self._leaves)

    @property
    def height(self) -> int:
        """Edges on the longest root-to-leaf path (ceil(log2(num_leaves)))."""
        return (self.num_leaves - 1).bit_length()

    def __len__(self) -> int:
        return self.num_leaves

    def root_digest(self) -> bytes:
        """The commitment: digest of the root node."""
        return self._root.digest

    def leaf_digests(self) -> list[bytes]:
        """Leaf digests in item order."""
        return [leaf.digest for leaf in self._leaves]

    def generate_proof(self, index: int) -> list[bytes]:
        """
        Generate the inclusion proof for the leaf at index.

        Descends from the root along the midpoint splits, recording the
        digest of the child not taken at each step, then returns the
        siblings in leaf-to-root order.

        Args:
            index: 0-based index of the leaf to prove

        Returns:
            Sibling digests, leaf-to-root; empty for a single-leaf tree

        Raises:
            TypeError: If index is not an integer
            IndexOutOfRangeError: If index is not in [0, num_leaves)
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Leaf index must be an int, got {type(index).__name__}")
        if index < 0 or index >= self.num_leaves:
            raise IndexOutOfRangeError(index, self.num_leaves)

        siblings: list[bytes] = []
        node = self._root
        start, end = 0, self.num_leaves - 1

        while start != end:
            mid = _split(start, end)
            if index <= mid:
                siblings.append(node.right.digest)
                node = node.left
                end = mid
            else:
                siblings.append(node.left.digest)
                node = node.right
                start = mid + 1

        siblings.reverse()
        return siblings

    def prove(self, index: int) -> MerkleProof:
        """Generate a proof bundled with the root, leaf digest and leaf count."""
        siblings = self.generate_proof(index)
        return MerkleProof(
            root=self.root_digest(),
            leaf=self._leaves[index].digest,
            index=index,
            total_leaves=self.num_leaves,
            siblings=tuple(siblings),
        )

    def __repr__(self) -> str:
        return f"MerkleTree(num_leaves={self.num_leaves}, root={to_hex(self.root_digest())})"


__all__ = [
    "Node",
    "MerkleProof",
    "MerkleTree",
    "leaf_path",
    "proof_length",
]
