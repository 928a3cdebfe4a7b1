"""
Merkle Tree and Commitments
Deterministic Merkle tree construction + proof generation/verification.

This module provides:
- MerkleTree: build a tree over ordered items, get the root, generate proofs
- MerkleProof: a proof bundled with root, leaf digest, index and leaf count
- verify_proof: check (root, item, proof, index, total_leaves) without a tree
- MerkleProver / MerkleVerifier: class-based convenience wrappers

Canonical Commitment Rules:
1. Leaf digest: commit(item)
2. Parent digest: commit(left + right)
3. Shape: midpoint split, left half [start, mid], no padding
4. Empty input: EmptyInputError
5. Single leaf: root = commit(item)

Usage:
    from core.merkle import MerkleTree, verify_proof

    tree = MerkleTree.build([b"A", b"B", b"C", b"D"])
    root = tree.root_digest()
    proof = tree.generate_proof(2)

    assert verify_proof(root, b"C", proof, 2, len(tree))
"""
from .merkle_tree import (
    Node,
    MerkleProof,
    MerkleTree,
    leaf_path,
    proof_length,
)

from .merkle_proofs import (
    verify_proof,
    verify_merkle_proof,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "Node",
    "MerkleProof",
    "MerkleTree",
    # Core functions
    "leaf_path",
    "proof_length",
    "verify_proof",
    "verify_merkle_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
