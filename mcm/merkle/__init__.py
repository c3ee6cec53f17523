"""
Merkle Tree and Commitments
Deterministic Merkle tree construction + proof generation/verification
compatible with the on-chain MCM verifier.

Commitment Rules:
1. Parent hashing: keccak256(min(a, b) + max(a, b))
2. Odd rule: promote the last unpaired node unchanged
3. Single leaf: root = leaf, proof = []
4. Empty tree: MerkleStructureException

Usage:
    from mcm.merkle import build_merkle_tree, compute_root_from_proof

    tree = build_merkle_tree(leaves)
    assert compute_root_from_proof(leaves[2], tree.proofs[2]) == tree.root
"""
from .merkle_tree import (
    MerkleProof,
    MerkleTree,
    hash_pair,
    build_merkle_tree,
    build_merkle_root,
    build_merkle_proof,
    compute_root_from_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleProof",
    "MerkleTree",
    # Core functions
    "hash_pair",
    "build_merkle_tree",
    "build_merkle_root",
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
