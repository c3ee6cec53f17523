"""
Merkle Proofs Convenience Wrappers
Thin class-based interface over merkle_tree.py.

- MerkleProver: Generate proofs for leaves
- MerkleVerifier: Verify proofs, optionally raising on failure
"""
from __future__ import annotations

from typing import Sequence

from mcm.crypto.hashing import to_hex
from mcm.merkle.merkle_tree import (
    MerkleProof,
    build_merkle_proof,
    build_merkle_tree,
    verify_merkle_proof,
)
from mcm.schemas.errors import MerkleVerificationException


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> leaves = [keccak256(b"a"), keccak256(b"b"), keccak256(b"c")]
        >>> proof = MerkleProver.prove(leaves, index=2)
        >>> proof.siblings == [hash_pair(leaves[0], leaves[1])]
        True
    """

    @staticmethod
    def prove(leaves: Sequence[bytes], index: int) -> MerkleProof:
        """
        Generate a Merkle proof for the leaf at the given index.

        Raises:
            IndexError: If index is out of range
            MerkleStructureException: If leaves is empty
        """
        return build_merkle_proof(leaves, index)

    @staticmethod
    def prove_all(leaves: Sequence[bytes]) -> list[MerkleProof]:
        """Generate proofs for every leaf from a single tree build."""
        tree = build_merkle_tree(leaves)
        return [
            MerkleProof(leaf=leaf, index=i, siblings=tree.proof(i), root=tree.root)
            for i, leaf in enumerate(tree.leaves)
        ]

    @staticmethod
    def compute_root(leaves: Sequence[bytes]) -> bytes:
        """Compute the Merkle root for a sequence of leaves."""
        return build_merkle_tree(leaves).root


class MerkleVerifier:
    """Convenience class for verifying Merkle proofs."""

    @staticmethod
    def verify(proof: MerkleProof) -> bool:
        return verify_merkle_proof(proof)

    @staticmethod
    def verify_leaf_in_root(
        leaf: bytes,
        siblings: list[bytes],
        root: bytes,
        index: int = 0,
    ) -> bool:
        """
        Verify a leaf is included in a Merkle root using raw components.

        The index is informational only; pairing is order-free.
        """
        return verify_merkle_proof(
            MerkleProof(leaf=leaf, index=index, siblings=siblings, root=root)
        )

    @staticmethod
    def require_valid(proof: MerkleProof) -> None:
        """
        Raise if the proof does not reconstruct its root.

        Raises:
            MerkleVerificationException: If verification fails
        """
        if not verify_merkle_proof(proof):
            raise MerkleVerificationException(
                f"Proof for leaf {proof.index} does not reconstruct root {to_hex(proof.root)}",
                leaf_index=proof.index,
                details={
                    "leaf": to_hex(proof.leaf),
                    "siblings": [to_hex(s) for s in proof.siblings],
                },
            )


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
