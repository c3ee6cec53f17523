"""
Proposal Compiler
Turns a Proposal into the Merkle root signers agree on, plus the proofs
later submitted on-chain to set the root and execute each operation.

Steps:
1. Metadata leaf from proposal.root_metadata
2. One operation leaf per operation, at nonce pre_op_count + i
3. Merkle tree over [metadata_leaf, *operation_leaves]
4. Proof 0 is the metadata proof; the rest are operation proofs in order

compute_proposal_root is a pure function of the proposal's content:
identical proposals, operation order included, always yield identical
roots and proofs.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Sequence

from mcm.crypto.hashing import HASH_SIZE, keccak256, to_hex
from mcm.merkle.merkle_proofs import MerkleVerifier
from mcm.merkle.merkle_tree import MerkleProof, build_merkle_tree
from mcm.proposal.leaves import compute_metadata_leaf, compute_operation_leaf
from mcm.schemas.errors import ErrorCodes, MerkleVerificationException
from mcm.schemas.proposal import VALID_UNTIL_MAX, Proposal


@dataclass(frozen=True)
class ProposalRoot:
    """Compiled root and proofs for one proposal."""
    root: bytes
    metadata_proof: list[bytes]
    operation_proofs: list[list[bytes]]

    def to_dict(self) -> dict[str, Any]:
        """Hex-encoded form for interchange."""
        return {
            "root": to_hex(self.root),
            "metadataProof": [to_hex(p) for p in self.metadata_proof],
            "operationProofs": [[to_hex(p) for p in proof] for proof in self.operation_proofs],
        }


def compute_proposal_leaves(proposal: Proposal) -> list[bytes]:
    """Metadata leaf followed by operation leaves in nonce order."""
    metadata = proposal.root_metadata
    leaves = [compute_metadata_leaf(metadata)]
    for i, operation in enumerate(proposal.operations):
        leaves.append(
            compute_operation_leaf(
                chain_id=metadata.chain_id,
                multisig=metadata.multisig,
                nonce=metadata.pre_op_count + i,
                operation=operation,
            )
        )
    return leaves


def compute_proposal_root(proposal: Proposal) -> ProposalRoot:
    """
    Compile a proposal into its root, metadata proof and operation proofs.

    A proposal with no operations has root == metadata leaf and an empty
    metadata proof.
    """
    tree = build_merkle_tree(compute_proposal_leaves(proposal))
    metadata_proof, *operation_proofs = tree.proofs
    return ProposalRoot(
        root=tree.root,
        metadata_proof=metadata_proof,
        operation_proofs=operation_proofs,
    )


def compute_proposal_roots(
    proposals: Sequence[Proposal],
    max_workers: int | None = None,
) -> list[ProposalRoot]:
    """
    Compile independent proposals on a thread pool.

    Results are returned in input order.
    """
    if len(proposals) <= 1 or max_workers == 1:
        return [compute_proposal_root(p) for p in proposals]

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(compute_proposal_root, proposals))


def compute_hash_to_sign(root: bytes, valid_until: int) -> bytes:
    """
    Digest each signer signs to approve ``root`` until ``valid_until``.

    keccak256(root ‖ valid_until as a 32-byte big-endian integer)
    """
    if len(root) != HASH_SIZE:
        raise ValueError(f"Root must be {HASH_SIZE} bytes, got {len(root)}")
    if valid_until <= 0 or valid_until > VALID_UNTIL_MAX:
        raise ValueError(f"validUntil {valid_until} out of range")
    return keccak256(root + valid_until.to_bytes(32, "big"))


def verify_proposal_root(
    proposal: Proposal,
    expected_root: bytes | None = None,
) -> ProposalRoot:
    """
    Recompute a proposal's tree and check every proof against its root.

    Raises:
        MerkleVerificationException: If a proof fails to reconstruct the
            root, or the root differs from ``expected_root``
    """
    leaves = compute_proposal_leaves(proposal)
    result = compute_proposal_root(proposal)

    for index, (leaf, siblings) in enumerate(
        zip(leaves, [result.metadata_proof, *result.operation_proofs])
    ):
        MerkleVerifier.require_valid(
            MerkleProof(leaf=leaf, index=index, siblings=siblings, root=result.root)
        )

    if expected_root is not None and expected_root != result.root:
        raise MerkleVerificationException(
            f"Computed root {to_hex(result.root)} does not match expected {to_hex(expected_root)}",
            details={"expected": to_hex(expected_root), "actual": to_hex(result.root)},
            code=ErrorCodes.ROOT_MISMATCH,
        )

    return result


__all__ = [
    "ProposalRoot",
    "compute_proposal_leaves",
    "compute_proposal_root",
    "compute_proposal_roots",
    "compute_hash_to_sign",
    "verify_proposal_root",
]
