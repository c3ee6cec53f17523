"""
Proposal Compiler
Leaf hashing, root/proof computation and proposal file IO.

Usage:
    from mcm.proposal import load_proposal, compute_proposal_root

    proposal = load_proposal("proposal.json")
    result = compute_proposal_root(proposal)
    print(result.to_dict()["root"])
"""
from .leaves import (
    METADATA_DOMAIN_SEPARATOR,
    OPERATION_DOMAIN_SEPARATOR,
    account_flags,
    serialize_accounts,
    encode_metadata_preimage,
    encode_operation_preimage,
    compute_metadata_leaf,
    compute_operation_leaf,
)
from .compiler import (
    ProposalRoot,
    compute_proposal_leaves,
    compute_proposal_root,
    compute_proposal_roots,
    compute_hash_to_sign,
    verify_proposal_root,
)
from .io import (
    parse_proposal,
    load_proposal,
    save_proposal,
)


__all__ = [
    # Leaves
    "METADATA_DOMAIN_SEPARATOR",
    "OPERATION_DOMAIN_SEPARATOR",
    "account_flags",
    "serialize_accounts",
    "encode_metadata_preimage",
    "encode_operation_preimage",
    "compute_metadata_leaf",
    "compute_operation_leaf",
    # Compiler
    "ProposalRoot",
    "compute_proposal_leaves",
    "compute_proposal_root",
    "compute_proposal_roots",
    "compute_hash_to_sign",
    "verify_proposal_root",
    # IO
    "parse_proposal",
    "load_proposal",
    "save_proposal",
]
