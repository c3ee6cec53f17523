"""
Test fixtures package for MCM compiler tests.

Usage:
    from fixtures import make_proposal, make_leaves

    def test_something():
        proposal = make_proposal(num_operations=3, pre_op_count=7)
"""

from .common import (
    SYSTEM_PROGRAM,
    TOKEN_PROGRAM,
    BPF_LOADER_UPGRADEABLE,
    SYSVAR_RENT,
    SYSVAR_CLOCK,
    WRAPPED_SOL,
    MULTISIG_CONFIG,
    MULTISIG_ID,
    SIGNER_A,
    SIGNER_B,
    SIGNER_C,
    SIGNER_D,
    make_leaves,
    make_account,
    make_operation,
    make_root_metadata,
    make_proposal,
    make_proposal_dict,
)

__all__ = [
    "SYSTEM_PROGRAM",
    "TOKEN_PROGRAM",
    "BPF_LOADER_UPGRADEABLE",
    "SYSVAR_RENT",
    "SYSVAR_CLOCK",
    "WRAPPED_SOL",
    "MULTISIG_CONFIG",
    "MULTISIG_ID",
    "SIGNER_A",
    "SIGNER_B",
    "SIGNER_C",
    "SIGNER_D",
    "make_leaves",
    "make_account",
    "make_operation",
    "make_root_metadata",
    "make_proposal",
    "make_proposal_dict",
]
