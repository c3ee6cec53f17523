"""
Common test fixtures shared by all modules.

Provides factory functions for core MCM data structures:
- AccountMeta
- Operation
- RootMetadata
- Proposal

plus well-known Solana program ids and EVM signer addresses used across
the suite.
"""

from typing import Any, Optional

from mcm.crypto.hashing import keccak256
from mcm.schemas.proposal import (
    AccountMeta,
    AccountRole,
    Operation,
    Proposal,
    RootMetadata,
)


# =============================================================================
# Addresses
# =============================================================================

SYSTEM_PROGRAM = "11111111111111111111111111111111"
TOKEN_PROGRAM = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
BPF_LOADER_UPGRADEABLE = "BPFLoaderUpgradeab1e11111111111111111111111"
SYSVAR_RENT = "SysvarRent111111111111111111111111111111111"
SYSVAR_CLOCK = "SysvarC1ock11111111111111111111111111111111"
WRAPPED_SOL = "So11111111111111111111111111111111111111112"

MULTISIG_CONFIG = SYSVAR_CLOCK

MULTISIG_ID = "0x" + "ab" * 32

SIGNER_A = "0xAAAA000000000000000000000000000000000A"
SIGNER_B = "0xBBBB000000000000000000000000000000000B"
SIGNER_C = "0xCCCC000000000000000000000000000000000C"
SIGNER_D = "0xDDDD000000000000000000000000000000000D"


# =============================================================================
# Leaves
# =============================================================================

def make_leaves(count: int, prefix: str = "leaf") -> list[bytes]:
    """Distinct 32-byte leaves derived from a label."""
    return [keccak256(f"{prefix}-{i}".encode()) for i in range(count)]


# =============================================================================
# Proposal Factories
# =============================================================================

def make_account(
    address: str = SYSVAR_RENT,
    role: AccountRole = AccountRole.READONLY,
    description: Optional[str] = None,
) -> AccountMeta:
    """Create an AccountMeta for testing."""
    return AccountMeta(address=address, role=role, description=description)


def make_operation(
    target: str = BPF_LOADER_UPGRADEABLE,
    data: str = "0x03000000",
    accounts: Optional[list[AccountMeta]] = None,
    program: Optional[str] = "bpf-loader-upgradeable",
    description: Optional[str] = None,
) -> Operation:
    """
    Create an Operation for testing.

    Defaults to a loader instruction touching one writable signer and
    one read-only account.
    """
    if accounts is None:
        accounts = [
            make_account(WRAPPED_SOL, AccountRole.WRITABLE_SIGNER),
            make_account(SYSVAR_RENT, AccountRole.READONLY),
        ]
    return Operation(
        target=target,
        data=data,
        accounts=accounts,
        program=program,
        description=description,
    )


def make_root_metadata(
    chain_id: int = 1,
    multisig: str = MULTISIG_CONFIG,
    pre_op_count: int = 0,
    post_op_count: Optional[int] = None,
    override_previous_root: bool = False,
) -> RootMetadata:
    """Create RootMetadata; post_op_count defaults to pre_op_count."""
    return RootMetadata(
        chain_id=chain_id,
        multisig=multisig,
        pre_op_count=pre_op_count,
        post_op_count=pre_op_count if post_op_count is None else post_op_count,
        override_previous_root=override_previous_root,
    )


def make_proposal(
    num_operations: int = 2,
    operations: Optional[list[Operation]] = None,
    pre_op_count: int = 0,
    chain_id: int = 1,
    valid_until: int = 1767225600,
    multisig_id: str = MULTISIG_ID,
    override_previous_root: bool = False,
) -> Proposal:
    """
    Create a Proposal for testing.

    Operations differ in their data so every leaf is distinct.
    """
    if operations is None:
        operations = [
            make_operation(data="0x" + f"{i:02x}" * 4) for i in range(num_operations)
        ]
    metadata = make_root_metadata(
        chain_id=chain_id,
        pre_op_count=pre_op_count,
        post_op_count=pre_op_count + len(operations),
        override_previous_root=override_previous_root,
    )
    return Proposal(
        multisig_id=multisig_id,
        valid_until=valid_until,
        operations=operations,
        root_metadata=metadata,
    )


def make_proposal_dict(**overrides: Any) -> dict[str, Any]:
    """Proposal in its on-disk camelCase JSON form."""
    data: dict[str, Any] = {
        "multisigId": MULTISIG_ID,
        "validUntil": 1767225600,
        "ixs": [
            {
                "programAddress": BPF_LOADER_UPGRADEABLE,
                "data": "0x03000000",
                "accounts": [
                    {"address": WRAPPED_SOL, "role": 3},
                    {"address": SYSVAR_RENT, "role": "READONLY"},
                ],
                "program": "bpf-loader-upgradeable",
                "description": "Upgrade program",
            }
        ],
        "rootMetadata": {
            "chainId": 1,
            "multisig": MULTISIG_CONFIG,
            "preOpCount": 4,
            "postOpCount": 5,
            "overridePreviousRoot": False,
        },
    }
    data.update(overrides)
    return data
