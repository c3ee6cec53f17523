"""
Leaf Hashers
Domain-separated leaf hashes for the proposal Merkle tree.

Preimage layouts (every integer/address/bool field is a 32-byte word):

    metadata  = METADATA_DOMAIN ‖ chainId ‖ multisig ‖ preOpCount
                ‖ postOpCount ‖ overridePreviousRoot

    operation = OPERATION_DOMAIN ‖ chainId ‖ multisig ‖ nonce ‖ target
                ‖ len(data) ‖ data ‖ len(accounts) ‖ accounts

``data`` is the raw, unpadded instruction payload. Each serialized account
is its 32-byte address followed by one flags byte,
``(is_signer << 1) | is_writable``.

The two domain separators guarantee a metadata leaf can never collide with
an operation leaf, even if every other field coincides.
"""
from __future__ import annotations

from typing import Sequence

from mcm.crypto.encoding import address_word, encode_bool, encode_u64
from mcm.crypto.hashing import keccak256
from mcm.schemas.proposal import AccountMeta, Operation, RootMetadata


METADATA_DOMAIN_SEPARATOR: bytes = bytes.fromhex(
    "47fded70901d27038394db905a72563cad6f07581dbcdd1472ccd2f742af6360"
)

OPERATION_DOMAIN_SEPARATOR: bytes = bytes.fromhex(
    "fb98816ff3c5138a68abfd40b8d8fbc22972fea1dd89757331327e6e0a9440b7"
)


def account_flags(account: AccountMeta) -> int:
    return (int(account.is_signer) << 1) | int(account.is_writable)


def serialize_accounts(accounts: Sequence[AccountMeta]) -> bytes:
    """Concatenate (address word ‖ flags byte) for each account, in order."""
    return b"".join(
        address_word(account.address) + bytes([account_flags(account)])
        for account in accounts
    )


def encode_metadata_preimage(metadata: RootMetadata) -> bytes:
    """Byte sequence hashed to form the metadata leaf."""
    return b"".join([
        METADATA_DOMAIN_SEPARATOR,
        encode_u64(metadata.chain_id),
        address_word(metadata.multisig),
        encode_u64(metadata.pre_op_count),
        encode_u64(metadata.post_op_count),
        encode_bool(metadata.override_previous_root),
    ])


def encode_operation_preimage(
    chain_id: int,
    multisig: str,
    nonce: int,
    operation: Operation,
) -> bytes:
    """Byte sequence hashed to form an operation leaf."""
    data = operation.data_bytes
    return b"".join([
        OPERATION_DOMAIN_SEPARATOR,
        encode_u64(chain_id),
        address_word(multisig),
        encode_u64(nonce),
        address_word(operation.target),
        encode_u64(len(data)),
        data,
        encode_u64(len(operation.accounts)),
        serialize_accounts(operation.accounts),
    ])


def compute_metadata_leaf(metadata: RootMetadata) -> bytes:
    """keccak256 of the metadata preimage."""
    return keccak256(encode_metadata_preimage(metadata))


def compute_operation_leaf(
    chain_id: int,
    multisig: str,
    nonce: int,
    operation: Operation,
) -> bytes:
    """keccak256 of the operation preimage at the given nonce."""
    return keccak256(encode_operation_preimage(chain_id, multisig, nonce, operation))


__all__ = [
    "METADATA_DOMAIN_SEPARATOR",
    "OPERATION_DOMAIN_SEPARATOR",
    "account_flags",
    "serialize_accounts",
    "encode_metadata_preimage",
    "encode_operation_preimage",
    "compute_metadata_leaf",
    "compute_operation_leaf",
]
