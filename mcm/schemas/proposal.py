"""
Schemas
File: proposal.py

Purpose: Proposal file schema. A proposal is a root-metadata record plus
an ordered list of privileged Solana instructions awaiting multi-party
approval. Field aliases match the camelCase JSON written by proposal
tooling, so ``Proposal.model_validate(json.load(f))`` reads a proposal
file directly.

Models are frozen: once a proposal is constructed it is treated as
immutable input to the compiler.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mcm.crypto.encoding import U64_MAX, decode_solana_address
from mcm.crypto.hashing import from_hex, is_hash


# validUntil is a positive unix timestamp stored on-chain as a u32
VALID_UNTIL_MAX = 2**32 - 1


class AccountRole(IntEnum):
    """Solana account role, as encoded by the instruction builders."""

    READONLY = 0
    WRITABLE = 1
    READONLY_SIGNER = 2
    WRITABLE_SIGNER = 3


def is_signer_role(role: AccountRole | int) -> bool:
    """Return True if the role requires the account to sign."""
    return int(role) >= AccountRole.READONLY_SIGNER


def is_writable_role(role: AccountRole | int) -> bool:
    """Return True if the role marks the account writable."""
    return bool(int(role) & AccountRole.WRITABLE)


def validate_solana_address(value: str, field_name: str) -> str:
    """Validate that a value is a base58 Solana address."""
    try:
        decode_solana_address(value)
    except ValueError as e:
        raise ValueError(f"{field_name} must be a valid Solana address: {e}") from e
    return value


_MODEL_CONFIG = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class AccountMeta(BaseModel):
    """An account reference passed to an instruction."""

    model_config = _MODEL_CONFIG

    address: str = Field(..., description="Base58 account address")
    role: AccountRole = Field(..., description="Signer/writable role of the account")
    description: str | None = Field(default=None)

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return validate_solana_address(v, "Account address")

    @field_validator("role", mode="before")
    @classmethod
    def parse_role(cls, v: Any) -> Any:
        """Accept role names (e.g. "WRITABLE_SIGNER") as well as values."""
        if isinstance(v, str):
            if v.isdigit():
                return int(v)
            try:
                return AccountRole[v.upper()]
            except KeyError:
                raise ValueError(
                    f"Unknown account role {v!r}, expected one of "
                    f"{[r.name for r in AccountRole]}"
                ) from None
        return v

    @property
    def is_signer(self) -> bool:
        return is_signer_role(self.role)

    @property
    def is_writable(self) -> bool:
        return is_writable_role(self.role)

    @property
    def address_bytes(self) -> bytes:
        return decode_solana_address(self.address)


class Operation(BaseModel):
    """
    One privileged instruction to be executed by the multisig.

    ``target`` is the program invoked; ``data`` the raw instruction
    payload as 0x-prefixed hex.
    """

    model_config = _MODEL_CONFIG

    target: str = Field(..., alias="programAddress", description="Program address")
    data: str = Field(..., description="Instruction data as 0x-prefixed hex")
    accounts: list[AccountMeta] = Field(default_factory=list)
    program: str | None = Field(default=None, description="Human-readable program name")
    description: str | None = Field(default=None)

    @field_validator("target")
    @classmethod
    def validate_target(cls, v: str) -> str:
        return validate_solana_address(v, "Program address")

    @field_validator("data")
    @classmethod
    def validate_data(cls, v: str) -> str:
        try:
            from_hex(v)
        except ValueError as e:
            raise ValueError(f"Instruction data must be a valid hex string: {e}") from e
        return v.lower()

    @property
    def data_bytes(self) -> bytes:
        return from_hex(self.data)

    @property
    def target_bytes(self) -> bytes:
        return decode_solana_address(self.target)


class RootMetadata(BaseModel):
    """Metadata committed alongside the operations under one root."""

    model_config = _MODEL_CONFIG

    chain_id: int = Field(..., alias="chainId", ge=0, le=U64_MAX, strict=True)
    multisig: str = Field(..., description="Multisig config account address")
    pre_op_count: int = Field(..., alias="preOpCount", ge=0, le=U64_MAX, strict=True)
    post_op_count: int = Field(..., alias="postOpCount", ge=0, le=U64_MAX, strict=True)
    override_previous_root: bool = Field(..., alias="overridePreviousRoot", strict=True)

    @field_validator("multisig")
    @classmethod
    def validate_multisig(cls, v: str) -> str:
        return validate_solana_address(v, "Multisig")

    @model_validator(mode="after")
    def validate_op_counts(self) -> "RootMetadata":
        if self.pre_op_count > self.post_op_count:
            raise ValueError(
                f"Pre op count ({self.pre_op_count}) must be less than or equal "
                f"to post op count ({self.post_op_count})"
            )
        return self

    @property
    def multisig_bytes(self) -> bytes:
        return decode_solana_address(self.multisig)


class Proposal(BaseModel):
    """
    A governance proposal: metadata plus ordered operations.

    Operation ``i`` executes at nonce ``root_metadata.pre_op_count + i``.
    """

    model_config = _MODEL_CONFIG

    multisig_id: str = Field(..., alias="multisigId", description="32-byte multisig id")
    valid_until: int = Field(..., alias="validUntil", gt=0, le=VALID_UNTIL_MAX, strict=True)
    operations: list[Operation] = Field(default_factory=list, alias="ixs")
    root_metadata: RootMetadata = Field(..., alias="rootMetadata")

    @field_validator("multisig_id")
    @classmethod
    def validate_multisig_id(cls, v: str) -> str:
        if not is_hash(v):
            raise ValueError("Multisig ID must be a 32-byte hex string")
        return v.lower()

    @model_validator(mode="after")
    def validate_nonce_range(self) -> "Proposal":
        if self.operations and self.root_metadata.pre_op_count + len(self.operations) - 1 > U64_MAX:
            raise ValueError("Operation nonces overflow the u64 range")
        return self

    @property
    def multisig_id_bytes(self) -> bytes:
        return bytes.fromhex(self.multisig_id[2:])

    def nonce_of(self, index: int) -> int:
        """Nonce at which operation ``index`` executes."""
        if index < 0 or index >= len(self.operations):
            raise IndexError(
                f"Operation index {index} out of range for {len(self.operations)} operations"
            )
        return self.root_metadata.pre_op_count + index
