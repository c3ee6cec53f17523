"""
Schemas
File: hierarchy.py

Purpose: Flat, on-chain-storable representation of a nested multisig
approval structure, as produced by the hierarchy compiler.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Group arrays are written to a fixed-size on-chain structure
MAX_NUM_GROUPS = 32


class Quorum(BaseModel):
    """How many approvals out of how many members a group needs."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    required: int = Field(..., ge=0)
    total: int = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_required_le_total(self) -> "Quorum":
        if self.required > self.total:
            raise ValueError(
                f"Quorum requires {self.required} approvals but only has {self.total} members"
            )
        return self

    def __str__(self) -> str:
        return f"{self.required}o{self.total}"


class Group(BaseModel):
    """
    A multisig group. Group 0 is the root and is its own parent.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    group_id: int = Field(..., ge=0, lt=MAX_NUM_GROUPS)
    name: str = Field(..., min_length=1)
    quorum: Quorum
    parent_group_id: int = Field(..., ge=0, lt=MAX_NUM_GROUPS)

    @property
    def is_root(self) -> bool:
        return self.group_id == self.parent_group_id


class Signer(BaseModel):
    """An EVM signer assigned to its enclosing group."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(..., description="EIP-55 checksummed 20-byte address")
    group_id: int = Field(..., ge=0, lt=MAX_NUM_GROUPS)

    @property
    def address_bytes(self) -> bytes:
        return bytes.fromhex(self.address[2:])


class ParsedHierarchy(BaseModel):
    """
    Compiled hierarchy.

    ``group_quorums`` and ``group_parents`` are always MAX_NUM_GROUPS long;
    slots past the last group are zero. ``signer_groups[i]`` is the group
    of ``signers[i]``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    groups: list[Group] = Field(default_factory=list)
    signers: list[Signer] = Field(default_factory=list)
    signer_groups: list[int] = Field(default_factory=list)
    group_quorums: list[int] = Field(
        default_factory=lambda: [0] * MAX_NUM_GROUPS,
        min_length=MAX_NUM_GROUPS,
        max_length=MAX_NUM_GROUPS,
    )
    group_parents: list[int] = Field(
        default_factory=lambda: [0] * MAX_NUM_GROUPS,
        min_length=MAX_NUM_GROUPS,
        max_length=MAX_NUM_GROUPS,
    )

    @property
    def num_groups(self) -> int:
        return len(self.groups)

    def group(self, group_id: int) -> Group:
        """Look up a group by id."""
        for g in self.groups:
            if g.group_id == group_id:
                return g
        raise KeyError(f"No group with id {group_id}")

    def signers_in(self, group_id: int) -> list[Signer]:
        """Signers directly assigned to a group, in declaration order."""
        return [s for s in self.signers if s.group_id == group_id]

    def child_groups(self, group_id: int) -> list[Group]:
        """Groups whose parent is ``group_id``, excluding the root self-loop."""
        return [
            g for g in self.groups
            if g.parent_group_id == group_id and g.group_id != group_id
        ]
