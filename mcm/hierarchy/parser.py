"""
Hierarchy Compiler
Compiles the nested multisig DSL into flat on-chain arrays.

Grammar:
    node     := multisig | signer
    multisig := "m:" name ":" required "o" total ["(" node ("," node)* ")"]
    signer   := "s:" address

Example:
    m:root:1o2(s:0xAAAA...,m:child:2o3(s:0xBBBB...,s:0xCCCC...,s:0xDDDD...))

Numbering Rules:
1. Group ids are assigned depth-first, pre-order, from a single counter;
   the root is group 0
2. Each group's parent is its enclosing multisig; the root is its own parent
3. Signers get no group id; they belong to their enclosing multisig
4. Only ``required`` is written to the quorum array; ``total`` is checked
   for syntax and ``required <= total`` but never persisted

Any structural or semantic violation raises HierarchySyntaxException at the
first offending token; no partial result is returned.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field

from mcm.crypto.encoding import normalize_evm_address
from mcm.schemas.errors import CapacityExceededException, HierarchySyntaxException
from mcm.schemas.hierarchy import (
    MAX_NUM_GROUPS,
    Group,
    ParsedHierarchy,
    Quorum,
    Signer,
)


MULTISIG_PREFIX = "m:"
SIGNER_PREFIX = "s:"

# Quorum values are stored as u8 on-chain
MAX_QUORUM_VALUE = 255

_MULTISIG_HEADER = re.compile(r"m:([^:,()\s]+):([0-9]+)o([0-9]+)")


@dataclass
class _ParseState:
    """Mutable state threaded through the recursive descent."""

    next_group_id: int = 0
    groups: list[Group] = field(default_factory=list)
    signers: list[Signer] = field(default_factory=list)
    group_quorums: list[int] = field(default_factory=lambda: [0] * MAX_NUM_GROUPS)
    group_parents: list[int] = field(default_factory=lambda: [0] * MAX_NUM_GROUPS)

    def allocate_group_id(self, token: str) -> int:
        if self.next_group_id >= MAX_NUM_GROUPS:
            raise CapacityExceededException(
                f"Hierarchy declares more than {MAX_NUM_GROUPS} groups",
                limit=MAX_NUM_GROUPS,
                token=token,
            )
        group_id = self.next_group_id
        self.next_group_id += 1
        return group_id

    def build(self) -> ParsedHierarchy:
        return ParsedHierarchy(
            groups=self.groups,
            signers=self.signers,
            signer_groups=[s.group_id for s in self.signers],
            group_quorums=self.group_quorums,
            group_parents=self.group_parents,
        )


def check_balanced_parentheses(text: str) -> None:
    """
    Ensure every "(" has a matching ")".

    Raises:
        HierarchySyntaxException: On the first unmatched parenthesis
    """
    depth = 0
    for pos, char in enumerate(text):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise HierarchySyntaxException(
                    f"Unmatched closing parenthesis at position {pos}",
                    token=text[: pos + 1][-24:],
                    details={"position": pos},
                )
    if depth > 0:
        raise HierarchySyntaxException(
            f"Unmatched opening parenthesis ({depth} left open)",
            token=text[-24:],
        )


def split_top_level(text: str) -> list[str]:
    """
    Split comma-separated children at parenthesis depth zero.

    Commas nested inside a child's own parentheses are kept. Empty
    items are returned as empty strings so the caller can reject them.

    Example:
        >>> split_top_level("s:0x1,m:a:1o2(s:0x2,s:0x3)")
        ['s:0x1', 'm:a:1o2(s:0x2,s:0x3)']
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0

    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    parts.append("".join(current).strip())
    return parts


def _matching_paren(text: str, open_index: int) -> int:
    depth = 0
    for pos in range(open_index, len(text)):
        if text[pos] == "(":
            depth += 1
        elif text[pos] == ")":
            depth -= 1
            if depth == 0:
                return pos
    raise HierarchySyntaxException(
        "Unmatched opening parenthesis",
        token=text[open_index:][:24],
    )


def _parse_quorum(header: str) -> tuple[str, Quorum]:
    match = _MULTISIG_HEADER.fullmatch(header)
    if match is None:
        raise HierarchySyntaxException(
            f"Invalid multisig format: {header!r}. Expected m:name:XoY",
            token=header,
        )

    name, required_str, total_str = match.groups()
    required, total = int(required_str), int(total_str)

    if required > MAX_QUORUM_VALUE or total > MAX_QUORUM_VALUE:
        raise HierarchySyntaxException(
            f"Quorum {required}o{total} exceeds {MAX_QUORUM_VALUE}",
            token=header,
        )
    if required > total:
        raise HierarchySyntaxException(
            f"Invalid quorum {required}o{total}: required exceeds total",
            token=header,
        )
    return name, Quorum(required=required, total=total)


def _parse_multisig(node: str, parent_group_id: int | None, state: _ParseState) -> None:
    paren_index = node.find("(")
    if paren_index == -1:
        header, children_text = node, None
    else:
        close_index = _matching_paren(node, paren_index)
        if close_index != len(node) - 1:
            raise HierarchySyntaxException(
                f"Unexpected text after group members: {node[close_index + 1:]!r}",
                token=node[close_index + 1:],
            )
        header = node[:paren_index].strip()
        children_text = node[paren_index + 1:close_index]

    name, quorum = _parse_quorum(header)

    group_id = state.allocate_group_id(header)
    parent = group_id if parent_group_id is None else parent_group_id

    state.groups.append(
        Group(group_id=group_id, name=name, quorum=quorum, parent_group_id=parent)
    )
    state.group_quorums[group_id] = quorum.required
    state.group_parents[group_id] = parent

    if children_text is None:
        return

    if not children_text.strip():
        raise HierarchySyntaxException(
            f"Empty member list for multisig {name!r}",
            token=node,
        )

    for child in split_top_level(children_text):
        if not child:
            raise HierarchySyntaxException(
                f"Empty member in multisig {name!r}",
                token=children_text,
            )
        _parse_node(child, group_id, state)


def _parse_signer(node: str, parent_group_id: int | None, state: _ParseState) -> None:
    token = node[len(SIGNER_PREFIX):].strip()
    try:
        address = normalize_evm_address(token)
    except ValueError as e:
        raise HierarchySyntaxException(str(e), token=token) from e

    # A signer outside any multisig belongs to the root group
    group_id = 0 if parent_group_id is None else parent_group_id
    state.signers.append(Signer(address=address, group_id=group_id))


def _parse_node(node: str, parent_group_id: int | None, state: _ParseState) -> None:
    node = node.strip()
    if node.startswith(MULTISIG_PREFIX):
        _parse_multisig(node, parent_group_id, state)
    elif node.startswith(SIGNER_PREFIX):
        _parse_signer(node, parent_group_id, state)
    else:
        raise HierarchySyntaxException(
            f"Invalid node {node!r}. Must start with m: or s:",
            token=node,
        )


def parse_hierarchy(text: str) -> ParsedHierarchy:
    """
    Compile a hierarchy DSL string into a ParsedHierarchy.

    Args:
        text: DSL text; must start with a multisig node

    Returns:
        ParsedHierarchy with groups numbered depth-first pre-order

    Raises:
        HierarchySyntaxException: On malformed input
        CapacityExceededException: If more than MAX_NUM_GROUPS groups are declared
    """
    if not isinstance(text, str) or not text.strip():
        raise HierarchySyntaxException("Hierarchy cannot be empty", token="")

    text = text.strip()
    check_balanced_parentheses(text)

    if not text.startswith(MULTISIG_PREFIX):
        raise HierarchySyntaxException(
            "Structure must start with a multisig (m:name:XoY)",
            token=text[:24],
        )

    state = _ParseState()
    _parse_node(text, None, state)
    return state.build()


__all__ = [
    "MULTISIG_PREFIX",
    "SIGNER_PREFIX",
    "MAX_QUORUM_VALUE",
    "check_balanced_parentheses",
    "split_top_level",
    "parse_hierarchy",
]
