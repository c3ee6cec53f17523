"""
CLI Hierarchy Command

Compile a hierarchy DSL string into the flat arrays written on-chain and
show the parsed tree for review.

Usage:
    mcm hierarchy "m:root:1o2(s:0x...,m:child:2o3(s:0x...,s:0x...,s:0x...))" [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from mcm.hierarchy import parse_hierarchy, render_hierarchy
from mcm.schemas.canonical import dumps_canonical
from mcm.schemas.errors import HierarchySyntaxException
from mcm.schemas.hierarchy import ParsedHierarchy
from mcm_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_error,
    wants_json,
)


logger = logging.getLogger(__name__)


@dataclass
class HierarchySummary:
    """Summary of a compiled hierarchy for CLI output."""
    num_groups: int = 0
    groups: list[dict[str, Any]] = field(default_factory=list)
    signers: list[str] = field(default_factory=list)
    signer_groups: list[int] = field(default_factory=list)
    group_quorums: list[int] = field(default_factory=list)
    group_parents: list[int] = field(default_factory=list)
    tree: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def build_summary(parsed: ParsedHierarchy) -> HierarchySummary:
    return HierarchySummary(
        num_groups=parsed.num_groups,
        groups=[
            {
                "group_id": g.group_id,
                "name": g.name,
                "required": g.quorum.required,
                "total": g.quorum.total,
                "parent_group_id": g.parent_group_id,
            }
            for g in parsed.groups
        ],
        signers=[s.address for s in parsed.signers],
        signer_groups=list(parsed.signer_groups),
        group_quorums=list(parsed.group_quorums),
        group_parents=list(parsed.group_parents),
        tree=render_hierarchy(parsed),
    )


def print_summary_human(summary: HierarchySummary) -> None:
    """Print the tree followed by the on-chain arrays."""
    for line in summary.tree:
        print(line)

    print(f"\ngroups: {summary.num_groups}")
    print(f"signers ({len(summary.signers)}):")
    for address, group_id in zip(summary.signers, summary.signer_groups):
        print(f"  {address} -> group {group_id}")
    print(f"group_quorums: {summary.group_quorums}")
    print(f"group_parents: {summary.group_parents}")


def hierarchy_cmd(args: Namespace) -> int:
    """Execute the hierarchy command."""
    try:
        parsed = parse_hierarchy(args.levels)
    except HierarchySyntaxException as e:
        print_error("parsing hierarchy", e)
        token = e.details.get("token")
        if token:
            print(f"  at: {token}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Parsed {parsed.num_groups} group(s) and {len(parsed.signers)} signer(s)")
    summary = build_summary(parsed)

    if wants_json(args):
        print(dumps_canonical(summary, indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS
