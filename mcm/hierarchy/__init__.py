"""
Hierarchy Compiler
Parses the nested multisig DSL into flat on-chain arrays.

Usage:
    from mcm.hierarchy import parse_hierarchy, render_hierarchy

    parsed = parse_hierarchy("m:root:1o2(s:0x...,m:child:2o3(s:0x...,s:0x...,s:0x...))")
    parsed.group_quorums   # [1, 2, 0, ...] (32 slots)
    parsed.group_parents   # [0, 0, 0, ...] (32 slots)
    print("\\n".join(render_hierarchy(parsed)))
"""
from .parser import (
    MAX_QUORUM_VALUE,
    check_balanced_parentheses,
    parse_hierarchy,
    split_top_level,
)
from .display import render_hierarchy


__all__ = [
    "MAX_QUORUM_VALUE",
    "check_balanced_parentheses",
    "parse_hierarchy",
    "split_top_level",
    "render_hierarchy",
]
