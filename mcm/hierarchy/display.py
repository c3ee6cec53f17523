"""
Tree rendering for compiled hierarchies, for visual review before a
configuration is submitted.

Example output:
    root:1o2 (group 0)
    ├── 0xAAAA00...000A
    └── child:2o3 (group 1)
        ├── 0xBBBB00...000B
        ├── 0xCCCC00...000C
        └── 0xDDDD00...000D
"""
from __future__ import annotations

from mcm.schemas.hierarchy import Group, ParsedHierarchy, Signer


def group_label(group: Group) -> str:
    return f"{group.name}:{group.quorum} (group {group.group_id})"


def abbreviate_address(address: str) -> str:
    return f"{address[:8]}...{address[-4:]}"


def render_hierarchy(parsed: ParsedHierarchy) -> list[str]:
    """
    Render a ParsedHierarchy as box-drawing tree lines.

    Signers are listed before child groups at each level.
    """
    if not parsed.groups:
        return []

    lines = [group_label(parsed.group(0))]
    visiting: set[int] = set()

    def render_children(group_id: int, indent: str) -> None:
        # Guards against hand-built hierarchies with parent cycles
        if group_id in visiting:
            lines.append(f"{indent}└── [CIRCULAR REFERENCE to group {group_id}]")
            return
        visiting.add(group_id)

        children: list[Signer | Group] = [
            *parsed.signers_in(group_id),
            *parsed.child_groups(group_id),
        ]
        for i, child in enumerate(children):
            is_last = i == len(children) - 1
            prefix = "└── " if is_last else "├── "
            if isinstance(child, Signer):
                lines.append(f"{indent}{prefix}{abbreviate_address(child.address)}")
            else:
                lines.append(f"{indent}{prefix}{group_label(child)}")
                render_children(child.group_id, indent + ("    " if is_last else "│   "))

        visiting.discard(group_id)

    render_children(0, "")
    return lines
