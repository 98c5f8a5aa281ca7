"""Plain-text rendering of lineage trees and alignments."""

from __future__ import annotations

from typing import TYPE_CHECKING

from taxalign.ranks import format_rank

if TYPE_CHECKING:
    from taxalign.alignment import LineageAlignment
    from taxalign.lineage_tree import LineageNode, LineageTree


def format_node(node: LineageNode) -> str:
    """Format a node as ``name (rank)``."""
    return f"{node.name} ({format_rank(node.rank)})"


def truncate(text: str, width: int) -> str:
    """Cut ``text`` to ``width`` characters, marking the cut with an ellipsis."""
    if len(text) <= width:
        return text
    return text[: max(width - 1, 0)] + "…"


def render_subtree(
    tree: LineageTree,
    node: LineageNode | None = None,
    *,
    max_depth: int = 3,
    max_children: int = 5,
) -> str:
    """Render a subtree as an indented outline.

    Args:
        tree: The tree to render.
        node: Starting node (defaults to the root).
        max_depth: Maximum number of levels below ``node`` to show.
        max_children: Maximum children to show per node.

    Returns:
        The outline, one node per line.
    """
    if node is None:
        node = tree.root

    lines = [f"{format_node(node)} [{len(node.children)} children]"]
    _render_children(node, lines, "", max_depth, max_children)
    return "\n".join(lines)


def _render_children(
    node: LineageNode,
    lines: list[str],
    indent: str,
    max_depth: int,
    max_children: int,
) -> None:
    if max_depth <= 0:
        return

    children = node.sorted_children()
    shown = children[:max_children]
    for i, child in enumerate(shown):
        is_last = i == len(shown) - 1 and len(children) <= max_children
        prefix = "└── " if is_last else "├── "
        lines.append(f"{indent}{prefix}{format_node(child)} [{len(child.children)} children]")
        child_indent = indent + ("    " if is_last else "│   ")
        _render_children(child, lines, child_indent, max_depth - 1, max_children)

    if len(children) > max_children:
        lines.append(f"{indent}└── ... and {len(children) - max_children} more")


def print_subtree(
    tree: LineageTree,
    node: LineageNode | None = None,
    *,
    max_depth: int = 3,
    max_children: int = 5,
) -> None:
    """Print a subtree for debugging/visualization."""
    print(render_subtree(tree, node, max_depth=max_depth, max_children=max_children))


def render_alignment(
    alignment: LineageAlignment,
    *,
    column_width: int = 24,
    label_width: int = 14,
) -> str:
    """Render an alignment as a text table, one line per non-empty row.

    Each cell gets ``column_width`` characters per lineage end point it
    spans and starts at the position given by its offset, so nodes on
    the same lineage line up across rows.

    Args:
        alignment: The alignment to render.
        column_width: Characters allotted to one end point.
        label_width: Characters allotted to the rank label.

    Returns:
        The rendered table.
    """
    lines = []
    for row in alignment.cleaned_up:
        line = f"{format_rank(row.rank):<{label_width}}|"
        for cell in row.cells:
            start = label_width + 1 + cell.offset * column_width
            if len(line) < start:
                line += " " * (start - len(line))
            width = cell.span * column_width
            line += f" {truncate(cell.node.name, width - 2):<{width - 1}}"
        lines.append(line.rstrip())
    return "\n".join(lines)


def print_alignment(
    alignment: LineageAlignment,
    *,
    column_width: int = 24,
    label_width: int = 14,
) -> None:
    """Print an alignment as a text table."""
    print(render_alignment(alignment, column_width=column_width, label_width=label_width))
