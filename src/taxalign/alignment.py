"""Rank-aligned rows built from a lineage tree.

A :class:`LineageAlignment` lays every node of a :class:`LineageTree` out in
a sequence of rows so that all nodes sharing a canonical rank end up in the
same row, while runs of unranked nodes are placed in blank rows between
the ranked ones. When one branch needs more blank rows than the table
currently has before its next ranked node, a blank row is inserted for the
whole table, which keeps every other branch aligned as well.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from taxalign.lineage_tree import sibling_order
from taxalign.ranks import RANK_ORDER, format_rank

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from taxalign.lineage_tree import LineageNode, LineageTree

logger = logging.getLogger(__name__)


def _member_in_lineage(end_point: LineageNode, members: set[int]) -> LineageNode | None:
    """Find the node of ``end_point``'s lineage whose ``id`` is in ``members``."""
    current: LineageNode | None = end_point
    while current is not None:
        if id(current) in members:
            return current
        current = current.parent
    return None


@dataclass
class AlignmentCell:
    """A single node placed in an alignment row.

    Attributes:
        node: The placed node.
        offset: Vertical position of the cell, counted in lineage end
            points from the top of the table. ``-1`` until computed.
    """

    node: LineageNode
    offset: int = -1

    @property
    def span(self) -> int:
        """Number of lineage end points descending from the cell's node."""
        return self.node.span

    def __repr__(self) -> str:
        return f"<{self.node.identifier}:{self.node.name}@{self.offset}({self.span})>"


@dataclass
class AlignmentRow:
    """A row of the alignment.

    Attributes:
        rank: The canonical rank bound to the row, or None for a blank row.
        cells: The cells placed in the row, in placement order.
    """

    rank: str | None = None
    cells: list[AlignmentCell] = field(default_factory=list)

    @property
    def nodes(self) -> list[LineageNode]:
        """The nodes placed in the row, in placement order."""
        return [cell.node for cell in self.cells]

    @property
    def span(self) -> int:
        """Sum of the spans of the row's cells."""
        return sum(cell.span for cell in self.cells)

    @property
    def is_blank(self) -> bool:
        """Check if no canonical rank is bound to the row."""
        return self.rank is None

    def participates_in_lineage_of(self, end_point: LineageNode) -> bool:
        """Check if any node of this row is in the lineage of ``end_point``."""
        return _member_in_lineage(end_point, {id(cell.node) for cell in self.cells}) is not None

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[AlignmentCell]:
        return iter(self.cells)

    def __repr__(self) -> str:
        names = ", ".join(cell.node.name for cell in self.cells)
        return f"[{len(self.cells)}:{format_rank(self.rank)}]: {names}"


class LineageAlignment:
    """Align the nodes of a lineage tree in rank-bound rows.

    The table starts with one row per rank of ``hierarchy`` (the origin
    being row 0) and grows by inserting blank rows while the tree is
    walked depth-first from the root. Children are visited in ``sort_key``
    order, identifier breaking ties, so the result does not depend on the
    order in which records were registered.

    Args:
        tree: A populated lineage tree. It must not be modified while the
            alignment is being built.
        hierarchy: Ordered rank catalog, starting with the origin rank.
            Nodes whose rank is not in it are aligned as unranked.
    """

    def __init__(
        self,
        tree: LineageTree,
        *,
        hierarchy: Sequence[str] = RANK_ORDER,
    ) -> None:
        self.tree = tree
        self.hierarchy = list(hierarchy)
        self.rows: list[AlignmentRow] = [AlignmentRow(rank=rank) for rank in self.hierarchy]
        self.blank_rows_inserted = 0

        self._place_tree(tree.root)

        end_points = sorted(tree.end_points, key=sibling_order)
        self._update_offsets(end_points)

        logger.info(
            "Aligned %d nodes in %d rows (%d blank rows inserted)",
            tree.node_count,
            len(self.cleaned_up),
            self.blank_rows_inserted,
        )

    def row_index(self, rank: str) -> int:
        """Get the current index of the row bound to ``rank``, or -1."""
        for i, row in enumerate(self.rows):
            if row.rank == rank:
                return i
        return -1

    def row_of(self, node: LineageNode) -> int:
        """Get the index of the row holding ``node``, or -1."""
        for i, row in enumerate(self.rows):
            if any(cell.node is node for cell in row.cells):
                return i
        return -1

    @property
    def cleaned_up(self) -> list[AlignmentRow]:
        """The rows that hold at least one node."""
        return [row for row in self.rows if row.cells]

    def _insert_blank_row(self, index: int) -> AlignmentRow:
        row = AlignmentRow()
        self.rows.insert(index, row)
        self.blank_rows_inserted += 1
        logger.debug("Inserted blank row at %d", index)
        return row

    def _ensure_row(self, index: int) -> None:
        """Append blank rows until ``index`` is a valid row index."""
        while len(self.rows) <= index:
            self.rows.append(AlignmentRow())

    def _aligned_rank(self, node: LineageNode) -> str | None:
        """Get the node's rank if it takes part in the alignment."""
        if node.rank is not None and node.rank in self.hierarchy:
            return node.rank
        return None

    def _unranked_run_length(self, node: LineageNode) -> int:
        """Count rows between ``node`` and its closest ranked ancestor.

        This is 1 plus the number of unranked ancestors found before
        reaching a ranked one (or the root).
        """
        extra = 1
        current = node.parent
        while current is not None and current.parent is not None:
            if self._aligned_rank(current) is not None:
                break
            extra += 1
            current = current.parent
        return extra

    def _place_tree(self, root: LineageNode) -> None:
        """Place ``root`` and its descendants in depth-first order."""
        stack = [(root, 0)]
        while stack:
            node, depth = stack.pop()
            depth = self._place(node, depth)
            for child in reversed(node.sorted_children()):
                stack.append((child, depth + 1))

    def _place(self, node: LineageNode, depth: int) -> int:
        """Place ``node`` at ``depth`` or deeper and return its row."""
        while True:
            self._ensure_row(depth)
            rank = self._aligned_rank(node)

            if rank is not None:
                row = self.row_index(rank)
                if row == depth:
                    self.rows[depth].cells.append(AlignmentCell(node))
                    break
                if row > depth:
                    # Skip ahead to the rank's own row
                    depth = row
                    continue
                # Rank out of canonical order with respect to its ancestors
                self._insert_blank_row(depth).cells.append(AlignmentCell(node))
                break

            prior = depth - self._unranked_run_length(node)
            if any(self.rows[i].rank is not None for i in range(prior + 1, depth + 1)):
                self._insert_blank_row(depth)
                continue

            self.rows[depth].cells.append(AlignmentCell(node))
            break

        return depth

    def _update_offsets(self, end_points: list[LineageNode]) -> None:
        """Compute the vertical offset of every cell.

        Offsets are measured in end points: each cell starts below the
        accumulated span of the cells above it in the same row, moved down
        by one for every earlier end point whose lineage skips the row.
        """
        for row in self.rows:
            if not row.cells:
                continue

            # A lineage crosses a row at most once
            members = {id(cell.node) for cell in row.cells}
            skipped = 0
            skipped_before: dict[int, int] = {}
            for end_point in end_points:
                member = _member_in_lineage(end_point, members)
                if member is None:
                    skipped += 1
                else:
                    skipped_before.setdefault(id(member), skipped)

            elapsed_span = 0
            for cell in row.cells:
                cell.offset = elapsed_span + skipped_before.get(id(cell.node), skipped)
                elapsed_span += cell.span

    def to_records(self) -> list[dict[str, Any]]:
        """Export the non-empty rows as plain data.

        Returns:
            One dictionary per row with its position, rank, span and cells.
        """
        return [
            {
                "index": i,
                "rank": row.rank,
                "span": row.span,
                "cells": [
                    {
                        "identifier": cell.node.identifier,
                        "name": cell.node.name,
                        "rank": cell.node.rank,
                        "offset": cell.offset,
                        "span": cell.span,
                    }
                    for cell in row.cells
                ],
            }
            for i, row in enumerate(self.cleaned_up)
        ]

    def __len__(self) -> int:
        return len(self.cleaned_up)

    def __iter__(self) -> Iterator[AlignmentRow]:
        return iter(self.cleaned_up)

    def __repr__(self) -> str:
        return f"LineageAlignment(rows={len(self.cleaned_up)}, nodes={self.tree.node_count})"
