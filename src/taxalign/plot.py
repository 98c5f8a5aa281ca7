"""Draw a lineage alignment with matplotlib.

Each non-empty alignment row becomes a column of boxes, one per node,
whose height is proportional to the node's span. Lines join every node
to its parent so the merged lineages can be followed left to right.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from taxalign.ranks import format_rank

if TYPE_CHECKING:
    from matplotlib.axes import Axes

    from taxalign.alignment import LineageAlignment


def cell_positions(alignment: LineageAlignment) -> list[np.ndarray]:
    """Get the vertical centre of every cell, row by row.

    Returns:
        One array per non-empty row holding ``offset + span / 2`` for each
        of its cells, in cell order.
    """
    positions = []
    for row in alignment.cleaned_up:
        offsets = np.array([cell.offset for cell in row.cells], dtype=float)
        spans = np.array([cell.span for cell in row.cells], dtype=float)
        positions.append(offsets + spans / 2)
    return positions


def plot_alignment(
    alignment: LineageAlignment,
    ax: Axes | None = None,
    *,
    box_width: float = 0.8,
    fontsize: int = 7,
) -> Axes:
    """Plot an alignment as columns of boxes joined by lineage edges.

    Args:
        alignment: The alignment to draw.
        ax: Axes to draw on. A new figure is created if omitted.
        box_width: Width of each box, in column units.
        fontsize: Font size of the node labels.

    Returns:
        The axes holding the plot.
    """
    rows = alignment.cleaned_up
    if ax is None:
        _, ax = plt.subplots(figsize=(max(len(rows) * 1.2, 4), 6))

    centres: dict[int, tuple[float, float]] = {}
    for x, (row, ys) in enumerate(zip(rows, cell_positions(alignment))):
        for cell, y in zip(row.cells, ys):
            ax.add_patch(
                Rectangle(
                    (x - box_width / 2, cell.offset),
                    box_width,
                    cell.span,
                    facecolor="lightsteelblue" if row.rank else "whitesmoke",
                    edgecolor="slategray",
                )
            )
            ax.text(x, y, cell.node.name, ha="center", va="center", fontsize=fontsize, rotation=90)
            centres[id(cell.node)] = (x, y)

    for row in rows:
        for cell in row.cells:
            parent = cell.node.parent
            if parent is None or id(parent) not in centres:
                continue
            (x0, y0), (x1, y1) = centres[id(parent)], centres[id(cell.node)]
            ax.plot(
                [x0 + box_width / 2, x1 - box_width / 2],
                [y0, y1],
                color="gray",
                linewidth=0.8,
            )

    total_span = rows[0].span if rows else 1
    ax.set_xlim(-0.5, len(rows) - 0.5)
    ax.set_ylim(total_span, 0)
    ax.set_xticks(np.arange(len(rows)))
    ax.set_xticklabels([format_rank(row.rank) for row in rows], rotation=90, fontsize=fontsize)
    ax.set_yticks([])
    return ax
