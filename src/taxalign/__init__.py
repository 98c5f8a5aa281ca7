"""Taxalign - Merge taxon lineages and align them by rank."""

__version__ = "0.1.0"

# Canonical ranks
from taxalign.ranks import (
    NO_RANK,
    ORIGIN,
    RANK_ORDER,
    RANK_PRIORITY,
    compare_ranks,
    format_rank,
    is_higher_rank,
    normalize_rank,
    rank_index,
)

# Errors
from taxalign.errors import (
    InsufficientInputError,
    InvalidRecordError,
    TaxonomyError,
    UnknownRankError,
    UnregisteredNodeError,
)

# Input records
from taxalign.records import LineageItem, TaxonRecord

# Lineage tree
from taxalign.lineage_tree import ROOT_IDENTIFIER, LineageNode, LineageTree

# Alignment
from taxalign.alignment import AlignmentCell, AlignmentRow, LineageAlignment

# Text rendering
from taxalign.display import (
    format_node,
    print_alignment,
    print_subtree,
    render_alignment,
    render_subtree,
)

__all__ = [
    # Ranks
    "NO_RANK",
    "ORIGIN",
    "RANK_ORDER",
    "RANK_PRIORITY",
    "compare_ranks",
    "format_rank",
    "is_higher_rank",
    "normalize_rank",
    "rank_index",
    # Errors
    "InsufficientInputError",
    "InvalidRecordError",
    "TaxonomyError",
    "UnknownRankError",
    "UnregisteredNodeError",
    # Records
    "LineageItem",
    "TaxonRecord",
    # Tree
    "ROOT_IDENTIFIER",
    "LineageNode",
    "LineageTree",
    # Alignment
    "AlignmentCell",
    "AlignmentRow",
    "LineageAlignment",
    # Display
    "format_node",
    "print_alignment",
    "print_subtree",
    "render_alignment",
    "render_subtree",
]
