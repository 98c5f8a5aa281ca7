"""Canonical taxonomic ranks.

Ranks are plain lowercase strings. Their relative order comes from their
position in ``RANK_ORDER`` and never from alphabetical comparison.
"""

from __future__ import annotations

from taxalign.errors import UnknownRankError

# Sentinel rank of the synthetic root node
ORIGIN = "origin"

# Upstream spelling of "unranked"
NO_RANK = "no rank"

# Canonical ranks in hierarchical order (high to low)
RANK_ORDER = [
    ORIGIN,
    "superkingdom",
    "kingdom",
    "subkingdom",
    "infrakingdom",
    "superphylum",
    "phylum",
    "subphylum",
    "infraphylum",
    "microphylum",
    "superclass",
    "class",
    "subclass",
    "infraclass",
    "parvclass",
    "magnorder",
    "superorder",
    "order",
    "suborder",
    "infraorder",
    "parvorder",
    "superfamily",
    "family",
    "subfamily",
    "supertribe",
    "tribe",
    "subtribe",
    "genus",
    "subgenus",
    "section",
    "subsection",
    "series",
    "subseries",
    "species",
    "subspecies",
    "varietas",
    "subvarietas",
    "form",
    "subform",
]

# Rank priority for sorting (lower number = higher in hierarchy)
RANK_PRIORITY = {rank: i for i, rank in enumerate(RANK_ORDER)}


def normalize_rank(value: str | None) -> str | None:
    """Map an upstream rank label onto the canonical catalog.

    Matching is exact apart from case and surrounding whitespace. Empty
    values, ``"no rank"`` and labels outside the catalog are all treated
    as unranked.

    Args:
        value: Rank label as delivered by the data source.

    Returns:
        The canonical rank, or None if the value denotes no rank.
    """
    if not value:
        return None

    rank = value.strip().lower()
    if rank == NO_RANK or rank not in RANK_PRIORITY:
        return None
    return rank


def rank_index(rank: str) -> int:
    """Get the catalog position of a rank (0 is the origin)."""
    try:
        return RANK_PRIORITY[rank]
    except KeyError:
        raise UnknownRankError(rank) from None


def compare_ranks(a: str, b: str) -> int:
    """Compare two ranks by catalog position.

    Returns:
        -1 if ``a`` is higher in the hierarchy than ``b``, 1 if lower,
        0 if they are the same rank.
    """
    ia, ib = rank_index(a), rank_index(b)
    return (ia > ib) - (ia < ib)


def is_higher_rank(a: str, b: str) -> bool:
    """Check if rank ``a`` sits strictly above rank ``b``."""
    return compare_ranks(a, b) < 0


def format_rank(rank: str | None) -> str:
    """Format a rank for display."""
    return rank if rank else NO_RANK
