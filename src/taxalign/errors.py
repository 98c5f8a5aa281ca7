"""Exceptions raised by taxalign."""

from __future__ import annotations


class TaxonomyError(Exception):
    """Base class for all taxalign errors."""


class UnregisteredNodeError(TaxonomyError):
    """A taxon passed to an ancestry query is not part of the queried tree."""

    def __init__(self, identifiers: list) -> None:
        self.identifiers = identifiers
        super().__init__(f"Taxa not registered in this tree: {identifiers!r}")


class InsufficientInputError(TaxonomyError):
    """Fewer than two distinct taxa were passed to a common-ancestor query."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"At least 2 distinct taxa are required, got {count}")


class UnknownRankError(TaxonomyError, ValueError):
    """A rank label is not part of the canonical catalog."""

    def __init__(self, rank: str) -> None:
        self.rank = rank
        super().__init__(f"Unknown taxonomic rank: {rank!r}")


class InvalidRecordError(TaxonomyError, ValueError):
    """A decoded mapping cannot be turned into a taxon record."""
