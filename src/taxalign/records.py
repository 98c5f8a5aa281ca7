"""Taxon records handed to the lineage tree.

These are the values produced by whatever fetches and decodes upstream
taxonomy data. The tree only needs the identifier, name, rank and the
ordered ancestor chain of each record.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union
from urllib.parse import urlencode

from taxalign.errors import InvalidRecordError
from taxalign.ranks import normalize_rank

TaxonID = Union[int, str]

NCBI_BROWSER_URL = "https://www.ncbi.nlm.nih.gov/Taxonomy/Browser/wwwtax.cgi"

# Upstream placeholder for a missing mitochondrial code
UNSPECIFIED = "Unspecified"


@dataclass(frozen=True, eq=False)
class LineageItem:
    """One ancestor in a record's lineage.

    Attributes:
        identifier: The external taxon ID.
        name: The scientific name of the ancestor.
        rank: The canonical rank, or None if the ancestor has no rank.
    """

    identifier: TaxonID
    name: str
    rank: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "rank", normalize_rank(self.rank))

    @property
    def has_rank(self) -> bool:
        """Check if the ancestor carries a canonical rank."""
        return self.rank is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineageItem):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash(self.identifier)

    def __str__(self) -> str:
        return f"{self.rank or 'no rank'}: {self.name}"


def _coerce_item(item: LineageItem | Iterable[Any]) -> LineageItem:
    if isinstance(item, LineageItem):
        return item
    identifier, name, *rest = item
    return LineageItem(identifier, name, rest[0] if rest else None)


@dataclass(frozen=True, eq=False)
class TaxonRecord:
    """A fully decoded taxon together with its lineage.

    Attributes:
        identifier: The external taxon ID.
        name: The scientific name.
        rank: The canonical rank, or None if the taxon has no rank.
        lineage_items: Ancestors ordered from the top of the hierarchy down
            to the immediate parent.
        common_name: A vernacular name, if known.
        genetic_code: Name of the main genetic code used by the taxon.
        mitochondrial_code: Name of the mitochondrial genetic code, if any.
    """

    identifier: TaxonID
    name: str
    rank: str | None = None
    lineage_items: tuple[LineageItem, ...] = field(default_factory=tuple)
    common_name: str | None = None
    genetic_code: str | None = None
    mitochondrial_code: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "rank", normalize_rank(self.rank))
        object.__setattr__(
            self,
            "lineage_items",
            tuple(_coerce_item(item) for item in self.lineage_items),
        )
        if self.mitochondrial_code == UNSPECIFIED:
            object.__setattr__(self, "mitochondrial_code", None)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TaxonRecord:
        """Build a record from an already-decoded mapping.

        Accepted keys are ``identifier`` (or ``id``), ``name``, ``rank``,
        ``lineage`` (or ``lineage_items``) holding mappings or
        ``(identifier, name, rank)`` triples, and the optional
        ``common_name``, ``genetic_code`` and ``mitochondrial_code``.

        Raises:
            InvalidRecordError: If the identifier or name is missing.
        """
        identifier = data.get("identifier", data.get("id"))
        name = data.get("name")
        if identifier is None or not name:
            raise InvalidRecordError(
                f"Record needs an identifier and a name, got {dict(data)!r}"
            )

        lineage = data.get("lineage", data.get("lineage_items")) or []
        items = []
        for entry in lineage:
            if isinstance(entry, Mapping):
                entry = (
                    entry.get("identifier", entry.get("id")),
                    entry.get("name", ""),
                    entry.get("rank"),
                )
            items.append(_coerce_item(entry))

        return cls(
            identifier=identifier,
            name=name,
            rank=data.get("rank"),
            lineage_items=tuple(items),
            common_name=data.get("common_name"),
            genetic_code=data.get("genetic_code"),
            mitochondrial_code=data.get("mitochondrial_code"),
        )

    @property
    def has_rank(self) -> bool:
        """Check if the taxon carries a canonical rank."""
        return self.rank is not None

    @property
    def url(self) -> str:
        """Get the NCBI Taxonomy Browser URL for this record."""
        return f"{NCBI_BROWSER_URL}?{urlencode({'id': self.identifier})}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TaxonRecord):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash(self.identifier)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"TaxonRecord({self.identifier!r}, {self.name!r}, rank={self.rank!r})"
