from __future__ import annotations

import pytest

from taxalign import (
    RANK_ORDER,
    TaxonomyError,
    UnknownRankError,
    compare_ranks,
    format_rank,
    is_higher_rank,
    normalize_rank,
    rank_index,
)


def test_catalog_starts_with_origin_and_ends_with_subform():
    assert RANK_ORDER[0] == "origin"
    assert RANK_ORDER[1] == "superkingdom"
    assert RANK_ORDER[-1] == "subform"
    assert len(RANK_ORDER) == len(set(RANK_ORDER)) == 39


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("genus", "genus"),
        (" Family ", "family"),
        ("CLASS", "class"),
        ("no rank", None),
        ("", None),
        (None, None),
        ("clade", None),
        ("gen", None),
    ],
)
def test_normalize_rank(value, expected):
    assert normalize_rank(value) == expected


def test_rank_index():
    assert rank_index("origin") == 0
    assert rank_index("species") == RANK_ORDER.index("species")


def test_rank_index_unknown():
    with pytest.raises(UnknownRankError) as excinfo:
        rank_index("clade")

    assert excinfo.value.rank == "clade"
    assert isinstance(excinfo.value, TaxonomyError)
    assert isinstance(excinfo.value, ValueError)


def test_compare_ranks_uses_catalog_position():
    # Alphabetically "class" < "order" < "phylum", but the hierarchy differs
    assert compare_ranks("phylum", "class") == -1
    assert compare_ranks("order", "class") == 1
    assert compare_ranks("genus", "genus") == 0
    assert is_higher_rank("kingdom", "subkingdom")
    assert not is_higher_rank("species", "genus")
    assert sorted(["species", "family", "kingdom"], key=rank_index) == [
        "kingdom",
        "family",
        "species",
    ]


def test_format_rank():
    assert format_rank("genus") == "genus"
    assert format_rank(None) == "no rank"
