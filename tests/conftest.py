from __future__ import annotations

import pytest

from taxalign import LineageTree, TaxonRecord

QUERCUS_LINEAGE = [
    (101, "Eukaryota", "superkingdom"),
    (201, "Viridiplantae", "kingdom"),
    (301, "Streptophyta", "phylum"),
    (401, "Fagales", "order"),
    (501, "Fagaceae", "family"),
    (601, "Quercus", "genus"),
]

HOMO_LINEAGE = [
    (101, "Eukaryota", "superkingdom"),
    (202, "Metazoa", "kingdom"),
    (302, "Chordata", "phylum"),
    (402, "Primates", "order"),
    (502, "Hominidae", "family"),
    (602, "Homo", "genus"),
]

XIPHOPHORUS_LINEAGE = [
    (101, "Eukaryota", "superkingdom"),
    (202, "Metazoa", "kingdom"),
    (302, "Chordata", "phylum"),
    (403, "Cyprinodontiformes", "order"),
    (503, "Poeciliidae", "family"),
    (603, "Xiphophorus", "genus"),
]


@pytest.fixture
def tree() -> LineageTree:
    return LineageTree()


@pytest.fixture
def quercus_ilex() -> TaxonRecord:
    return TaxonRecord(1, "Quercus ilex", "species", QUERCUS_LINEAGE)


@pytest.fixture
def homo_sapiens() -> TaxonRecord:
    return TaxonRecord(2, "Homo sapiens", "species", HOMO_LINEAGE)


@pytest.fixture
def xiphophorus() -> TaxonRecord:
    return TaxonRecord(3, "Xiphophorus hellerii", "species", XIPHOPHORUS_LINEAGE)


@pytest.fixture
def quercus_robur() -> TaxonRecord:
    return TaxonRecord(4, "Quercus robur", "species", QUERCUS_LINEAGE)


# Full NCBI lineages, as returned by the Taxonomy database

NCBI_HOMO_SAPIENS = TaxonRecord(
    9606,
    "Homo sapiens",
    "species",
    [
        (131567, "cellular organisms", "no rank"),
        (2759, "Eukaryota", "superkingdom"),
        (33154, "Opisthokonta", "no rank"),
        (33208, "Metazoa", "kingdom"),
        (6072, "Eumetazoa", "no rank"),
        (33213, "Bilateria", "no rank"),
        (33511, "Deuterostomia", "no rank"),
        (7711, "Chordata", "phylum"),
        (89593, "Craniata", "subphylum"),
        (7742, "Vertebrata", "no rank"),
        (7776, "Gnathostomata", "no rank"),
        (117570, "Teleostomi", "no rank"),
        (117571, "Euteleostomi", "no rank"),
        (8287, "Sarcopterygii", "no rank"),
        (1338369, "Dipnotetrapodomorpha", "no rank"),
        (32523, "Tetrapoda", "no rank"),
        (32524, "Amniota", "no rank"),
        (40674, "Mammalia", "class"),
        (32525, "Theria", "no rank"),
        (9347, "Eutheria", "no rank"),
        (1437010, "Boreoeutheria", "no rank"),
        (314146, "Euarchontoglires", "superorder"),
        (9443, "Primates", "order"),
        (376913, "Haplorrhini", "suborder"),
        (314293, "Simiiformes", "infraorder"),
        (9526, "Catarrhini", "parvorder"),
        (314295, "Hominoidea", "superfamily"),
        (9604, "Hominidae", "family"),
        (207598, "Homininae", "subfamily"),
        (9605, "Homo", "genus"),
    ],
    common_name="human",
)

NCBI_QUERCUS_ILEX = TaxonRecord(
    58334,
    "Quercus ilex",
    "species",
    [
        (131567, "cellular organisms", "no rank"),
        (2759, "Eukaryota", "superkingdom"),
        (33090, "Viridiplantae", "kingdom"),
        (35493, "Streptophyta", "phylum"),
        (131221, "Streptophytina", "subphylum"),
        (3193, "Embryophyta", "no rank"),
        (58023, "Tracheophyta", "no rank"),
        (78536, "Euphyllophyta", "no rank"),
        (58024, "Spermatophyta", "no rank"),
        (3398, "Magnoliophyta", "no rank"),
        (1437183, "Mesangiospermae", "no rank"),
        (71240, "eudicotyledons", "no rank"),
        (91827, "Gunneridae", "no rank"),
        (1437201, "Pentapetalae", "no rank"),
        (71275, "rosids", "subclass"),
        (91835, "fabids", "no rank"),
        (3502, "Fagales", "order"),
        (3503, "Fagaceae", "family"),
        (3511, "Quercus", "genus"),
    ],
    common_name="holm oak",
)

NCBI_HIV_1 = TaxonRecord(
    11676,
    "Human immunodeficiency virus 1",
    "species",
    [
        (10239, "Viruses", "superkingdom"),
        (35268, "Retro-transcribing viruses", "no rank"),
        (11632, "Retroviridae", "family"),
        (327045, "Orthoretrovirinae", "subfamily"),
        (11646, "Lentivirus", "genus"),
        (11652, "Primate lentivirus group", "no rank"),
    ],
)


@pytest.fixture
def ncbi_records() -> list[TaxonRecord]:
    return [NCBI_HOMO_SAPIENS, NCBI_QUERCUS_ILEX, NCBI_HIV_1]


@pytest.fixture
def ncbi_tree(ncbi_records: list[TaxonRecord]) -> LineageTree:
    tree = LineageTree()
    tree.register_all(ncbi_records)
    return tree
