#!/usr/bin/env python3
"""Merge a few NCBI lineages, then print and plot their rank alignment.

Usage:
    python examples/align_lineages.py [--plot]
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from taxalign import (
    LineageAlignment,
    LineageTree,
    TaxonRecord,
    print_alignment,
    print_subtree,
)

RECORDS = [
    {
        "id": 9606,
        "name": "Homo sapiens",
        "rank": "species",
        "common_name": "human",
        "lineage": [
            (131567, "cellular organisms", "no rank"),
            (2759, "Eukaryota", "superkingdom"),
            (33154, "Opisthokonta", "no rank"),
            (33208, "Metazoa", "kingdom"),
            (7711, "Chordata", "phylum"),
            (40674, "Mammalia", "class"),
            (9443, "Primates", "order"),
            (9604, "Hominidae", "family"),
            (9605, "Homo", "genus"),
        ],
    },
    {
        "id": 9598,
        "name": "Pan troglodytes",
        "rank": "species",
        "common_name": "chimpanzee",
        "lineage": [
            (131567, "cellular organisms", "no rank"),
            (2759, "Eukaryota", "superkingdom"),
            (33154, "Opisthokonta", "no rank"),
            (33208, "Metazoa", "kingdom"),
            (7711, "Chordata", "phylum"),
            (40674, "Mammalia", "class"),
            (9443, "Primates", "order"),
            (9604, "Hominidae", "family"),
            (9596, "Pan", "genus"),
        ],
    },
    {
        "id": 58334,
        "name": "Quercus ilex",
        "rank": "species",
        "common_name": "holm oak",
        "lineage": [
            (131567, "cellular organisms", "no rank"),
            (2759, "Eukaryota", "superkingdom"),
            (33090, "Viridiplantae", "kingdom"),
            (35493, "Streptophyta", "phylum"),
            (3193, "Embryophyta", "no rank"),
            (58023, "Tracheophyta", "no rank"),
            (71275, "rosids", "subclass"),
            (3502, "Fagales", "order"),
            (3503, "Fagaceae", "family"),
            (3511, "Quercus", "genus"),
        ],
    },
]


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--plot", action="store_true", help="Save the alignment as a PNG")
    args = parser.parse_args()

    tree = LineageTree()
    nodes = tree.register_all(TaxonRecord.from_dict(data) for data in RECORDS)

    print("=" * 70)
    print("LINEAGE TREE")
    print("=" * 70)
    print_subtree(tree, max_depth=12, max_children=3)
    print(f"\n  Nodes: {tree.node_count:,}  End points: {len(tree.end_points):,}")

    print("\n" + "=" * 70)
    print("CLOSEST COMMON ANCESTORS")
    print("=" * 70)
    print(f"  Human & chimpanzee: {tree.closest_common_ancestor(nodes[:2]).name}")
    print(f"  All three:          {tree.closest_common_ancestor(nodes).name}")

    print("\n" + "=" * 70)
    print("RANK ALIGNMENT")
    print("=" * 70)
    alignment = LineageAlignment(tree)
    print_alignment(alignment, column_width=22)

    if args.plot:
        import matplotlib.pyplot as plt

        from taxalign.plot import plot_alignment

        ax = plot_alignment(alignment)
        output_path = Path(__file__).parent / "alignment.png"
        ax.figure.savefig(output_path, dpi=150, bbox_inches="tight")
        plt.close(ax.figure)
        print(f"\nSaved plot to: {output_path}")


if __name__ == "__main__":
    main()
