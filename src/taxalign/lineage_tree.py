"""Shared lineage tree built from taxon records.

Each registered record contributes its whole ancestor chain to a single
tree rooted at a synthetic "origin" node. Ancestors already present in
the tree are reused, so records sharing part of their lineage share the
corresponding nodes.
"""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, Any

from taxalign.errors import InsufficientInputError, UnregisteredNodeError
from taxalign.ranks import ORIGIN

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from taxalign.records import TaxonID, TaxonRecord

logger = logging.getLogger(__name__)

# Identifier of the synthetic root; never a valid upstream ID
ROOT_IDENTIFIER = -1

# Separator used when joining lineage names into a sort key
SORT_KEY_SEPARATOR = ";"


def _identifier_of(taxon: Any) -> TaxonID:
    """Get the identifier of a record, lineage item, node or raw ID."""
    return getattr(taxon, "identifier", taxon)


def sibling_order(node: LineageNode) -> tuple[str, str]:
    """Ordering key for nodes: sort key first, identifier on ties."""
    return (node.sort_key, str(node.identifier))


@dataclass(eq=False)
class LineageNode:
    """A node in the lineage tree.

    Attributes:
        identifier: The external taxon ID (``-1`` for the root).
        name: The scientific name of this taxon.
        rank: The canonical rank, or None for unranked taxa.
        children: Dictionary mapping child IDs to child nodes.
        common_name: A vernacular name, if known.
    """

    identifier: TaxonID
    name: str
    rank: str | None = None
    children: dict[TaxonID, LineageNode] = field(default_factory=dict, repr=False)
    common_name: str | None = None
    _parent: weakref.ref[LineageNode] | None = field(
        default=None, init=False, repr=False
    )

    @property
    def parent(self) -> LineageNode | None:
        """The parent node, or None for the root."""
        return self._parent() if self._parent is not None else None

    def add_child(self, child: LineageNode) -> None:
        """Add a child node."""
        child._parent = weakref.ref(self)
        self.children[child.identifier] = child

    def get_ancestors(self) -> list[LineageNode]:
        """Get all ancestors from the immediate parent up to the root."""
        ancestors = []
        current = self.parent
        while current is not None:
            ancestors.append(current)
            current = current.parent
        return ancestors

    def get_path_to_root(self) -> list[LineageNode]:
        """Get the path from this node to the root, both included."""
        return [self] + self.get_ancestors()

    def iter_descendants(self) -> Iterator[LineageNode]:
        """Iterate over all descendants in depth-first order."""
        stack = list(reversed(self.children.values()))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children.values()))

    def count_descendants(self) -> int:
        """Count all descendants of this node."""
        return sum(1 for _ in self.iter_descendants())

    def sorted_children(self) -> list[LineageNode]:
        """Get the children ordered by their sort key."""
        return sorted(self.children.values(), key=sibling_order)

    @property
    def depth(self) -> int:
        """Number of edges between this node and the root."""
        return len(self.get_ancestors())

    @property
    def span(self) -> int:
        """Number of lineage end points descending from this node.

        A node without children is an end point itself and has a span of 1.
        """
        if not self.children:
            return 1
        return sum(1 for node in self.iter_descendants() if not node.children)

    @cached_property
    def sort_key(self) -> str:
        """Lineage names from the root down to this node.

        Used to order nodes sharing a row while keeping the order of the
        rows above them. The lineage of a node never changes once it has
        been attached, so the value is computed once.
        """
        names = [node.name for node in reversed(self.get_path_to_root())]
        return SORT_KEY_SEPARATOR.join(names)

    def is_present_in_lineage_of(self, node: LineageNode) -> bool:
        """Check if this node is ``node`` itself or one of its ancestors."""
        current: LineageNode | None = node
        while current is not None:
            if current == self:
                return True
            current = current.parent
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineageNode):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash(self.identifier)

    def __repr__(self) -> str:
        return f"<{self.identifier}:{self.name}>"


class LineageTree:
    """A tree merging the lineages of a set of taxon records.

    The tree only grows: nodes are created by :meth:`register` and live as
    long as the tree. It is not safe to register records from several
    threads at once; callers sharing a tree must serialise access.
    """

    def __init__(self) -> None:
        """Initialize a tree holding only the root node."""
        self.root = LineageNode(identifier=ROOT_IDENTIFIER, name=ORIGIN, rank=ORIGIN)

        # Index for fast lookup by ID
        self._nodes_by_id: dict[TaxonID, LineageNode] = {ROOT_IDENTIFIER: self.root}

        # Statistics
        self.stats: dict[str, int] = {
            "records_registered": 0,
            "records_reused": 0,
            "nodes_created": 0,
        }

    def _create_node(
        self, item: Any, parent: LineageNode, common_name: str | None = None
    ) -> LineageNode:
        """Create a node for ``item`` under ``parent`` and index it."""
        node = LineageNode(
            identifier=item.identifier,
            name=item.name,
            rank=item.rank,
            common_name=common_name,
        )
        parent.add_child(node)
        self._nodes_by_id[node.identifier] = node
        self.stats["nodes_created"] += 1
        logger.debug("Created node %r under %r", node, parent)
        return node

    def register(self, record: TaxonRecord) -> LineageNode:
        """Register a record and its whole lineage in the tree.

        Registering an identifier that is already known does nothing.
        Ancestors already present in the tree are reused rather than
        duplicated. The lineage is stored as given, without validation.

        Args:
            record: The record to add.

        Returns:
            The node representing the record.
        """
        existing = self._nodes_by_id.get(record.identifier)
        if existing is not None:
            self.stats["records_reused"] += 1
            return existing

        current = self.root
        for ancestor in record.lineage_items:
            node = self._nodes_by_id.get(ancestor.identifier)
            if node is None:
                node = self._create_node(ancestor, current)
            current = node

        node = self._create_node(record, current, getattr(record, "common_name", None))
        self.stats["records_registered"] += 1
        return node

    def register_all(self, records: Iterable[TaxonRecord]) -> list[LineageNode]:
        """Register several records, returning their nodes in order."""
        return [self.register(record) for record in records]

    def node_for(self, taxon: Any) -> LineageNode | None:
        """Find the node for a record, lineage item, node or raw ID.

        Returns:
            The matching node, or None if nothing with that ID is registered.
        """
        return self._nodes_by_id.get(_identifier_of(taxon))

    def contains(self, taxon: Any) -> bool:
        """Check if the tree holds a node with the taxon's identifier."""
        return _identifier_of(taxon) in self._nodes_by_id

    def contains_all(self, taxa: Iterable[Any]) -> bool:
        """Check if the tree holds a node for every given taxon."""
        return all(self.contains(taxon) for taxon in taxa)

    def __contains__(self, taxon: Any) -> bool:
        return self.contains(taxon)

    def __len__(self) -> int:
        return len(self._nodes_by_id)

    @property
    def node_count(self) -> int:
        """Number of nodes in the tree, root included."""
        return len(self._nodes_by_id)

    @property
    def all_nodes(self) -> set[LineageNode]:
        """Every node in the tree, root included."""
        return set(self._nodes_by_id.values())

    @property
    def end_points(self) -> set[LineageNode]:
        """Nodes that have no children."""
        return {node for node in self._nodes_by_id.values() if not node.children}

    def closest_common_ancestor(self, taxa: Iterable[Any]) -> LineageNode:
        """Find the deepest node shared by the lineages of all given taxa.

        A taxon counts as part of its own lineage, so if one of the taxa
        is an ancestor of all the others it is returned.

        Args:
            taxa: Records, nodes, lineage items or raw IDs already
                registered in this tree.

        Returns:
            The closest common ancestor, the root if nothing else is shared.

        Raises:
            UnregisteredNodeError: If any taxon is not registered here.
            InsufficientInputError: If fewer than two distinct taxa are given.
        """
        identifiers = list(dict.fromkeys(_identifier_of(taxon) for taxon in taxa))

        missing = [i for i in identifiers if i not in self._nodes_by_id]
        if missing:
            raise UnregisteredNodeError(missing)

        if len(identifiers) < 2:
            raise InsufficientInputError(len(identifiers))

        first, *others = [self._nodes_by_id[i] for i in identifiers]
        candidate = first
        while candidate is not self.root:
            if all(candidate.is_present_in_lineage_of(node) for node in others):
                break
            candidate = candidate.parent
        return candidate

    def get_rank_counts(self) -> dict[str, int]:
        """Get the count of nodes at each rank, unranked nodes excluded."""
        counts: dict[str, int] = {}
        for node in self.root.iter_descendants():
            if node.rank:
                counts[node.rank] = counts.get(node.rank, 0) + 1
        return counts

    def get_depth_stats(self) -> dict[str, int | float]:
        """Get statistics about the depth of the tree's end points.

        Returns:
            Dictionary with min, max and average depth and the leaf count.
        """
        depths = [node.depth for node in self.root.iter_descendants() if not node.children]

        if not depths:
            return {"min_depth": 0, "max_depth": 0, "avg_depth": 0.0, "leaf_count": 0}

        return {
            "min_depth": min(depths),
            "max_depth": max(depths),
            "avg_depth": sum(depths) / len(depths),
            "leaf_count": len(depths),
        }
