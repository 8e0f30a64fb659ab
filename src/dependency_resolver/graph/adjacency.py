"""Entity graph stored as an arena of nodes with index-based edges.

Every distinct entity gets exactly one Node, appended to a list in
registration order.  Edges are stored on the source node as a list of
indices into that same list, so the graph never holds references from
one node object to another and cycles in the data cost nothing to
represent.

Lookup is a dict keyed by the entity itself.  Entities that are not
hashable (dicts, lists, dataclasses with eq=True and no frozen) are
still accepted: they live in a side list and are found by a linear
equality scan, which is fine for the handful of such values a caller
normally registers.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, TypeVar

T = TypeVar("T")


@dataclass(slots=True)
class Node(Generic[T]):
    """One vertex: the wrapped entity plus its outgoing edges."""
    entity: T
    adjacent: list[int] = field(default_factory=list)  # indices, declaration order


class EntityGraph(Generic[T]):
    """Directed graph over caller entities, one node per distinct entity.

    The node set only grows.  Duplicate edges are kept as given; they do
    not change any ordering computed from the graph.
    """

    __slots__ = ("_nodes", "_index", "_unhashable")

    def __init__(self) -> None:
        self._nodes: list[Node[T]] = []
        self._index: dict[Any, int] = {}
        self._unhashable: list[int] = []

    # ---- mutation --------------------------------------------------------

    def add_entity(self, entity: T) -> int:
        """Return the node index for *entity*, creating the node if needed."""
        idx = self._lookup(entity)
        if idx is not None:
            return idx
        idx = len(self._nodes)
        self._nodes.append(Node(entity))
        try:
            self._index[entity] = idx
        except TypeError:
            self._unhashable.append(idx)
        return idx

    def add_edge(self, src: T, dst: T) -> None:
        """Add a directed edge src -> dst ("src depends on dst").

        Creates both nodes if they are missing.
        """
        src_idx = self.add_entity(src)
        dst_idx = self.add_entity(dst)
        self._nodes[src_idx].adjacent.append(dst_idx)

    # ---- queries ---------------------------------------------------------

    def _lookup(self, entity: T) -> int | None:
        try:
            return self._index.get(entity)
        except TypeError:
            for idx in self._unhashable:
                if self._nodes[idx].entity == entity:
                    return idx
            return None

    def index_of(self, entity: T) -> int:
        """Node index of *entity*.  Raises ValueError if unknown."""
        idx = self._lookup(entity)
        if idx is None:
            raise ValueError(f"Entity {entity!r} not found")
        return idx

    def has_entity(self, entity: T) -> bool:
        return self._lookup(entity) is not None

    def entity_at(self, idx: int) -> T:
        return self._nodes[idx].entity

    def adjacent_indices(self, idx: int) -> list[int]:
        return self._nodes[idx].adjacent

    def adjacent(self, entity: T) -> list[T]:
        """Direct dependencies of *entity*, in declaration order."""
        node = self._nodes[self.index_of(entity)]
        return [self._nodes[i].entity for i in node.adjacent]

    def entities(self) -> Iterator[T]:
        """All entities in registration order."""
        return (node.entity for node in self._nodes)

    def edges(self) -> Iterator[tuple[T, T]]:
        for node in self._nodes:
            for dst in node.adjacent:
                yield node.entity, self._nodes[dst].entity

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(node.adjacent) for node in self._nodes)

    # ---- dunder ----------------------------------------------------------

    def __contains__(self, entity: object) -> bool:
        return self.has_entity(entity)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self.node_count

    def __repr__(self) -> str:
        return f"EntityGraph(nodes={self.node_count}, edges={self.edge_count})"
