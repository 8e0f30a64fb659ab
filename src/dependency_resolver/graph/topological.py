"""Dependency-first ordering via depth-first post-order.

Two ways to flatten an EntityGraph into a processing order:

  merge  -- run an independent DFS from every node, producing that
            node's local order (everything reachable from it, leaves
            first).  Then merge the local orders longest-first, skipping
            anything already emitted.  Long chains get flattened before
            short ones, so the output reads close to a full topological
            sort even though each DFS knows nothing about the others.
            O(V * (V + E)).

  global -- one DFS over the whole graph with a shared "resolved" set.
            Classic post-order topological sort, O(V + E).

Both use two colors per traversal: "in progress" (on the current DFS
stack) and "resolved" (fully explored).  Reaching an in-progress node
again means we walked a back edge, i.e. a cycle, and we stop right
there.

The traversal keeps its own stack of (node, adjacency iterator) pairs
instead of recursing, so a 10,000-deep dependency chain is as fine as a
3-deep one.
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, TypeVar

from dependency_resolver.graph.adjacency import EntityGraph

T = TypeVar("T")

log = logging.getLogger(__name__)


class CyclicDependencyError(Exception):
    """Raised when resolution walks into an entity that is still in progress.

    Attributes:
        entity: the entity being visited when the back edge was found
        dependency: its dependency that was already on the DFS stack
        cycle_path: [dependency, ..., entity, dependency], each consecutive
            pair a real edge
    """

    def __init__(self, entity: object, dependency: object, cycle_path: list) -> None:
        self.entity = entity
        self.dependency = dependency
        self.cycle_path = cycle_path
        super().__init__(
            f"Cycle detected between {entity!r} and {dependency!r}: "
            + " -> ".join(repr(e) for e in cycle_path)
        )


def _visit(
    graph: EntityGraph[T],
    start: int,
    resolved: list[int],
    done: set[int],
) -> None:
    """Depth-first post-order walk from *start*.

    Appends every newly finished node index to *resolved* and *done*.
    Nodes already in *done* are skipped, which is what lets the global
    strategy share one set across all start nodes.
    """
    in_progress: set[int] = {start}
    stack: list[tuple[int, Iterator[int]]] = [
        (start, iter(graph.adjacent_indices(start)))
    ]
    while stack:
        node, pending = stack[-1]
        for adj in pending:
            if adj in done:
                continue
            if adj in in_progress:
                raise _cycle_error(graph, node, adj, [n for n, _ in stack])
            in_progress.add(adj)
            stack.append((adj, iter(graph.adjacent_indices(adj))))
            break
        else:
            stack.pop()
            in_progress.discard(node)
            done.add(node)
            resolved.append(node)


def _cycle_error(
    graph: EntityGraph[T], node: int, adj: int, path: list[int]
) -> CyclicDependencyError:
    loop = path[path.index(adj):] + [adj]
    entity = graph.entity_at(node)
    dependency = graph.entity_at(adj)
    log.warning("Circular dependency between %r and %r", entity, dependency)
    return CyclicDependencyError(
        entity, dependency, [graph.entity_at(i) for i in loop]
    )


def resolve_node(graph: EntityGraph[T], start: int) -> list[int]:
    """Local order for one node: everything reachable from it, leaves first.

    Raises CyclicDependencyError if a cycle is reachable from *start*.
    """
    resolved: list[int] = []
    _visit(graph, start, resolved, set())
    return resolved


def merge_resolutions(
    graph: EntityGraph[T], local_orders: Iterable[list[int]]
) -> list[T]:
    """Flatten per-node local orders into one list of entities.

    Longest local order first; ties keep their original order because
    sorted() is stable even with reverse=True.
    """
    emitted: set[int] = set()
    order: list[T] = []
    for local in sorted(local_orders, key=len, reverse=True):
        for idx in local:
            if idx not in emitted:
                emitted.add(idx)
                order.append(graph.entity_at(idx))
    return order


def merged_sort(graph: EntityGraph[T]) -> list[T]:
    """Per-node DFS plus length-sorted merge.

    Every local order is computed before merging, so a cycle anywhere in
    the graph aborts the whole call.
    """
    local_orders = [resolve_node(graph, idx) for idx in range(graph.node_count)]
    return merge_resolutions(graph, local_orders)


def topological_sort(graph: EntityGraph[T]) -> list[T]:
    """Return entities in dependency order (dependencies first).

    Single DFS with a shared resolved set, started from each node in
    registration order.  Raises CyclicDependencyError if the graph
    contains a cycle.
    """
    resolved: list[int] = []
    done: set[int] = set()
    for idx in range(graph.node_count):
        if idx not in done:
            _visit(graph, idx, resolved, done)
    return [graph.entity_at(i) for i in resolved]
