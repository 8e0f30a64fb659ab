"""Cycle detection in an EntityGraph using DFS three-color marking.

The three colors:
  WHITE  -- node not yet visited
  GRAY   -- node is on the current DFS path (ancestors of current node)
  BLACK  -- node fully explored (all descendants visited)

A back edge (an edge to a GRAY node) means the graph has a cycle.
Unlike resolution, this never raises: it answers "is there a loop, and
which entities form it?" so callers can report the problem before they
ask for an order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterator, TypeVar

from dependency_resolver.graph.adjacency import EntityGraph

T = TypeVar("T")

WHITE, GRAY, BLACK = 0, 1, 2


@dataclass(slots=True)
class CycleResult(Generic[T]):
    """Result of cycle detection."""
    has_cycle: bool
    cycle_path: list[T] | None = None


def detect_cycle(graph: EntityGraph[T]) -> CycleResult[T]:
    """Detect whether *graph* contains a directed cycle.

    Returns a CycleResult with has_cycle=True and the cycle path if one
    exists.  The cycle path is a list [v0, v1, ..., vk, v0] of entities
    where each consecutive pair is a directed edge.
    """
    color = [WHITE] * graph.node_count

    for root in range(graph.node_count):
        if color[root] != WHITE:
            continue
        color[root] = GRAY
        stack: list[tuple[int, Iterator[int]]] = [
            (root, iter(graph.adjacent_indices(root)))
        ]
        while stack:
            node, pending = stack[-1]
            for succ in pending:
                if color[succ] == GRAY:
                    # back edge: the GRAY nodes on the stack from succ
                    # down to node are the loop
                    path = [n for n, _ in stack]
                    loop = path[path.index(succ):] + [succ]
                    return CycleResult(
                        has_cycle=True,
                        cycle_path=[graph.entity_at(i) for i in loop],
                    )
                if color[succ] == WHITE:
                    color[succ] = GRAY
                    stack.append((succ, iter(graph.adjacent_indices(succ))))
                    break
            else:
                color[node] = BLACK
                stack.pop()

    return CycleResult(has_cycle=False, cycle_path=None)
