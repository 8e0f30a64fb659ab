"""Dependency resolver: register entities, get back a processing order.

The Resolver owns an EntityGraph and a caller-supplied dependency
function.  Registering an entity asks that function for the entity's
direct dependencies and wires one edge per dependency.  Resolving walks
the graph and returns every entity after all of the entities it
(transitively) depends on.

Usage:
    resolver = Resolver(lambda pkg: pkg.requires)
    for pkg in packages:
        resolver.register(pkg)
    install_order = resolver.resolve()   # raises CyclicDependencyError
"""
from __future__ import annotations

import logging
from collections import deque
from enum import Enum, auto
from typing import Callable, Generic, Iterable, TypeVar

from dependency_resolver.graph.adjacency import EntityGraph
from dependency_resolver.graph.cycle_detector import CycleResult, detect_cycle
from dependency_resolver.graph.topological import merged_sort, topological_sort

T = TypeVar("T")

DependencyFn = Callable[[T], Iterable[T]]

log = logging.getLogger(__name__)


class Strategy(Enum):
    MERGE = auto()   # independent DFS per node, longest local order first
    GLOBAL = auto()  # one DFS over the whole graph


class Resolver(Generic[T]):
    """Computes a dependency-first order over caller entities.

    Args:
        dependency_fn: maps an entity to its direct dependencies, in
            order.  Called once per register() call, never cached.
        strategy: how resolve() flattens the graph (default MERGE)
    """

    __slots__ = ("_dependency_fn", "_graph", "_strategy")

    def __init__(
        self,
        dependency_fn: DependencyFn[T],
        strategy: Strategy = Strategy.MERGE,
    ) -> None:
        self._dependency_fn = dependency_fn
        self._graph: EntityGraph[T] = EntityGraph()
        self._strategy = strategy

    @property
    def graph(self) -> EntityGraph[T]:
        return self._graph

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    def register(self, entity: T) -> None:
        """Add *entity* and an edge to each of its direct dependencies.

        Dependencies get nodes too, but their own dependencies are not
        looked up unless they are registered themselves.
        """
        self._register(entity)

    def register_all(self, entities: Iterable[T]) -> None:
        for entity in entities:
            self._register(entity)

    def register_tree(self, root: T) -> None:
        """Register *root* and everything reachable through dependency_fn.

        Breadth-first; each distinct entity is registered once per call,
        so shared dependencies and cycles do not loop forever.
        """
        seen: set[int] = set()
        queue: deque[T] = deque([root])
        while queue:
            entity = queue.popleft()
            idx = self._graph.add_entity(entity)
            if idx in seen:
                continue
            seen.add(idx)
            queue.extend(self._register(entity))

    def _register(self, entity: T) -> list[T]:
        self._graph.add_entity(entity)
        deps = list(self._dependency_fn(entity))
        for dep in deps:
            self._graph.add_edge(entity, dep)
        log.debug("Registered %r with %d dependencies", entity, len(deps))
        return deps

    def resolve(self) -> list[T]:
        """Return every known entity, dependencies before dependents.

        Raises CyclicDependencyError if the graph has a cycle; nothing
        is returned in that case.
        """
        log.debug(
            "Resolving %d entities, %d edges (%s)",
            self._graph.node_count,
            self._graph.edge_count,
            self._strategy.name.lower(),
        )
        if self._strategy is Strategy.GLOBAL:
            return topological_sort(self._graph)
        return merged_sort(self._graph)

    def find_cycle(self) -> CycleResult[T]:
        """Check for circular dependencies without resolving."""
        return detect_cycle(self._graph)

    def __len__(self) -> int:
        return self._graph.node_count

    def __repr__(self) -> str:
        return (
            f"Resolver(strategy={self._strategy.name}, "
            f"nodes={self._graph.node_count}, edges={self._graph.edge_count})"
        )
