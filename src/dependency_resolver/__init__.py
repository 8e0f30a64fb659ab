"""Dependency-first ordering of arbitrary entities with cycle detection."""

from dependency_resolver.graph.cycle_detector import CycleResult
from dependency_resolver.graph.topological import CyclicDependencyError
from dependency_resolver.resolver import Resolver, Strategy

__all__ = [
    "CycleResult",
    "CyclicDependencyError",
    "Resolver",
    "Strategy",
]
