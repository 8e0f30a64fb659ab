"""Graph structure and ordering algorithms for dependency resolution."""

from dependency_resolver.graph.adjacency import EntityGraph, Node
from dependency_resolver.graph.cycle_detector import CycleResult, detect_cycle
from dependency_resolver.graph.topological import (
    CyclicDependencyError,
    merge_resolutions,
    merged_sort,
    resolve_node,
    topological_sort,
)

__all__ = [
    "CycleResult",
    "CyclicDependencyError",
    "EntityGraph",
    "Node",
    "detect_cycle",
    "merge_resolutions",
    "merged_sort",
    "resolve_node",
    "topological_sort",
]
