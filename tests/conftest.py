"""Shared fixtures for dependency resolution tests."""
from __future__ import annotations

import pytest

from dependency_resolver.graph.adjacency import EntityGraph

SEED = 42


class Item:
    """Test entity with identity equality and a mutable child list."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.children: list[Item] = []

    def add_children(self, *items: Item) -> None:
        self.children.extend(items)

    def __repr__(self) -> str:
        return f"Item({self.name!r})"


def children_of(item: Item) -> list[Item]:
    return item.children


def make_items(*names: str) -> dict[str, Item]:
    return {name: Item(name) for name in names}


def names(items: list[Item]) -> list[str]:
    return [item.name for item in items]


@pytest.fixture
def items() -> dict[str, Item]:
    return make_items("A", "B", "C", "D", "E")


@pytest.fixture
def empty_graph() -> EntityGraph[str]:
    return EntityGraph()


@pytest.fixture
def linear_graph() -> EntityGraph[str]:
    """A -> B -> C -> D  (A depends on B, ...)"""
    g: EntityGraph[str] = EntityGraph()
    for src, dst in [("A", "B"), ("B", "C"), ("C", "D")]:
        g.add_edge(src, dst)
    return g


@pytest.fixture
def diamond_graph() -> EntityGraph[str]:
    """
    A -> B -> D
    A -> C -> D
    """
    g: EntityGraph[str] = EntityGraph()
    for src, dst in [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")]:
        g.add_edge(src, dst)
    return g
