"""Benchmark tests for the two resolution strategies.

These run realistic workloads and print wall-clock numbers.  The
bounds are loose sanity checks, not performance targets.
"""
from __future__ import annotations

import random
import time

from dependency_resolver import Resolver, Strategy
from dependency_resolver.graph.cycle_detector import detect_cycle

from conftest import SEED


def _random_deps(n_nodes: int, edge_prob: float, seed: int = SEED) -> dict[int, list[int]]:
    """Random DAG: node i depends only on lower-numbered nodes."""
    rng = random.Random(seed)
    return {
        i: [j for j in range(i) if rng.random() < edge_prob] for i in range(n_nodes)
    }


def _layered_deps(n_layers: int, width: int, seed: int = SEED) -> dict[str, list[str]]:
    """Each node in layer i depends on 1-3 nodes in layer i-1."""
    rng = random.Random(seed)
    deps: dict[str, list[str]] = {}
    for layer in range(n_layers):
        for w in range(width):
            node = f"L{layer}_{w}"
            if layer == 0:
                deps[node] = []
                continue
            n_parents = min(rng.randint(1, 3), width)
            deps[node] = [f"L{layer-1}_{p}" for p in rng.sample(range(width), n_parents)]
    return deps


def _time_resolve(deps: dict, strategy: Strategy, repeats: int) -> tuple[float, list]:
    resolver = Resolver(deps.__getitem__, strategy)
    resolver.register_all(deps)
    t0 = time.perf_counter()
    for _ in range(repeats):
        order = resolver.resolve()
    elapsed = (time.perf_counter() - t0) / repeats * 1000
    return elapsed, order


class TestStrategyPerformance:
    def test_random_dag_300_nodes(self) -> None:
        deps = _random_deps(300, 0.02)
        merge_ms, merge_order = _time_resolve(deps, Strategy.MERGE, 3)
        global_ms, global_order = _time_resolve(deps, Strategy.GLOBAL, 20)
        print(f"\nRandom DAG 300 nodes: merge={merge_ms:.2f} ms, global={global_ms:.2f} ms")
        assert sorted(merge_order) == sorted(global_order) == list(range(300))
        assert merge_ms < 5000
        assert global_ms < 500

    def test_layered_dag_20x20(self) -> None:
        deps = _layered_deps(20, 20)
        merge_ms, order = _time_resolve(deps, Strategy.MERGE, 3)
        print(f"\nLayered DAG 20x20: merge={merge_ms:.2f} ms")
        pos = {n: i for i, n in enumerate(order)}
        for node, parents in deps.items():
            for p in parents:
                assert pos[p] < pos[node]
        assert merge_ms < 5000


class TestCycleDetectionPerformance:
    def test_detect_cycle_1000_dag(self) -> None:
        deps = _random_deps(1000, 0.01)
        resolver = Resolver(deps.__getitem__)
        resolver.register_all(deps)
        t0 = time.perf_counter()
        for _ in range(20):
            result = detect_cycle(resolver.graph)
        elapsed = (time.perf_counter() - t0) / 20 * 1000
        print(f"\nCycle detection 1000 nodes: {elapsed:.3f} ms")
        assert not result.has_cycle
        assert elapsed < 500
