from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

import networkx as nx

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable
    from collections.abc import Set as AbstractSet

    from importantcuts._impl.graph import IndexedGraph
    from importantcuts._impl.mincut import IndexCut


def normalize(edges: Iterable[tuple[Hashable, Hashable]]) -> frozenset[frozenset[Hashable]]:
    """Forget edge orientation."""
    return frozenset(frozenset(e) for e in edges)


def reachable(
    g: nx.Graph[Hashable], sset: AbstractSet[Hashable], removed: Iterable[tuple[Hashable, Hashable]]
) -> set[Hashable]:
    """Nodes reachable from `sset` once `removed` are deleted."""
    h = g.copy()
    h.remove_edges_from(removed)
    ret: set[Hashable] = set()
    for s in sset:
        ret |= nx.node_connected_component(h, s)
    return ret


def brute_force_important_cuts(
    g: nx.Graph[Hashable], sset: AbstractSet[Hashable], tset: AbstractSet[Hashable], k: int
) -> set[frozenset[frozenset[Hashable]]]:
    """Important cuts of size at most `k` by trying every source side."""
    free = [v for v in g.nodes if v not in sset and v not in tset]
    exact: dict[frozenset[Hashable], list[tuple[Hashable, Hashable]]] = {}
    for r in range(len(free) + 1):
        for extra in itertools.combinations(free, r):
            side = set(sset) | set(extra)
            cut = [e for e in g.edges if (e[0] in side) != (e[1] in side)]
            if reachable(g, sset, cut) == side:
                exact[frozenset(side)] = cut
    return {
        normalize(cut)
        for side, cut in exact.items()
        if len(cut) <= k and not any(len(c) <= len(cut) and side < s for s, c in exact.items())
    }


def assert_index_cut(graph: IndexedGraph, cut: IndexCut, in_use: Iterable[bool] | None = None) -> None:
    """Check that `cut` partitions the nodes and lists exactly the crossing edges."""
    assert cut.source_set.isdisjoint(cut.destination_set)
    assert cut.source_set | cut.destination_set == set(range(graph.node_count))
    used = [True] * graph.edge_count if in_use is None else list(in_use)
    crossing = {
        e
        for e, (u, v) in enumerate(graph.edges)
        if used[e] and (u in cut.source_set) != (v in cut.source_set)
    }
    assert cut.cut_edge_set == crossing
    assert cut.size == len(cut.cut_edge_set)
