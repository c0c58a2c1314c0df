"""Brute-force BFS prefix cuts."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

import numpy as np

from importantcuts._impl.mincut import IndexCut

if TYPE_CHECKING:
    from collections.abc import Iterator

    from importantcuts._impl.graph import IndexedGraph


def _bfs_order(graph: IndexedGraph, source: int) -> Iterator[int]:
    seen = {source}
    queue = deque([source])
    while queue:
        u = queue.popleft()
        yield u
        for w, _ in graph.neighbors(u):
            if w not in seen:
                seen.add(w)
                queue.append(w)


def generate_cuts(graph: IndexedGraph, source: int, destination: int, k: int) -> list[IndexCut]:
    """Record the frontier cut after each BFS step from `source`.

    The destination is never put on the source side, but the search does continue through it.
    Cuts larger than `k` are skipped, and every distinct cut is reported once in discovery order.
    """
    endpoints = graph.endpoints()
    visited = np.zeros(graph.node_count, dtype=np.bool_)
    vset = frozenset(range(graph.node_count))
    ret: dict[IndexCut, None] = {}
    for v in _bfs_order(graph, source):
        if v != destination:
            visited[v] = True
        crossing = np.flatnonzero(visited[endpoints[:, 0]] != visited[endpoints[:, 1]])
        if len(crossing) > k:
            continue
        sset = frozenset(int(u) for u in np.flatnonzero(visited))
        ret.setdefault(IndexCut(sset, vset - sset, frozenset(int(e) for e in crossing)), None)
    return list(ret)
