"""Dense undirected multigraph used by the engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from importantcuts._impl.messages import CutInvariantMessage
from importantcuts.common import InvariantViolationError

if TYPE_CHECKING:
    from collections.abc import Iterable

    import numpy.typing as npt


class IndexedGraph:
    """Undirected multigraph over ``range(node_count)`` with stable edge ids.

    Edge `i` is ``edges[i]``.
    Adjacency lists hold ``(neighbor, edge)`` pairs in edge-id order.
    """

    __edges: tuple[tuple[int, int], ...]
    __adj: tuple[tuple[tuple[int, int], ...], ...]

    def __init__(self, node_count: int, edges: Iterable[tuple[int, int]]) -> None:
        self.__edges = tuple((u, v) for u, v in edges)
        adj: list[list[tuple[int, int]]] = [[] for _ in range(node_count)]
        for e, (u, v) in enumerate(self.__edges):
            if not (0 <= u < node_count and 0 <= v < node_count):
                msg = f"Edge {e} has an endpoint outside the graph."
                raise ValueError(msg)
            adj[u].append((v, e))
            if u != v:
                adj[v].append((u, e))
        self.__adj = tuple(tuple(a) for a in adj)

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[int, int]], node_count: int | None = None) -> IndexedGraph:
        """Build from an edge list, inferring the node count when omitted."""
        edges = list(edges)
        if node_count is None:
            node_count = 1 + max((max(u, v) for u, v in edges), default=-1)
        return cls(node_count, edges)

    @property
    def node_count(self) -> int:
        return len(self.__adj)

    @property
    def edge_count(self) -> int:
        return len(self.__edges)

    @property
    def edges(self) -> tuple[tuple[int, int], ...]:
        return self.__edges

    def neighbors(self, v: int) -> tuple[tuple[int, int], ...]:
        """``(neighbor, edge)`` pairs of `v`."""
        return self.__adj[v]

    def other_endpoint(self, e: int, v: int) -> int:
        """Get the other endpoint of `e`.

        Raises
        ------
        `InvariantViolationError`
            If `v` is not an endpoint of `e`.
        """
        u, w = self.__edges[e]
        if v == u:
            return w
        if v == w:
            return u
        raise InvariantViolationError(CutInvariantMessage.IllegalEndpoint(v, e))

    def endpoints(self) -> npt.NDArray[np.int64]:
        """Endpoints as an array of shape :code:`(edge_count, 2)`."""
        return np.asarray(self.__edges, dtype=np.int64).reshape(-1, 2)

    def __repr__(self) -> str:
        return f"IndexedGraph({self.node_count}, {list(self.__edges)})"
