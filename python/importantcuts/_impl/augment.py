"""Unit-capacity augmenting paths and the residual graph.

Every edge carries capacity one.
The residual graph is a `networkx.MultiDiGraph` keyed by edge id: an unused edge contributes two opposite arcs, an
edge on a path contributes the single arc pointing back towards the source.
"""

from __future__ import annotations

import dataclasses
from collections import defaultdict, deque
from typing import TYPE_CHECKING

import networkx as nx
import numpy as np

from importantcuts._impl.messages import CutInvariantMessage
from importantcuts.common import InvariantViolationError
from importantcuts.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import MutableSequence, Sequence

    import numpy.typing as npt

    from importantcuts._impl.graph import IndexedGraph

logger = get_logger(__name__)

Arc = tuple[int, int, int]  #: ``(tail, head, edge)``


@dataclasses.dataclass(frozen=True)
class Path:
    """Source-to-destination path: vertices and the edges joining consecutive vertices."""

    vertices: tuple[int, ...]
    edges: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.vertices) != len(self.edges) + 1:
            msg = "A path must have exactly one more vertex than edges."
            raise ValueError(msg)

    @staticmethod
    def get_destination(paths: Sequence[Path]) -> int:
        """Destination shared by `paths`.

        Raises
        ------
        ValueError
            If `paths` is empty.
        """
        if not paths:
            msg = "paths must be nonempty."
            raise ValueError(msg)
        return paths[0].vertices[-1]


def find_augmenting_path(
    graph: IndexedGraph,
    source: int,
    destination: int,
    next_edge: MutableSequence[int],
    availability: npt.NDArray[np.bool_],
) -> bool:
    """Search a path over available edges by BFS.

    Parameters
    ----------
    graph : `IndexedGraph`
        Graph to search.
    source : `int`
        Start vertex.
    destination : `int`
        Target vertex.
    next_edge : `collections.abc.MutableSequence`
        Written in place: edge used to reach each newly visited vertex.
    availability : `numpy.ndarray`
        Boolean mask over edges. Only edges marked `True` are traversed.

    Returns
    -------
    `bool`
        `True` as soon as `destination` is reached, in which case walking `next_edge` back from `destination` yields
        the path.
    """
    visited = np.zeros(graph.node_count, dtype=np.bool_)
    visited[source] = True
    queue = deque([source])
    while queue:
        u = queue.popleft()
        for w, e in graph.neighbors(u):
            if visited[w] or not availability[e]:
                continue
            next_edge[w] = e
            if w == destination:
                return True
            visited[w] = True
            queue.append(w)
    return False


def _initial_residual(graph: IndexedGraph) -> nx.MultiDiGraph[int]:
    residual: nx.MultiDiGraph[int] = nx.MultiDiGraph()
    # Isolated vertices stay part of the cut partition
    residual.add_nodes_from(range(graph.node_count))
    for e, (u, v) in enumerate(graph.edges):
        residual.add_edge(u, v, key=e)
        residual.add_edge(v, u, key=e)
    return residual


def _remove_arc(residual: nx.MultiDiGraph[int], tail: int, head: int, e: int) -> None:
    if not residual.has_edge(tail, head, key=e):
        raise InvariantViolationError(CutInvariantMessage.MissingResidualArc(tail, head, e))
    residual.remove_edge(tail, head, key=e)


def _find_residual_path(residual: nx.MultiDiGraph[int], source: int, destination: int) -> list[Arc] | None:
    parent: dict[int, tuple[int, int]] = {}
    seen = {source}
    queue = deque([source])
    while queue:
        u = queue.popleft()
        for _, w, e in residual.out_edges(u, keys=True):
            if w in seen:
                continue
            seen.add(w)
            parent[w] = (u, e)
            if w == destination:
                arcs: list[Arc] = []
                head = w
                while head != source:
                    tail, edge = parent[head]
                    arcs.append((tail, head, edge))
                    head = tail
                arcs.reverse()
                return arcs
            queue.append(w)
    return None


def _decompose(flow: dict[int, tuple[int, int]], source: int, destination: int, value: int) -> list[Path]:
    out: defaultdict[int, deque[tuple[int, int]]] = defaultdict(deque)
    for e in sorted(flow):
        tail, head = flow[e]
        out[tail].append((e, head))
    paths: list[Path] = []
    for _ in range(value):
        vertices = [source]
        edges: list[int] = []
        while vertices[-1] != destination:
            e, head = out[vertices[-1]].popleft()
            if head in vertices:
                # Drop the closed loop
                i = vertices.index(head)
                del vertices[i + 1 :]
                del edges[i:]
                continue
            vertices.append(head)
            edges.append(e)
        paths.append(Path(tuple(vertices), tuple(edges)))
    return paths


def get_augmenting_paths_and_residual_graph(
    graph: IndexedGraph, source: int, destination: int, k: int
) -> tuple[list[Path], nx.MultiDiGraph[int]] | None:
    """Compute edge-disjoint augmenting paths and the residual graph if the max-flow is at most `k`.

    Paths are first collected greedily with `find_augmenting_path`.
    When the greedy paths do not form a maximum flow, augmentation continues along residual paths and the final flow
    is decomposed into edge-disjoint paths again.

    Parameters
    ----------
    graph : `IndexedGraph`
        Graph to search.
    source : `int`
        Source vertex.
    destination : `int`
        Destination vertex.
    k : `int`
        Maximum number of paths.

    Returns
    -------
    `tuple` or `None`
        ``(paths, residual)`` if at most `k` paths exist, otherwise `None`.
        In `residual`, each path edge is a single arc from its destination-side endpoint to its source-side endpoint
        and every other edge is a pair of opposite arcs.
    """
    availability = np.ones(graph.edge_count, dtype=np.bool_)
    next_edge = [-1] * graph.node_count
    residual = _initial_residual(graph)
    # Direction of the unit flow on each used edge
    flow: dict[int, tuple[int, int]] = {}
    paths: list[Path] = []

    while find_augmenting_path(graph, source, destination, next_edge, availability):
        v = destination
        vertices = [v]
        edges: list[int] = []
        while v != source:
            e = next_edge[v]
            u = graph.other_endpoint(e, v)
            availability[e] = False
            flow[e] = (u, v)
            _remove_arc(residual, u, v, e)
            vertices.append(u)
            edges.append(e)
            v = u
        vertices.reverse()
        edges.reverse()
        paths.append(Path(tuple(vertices), tuple(edges)))
        if len(paths) > k:
            logger.debug("More than %d augmenting paths between %d and %d.", k, source, destination)
            return None

    value = len(paths)
    while (arcs := _find_residual_path(residual, source, destination)) is not None:
        for tail, head, e in arcs:
            if e in flow:
                # Cancel the unit sent head -> tail
                del flow[e]
                availability[e] = True
                residual.add_edge(head, tail, key=e)
            else:
                flow[e] = (tail, head)
                availability[e] = False
                _remove_arc(residual, tail, head, e)
        value += 1
        if value > k:
            logger.debug("More than %d augmenting paths between %d and %d.", k, source, destination)
            return None

    if value != len(paths):
        logger.debug("Greedy paths completed from %d to %d units of flow.", len(paths), value)
        paths = _decompose(flow, source, destination, value)
        used = {e for path in paths for e in path.edges}
        for e in set(flow) - used:
            # Circulation carries no flow between the terminals
            tail, head = flow.pop(e)
            residual.add_edge(tail, head, key=e)

    return paths, residual
