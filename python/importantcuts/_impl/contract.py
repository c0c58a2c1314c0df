"""Contraction of terminal sets into single vertices."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from importantcuts._impl.augment import get_augmenting_paths_and_residual_graph
from importantcuts._impl.graph import IndexedGraph
from importantcuts._impl.messages import CutInvariantMessage
from importantcuts._impl.mincut import IndexCut
from importantcuts.common import InvariantViolationError

if TYPE_CHECKING:
    from collections.abc import Set as AbstractSet

    import networkx as nx
    import numpy as np
    import numpy.typing as npt

    from importantcuts._impl.augment import Path


@dataclasses.dataclass(frozen=True)
class IndexMapping:
    """Contracted indices to original indices.

    `vertices[i]` and `edges[i]` hold the originals of contracted vertex/edge `i`.
    """

    vertices: tuple[tuple[int, ...], ...]
    edges: tuple[tuple[int, ...], ...]

    def original_vertices(self, i: int) -> tuple[int, ...]:
        try:
            return self.vertices[i]
        except IndexError:
            raise InvariantViolationError(CutInvariantMessage.MissingMapping("vertex", i)) from None

    def original_edges(self, i: int) -> tuple[int, ...]:
        try:
            return self.edges[i]
        except IndexError:
            raise InvariantViolationError(CutInvariantMessage.MissingMapping("edge", i)) from None

    def translate_error(self, err: InvariantViolationError) -> InvariantViolationError:
        """Re-express a payload raised on the contracted graph with original indices.

        Merged vertices and edges are represented by their first original.
        """
        raw = err.args[0]
        if isinstance(raw, CutInvariantMessage.IllegalEndpoint):
            raw = CutInvariantMessage.IllegalEndpoint(
                self.original_vertices(raw.vertex)[0], self.original_edges(raw.edge)[0]
            )
        elif isinstance(raw, CutInvariantMessage.NoCrossingEdge):
            raw = CutInvariantMessage.NoCrossingEdge(tuple(self.original_vertices(v)[0] for v in raw.vertices))
        elif isinstance(raw, CutInvariantMessage.MissingResidualArc):
            raw = CutInvariantMessage.MissingResidualArc(
                self.original_vertices(raw.tail)[0],
                self.original_vertices(raw.head)[0],
                self.original_edges(raw.edge)[0],
            )
        return InvariantViolationError(raw)

    def translate_cut(self, cut: IndexCut) -> IndexCut:
        """Express a cut of the contracted graph with original indices."""
        return IndexCut(
            frozenset(v for i in cut.source_set for v in self.original_vertices(i)),
            frozenset(v for i in cut.destination_set for v in self.original_vertices(i)),
            frozenset(e for i in cut.cut_edge_set for e in self.original_edges(i)),
        )


def _check_terminals(graph: IndexedGraph, source_set: AbstractSet[int], destination_set: AbstractSet[int]) -> None:
    if not source_set:
        msg = "Source set must be nonempty."
        raise ValueError(msg)
    if not destination_set:
        msg = "Destination set must be nonempty."
        raise ValueError(msg)
    if not (source_set.isdisjoint(destination_set)):
        msg = "Source and destination sets must be disjoint."
        raise ValueError(msg)
    if any(not (0 <= v < graph.node_count) for v in source_set | destination_set):
        msg = "Terminal index out of range."
        raise ValueError(msg)


def contract(
    graph: IndexedGraph,
    source_set: AbstractSet[int],
    destination_set: AbstractSet[int],
    edges_in_use: npt.NDArray[np.bool_] | None = None,
    *,
    merge_parallel: bool = True,
) -> tuple[IndexedGraph, int, int, IndexMapping]:
    """Contract `source_set` and `destination_set` into one vertex each.

    Parameters
    ----------
    graph : `IndexedGraph`
        Original graph.
    source_set : `collections.abc.Set`
        Vertices merged into the new source.
    destination_set : `collections.abc.Set`
        Vertices merged into the new destination.
    edges_in_use : `numpy.ndarray`, optional
        Boolean mask over edges. Edges marked `False` are left out.
    merge_parallel : `bool`
        Merge parallel edges created by the contraction into one contracted edge.

    Returns
    -------
    `tuple`
        Contracted graph, new source, new destination and the mapping back to `graph`.

    Notes
    -----
    Contracted vertices are numbered in first-seen order along the edges; vertices without any edge in use follow in
    original order.
    Self-loops created by the contraction are dropped.
    """
    _check_terminals(graph, source_set, destination_set)
    rep_source = min(source_set)
    rep_destination = min(destination_set)

    def rep(v: int) -> int:
        if v in source_set:
            return rep_source
        if v in destination_set:
            return rep_destination
        return v

    index: dict[int, int] = {}
    new_edges: list[tuple[int, int]] = []
    edge_originals: list[list[int]] = []
    merged: dict[frozenset[int], int] = {}

    for e, (u, v) in enumerate(graph.edges):
        if edges_in_use is not None and not edges_in_use[e]:
            continue
        ru, rv = rep(u), rep(v)
        index.setdefault(min(ru, rv), len(index))
        index.setdefault(max(ru, rv), len(index))
        if ru == rv:
            continue
        s, t = index[ru], index[rv]
        key = frozenset((s, t))
        if merge_parallel and key in merged:
            edge_originals[merged[key]].append(e)
            continue
        merged[key] = len(new_edges)
        new_edges.append((s, t))
        edge_originals.append([e])

    owner: list[int] = []
    for v in range(graph.node_count):
        r = rep(v)
        owner.append(index.setdefault(r, len(index)))
    vertex_originals: list[list[int]] = [[] for _ in range(len(index))]
    for v, i in enumerate(owner):
        vertex_originals[i].append(v)

    mapping = IndexMapping(
        tuple(tuple(vs) for vs in vertex_originals),
        tuple(tuple(es) for es in edge_originals),
    )
    contracted = IndexedGraph(len(index), new_edges)
    return contracted, index[rep_source], index[rep_destination], mapping


def get_augmenting_paths_and_residual_graph_for_sets(
    graph: IndexedGraph,
    source_set: AbstractSet[int],
    destination_set: AbstractSet[int],
    k: int,
    edges_in_use: npt.NDArray[np.bool_] | None = None,
    *,
    merge_parallel: bool = True,
) -> tuple[IndexedGraph, int, list[Path], nx.MultiDiGraph[int], IndexMapping] | None:
    """Set-to-set version of `get_augmenting_paths_and_residual_graph`.

    Returns
    -------
    `tuple` or `None`
        ``(contracted, destination, paths, residual, mapping)`` where `destination` is the contracted destination, or
        `None` if the max-flow exceeds `k`.
    """
    contracted, source, destination, mapping = contract(
        graph, source_set, destination_set, edges_in_use, merge_parallel=merge_parallel
    )
    if ret := get_augmenting_paths_and_residual_graph(contracted, source, destination, k):
        paths, residual = ret
        return contracted, destination, paths, residual, mapping
    return None
