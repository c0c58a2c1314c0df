"""Minimum cut closest to the destination."""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

import networkx as nx

from importantcuts._impl.augment import Path
from importantcuts._impl.messages import CutInvariantMessage
from importantcuts.common import InvariantViolationError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from collections.abc import Set as AbstractSet

    from importantcuts._impl.graph import IndexedGraph


@dataclasses.dataclass(frozen=True)
class IndexCut:
    """Cut over dense indices."""

    source_set: frozenset[int]
    destination_set: frozenset[int]
    cut_edge_set: frozenset[int]

    @property
    def size(self) -> int:
        return len(self.cut_edge_set)

    def arbitrary_edge(self, graph: IndexedGraph) -> tuple[int, int]:
        """Pick the smallest cut edge.

        Returns
        -------
        `tuple`
            The edge and its endpoint on the destination side.

        Raises
        ------
        ValueError
            If the cut is empty.
        `InvariantViolationError`
            If the edge does not join the two sides.
        """
        if not self.cut_edge_set:
            msg = "Cannot pick an edge from an empty cut."
            raise ValueError(msg)
        e = min(self.cut_edge_set)
        u, v = graph.edges[e]
        if u in self.source_set and v in self.destination_set:
            return e, v
        if v in self.source_set and u in self.destination_set:
            return e, u
        raise InvariantViolationError(CutInvariantMessage.IllegalEndpoint(u, e))


def _crossing_edge(path: Path, destination_side: AbstractSet[int]) -> int:
    for i, e in enumerate(path.edges):
        if path.vertices[i] not in destination_side and path.vertices[i + 1] in destination_side:
            return e
    raise InvariantViolationError(CutInvariantMessage.NoCrossingEdge(path.vertices))


def min_cut_from_residual(residual: nx.MultiDiGraph[int], destination: int, paths: Sequence[Path]) -> IndexCut:
    """Compute the minimum cut closest to `destination`.

    Unlike `closest_min_cut`, `paths` may be empty, which yields the empty cut.
    """
    # Vertices that can still reach the destination in the residual graph
    dset = {destination} | nx.descendants(residual.reverse(copy=False), destination)
    sset = frozenset(residual.nodes) - dset
    cut_edges = frozenset(_crossing_edge(path, dset) for path in paths)
    return IndexCut(sset, frozenset(dset), cut_edges)


def closest_min_cut(paths: Sequence[Path], residual: nx.MultiDiGraph[int]) -> IndexCut:
    """Compute the minimum cut closest to the destination of `paths`.

    Parameters
    ----------
    paths : `collections.abc.Sequence`
        Maximum set of edge-disjoint augmenting paths.
    residual : `networkx.MultiDiGraph`
        Residual graph built together with `paths`.

    Returns
    -------
    `IndexCut`
        Cut with the smallest destination side among all minimum cuts.
        Each path contributes the first edge leaving the source side.

    Raises
    ------
    ValueError
        If `paths` is empty.
    `InvariantViolationError`
        If some path never crosses the cut.
    """
    destination = Path.get_destination(paths)
    return min_cut_from_residual(residual, destination, paths)
