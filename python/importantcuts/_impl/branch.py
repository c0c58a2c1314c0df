"""Branching enumeration of important cuts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from importantcuts._impl.augment import get_augmenting_paths_and_residual_graph
from importantcuts._impl.contract import contract
from importantcuts._impl.mincut import min_cut_from_residual
from importantcuts.common import InvariantViolationError
from importantcuts.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Set as AbstractSet

    import numpy.typing as npt

    from importantcuts._impl.graph import IndexedGraph

logger = get_logger(__name__)


def _branch(
    graph: IndexedGraph,
    source_set: frozenset[int],
    destination_set: frozenset[int],
    k: int,
    edges_in_use: npt.NDArray[np.bool_],
    committed: frozenset[int],
    found: dict[frozenset[int], None],
) -> None:
    # Parallel edges stay apart so that the budget counts original edges
    contracted, source, destination, mapping = contract(
        graph, source_set, destination_set, edges_in_use, merge_parallel=False
    )
    try:
        ret = get_augmenting_paths_and_residual_graph(contracted, source, destination, k)
        if ret is None:
            return
        paths, residual = ret
        contracted_cut = min_cut_from_residual(residual, destination, paths)
    except InvariantViolationError as err:
        raise mapping.translate_error(err) from None
    cut = mapping.translate_cut(contracted_cut)
    found.setdefault(cut.cut_edge_set | committed, None)
    logger.debug(
        "k=%d |S|=%d: min cut %s, committed %s", k, len(source_set), sorted(cut.cut_edge_set), sorted(committed)
    )

    if k == 0 or cut.size in {0, k}:
        return

    e, v = cut.arbitrary_edge(graph)
    # e stays: v joins the source side, infeasible when v is a destination
    if v not in destination_set:
        _branch(graph, source_set | {v}, destination_set, k, edges_in_use, committed, found)
    # e is cut
    without = edges_in_use.copy()
    without[e] = False
    _branch(graph, cut.source_set, destination_set, k - 1, without, committed | {e}, found)


def important_cuts(
    graph: IndexedGraph, source_set: AbstractSet[int], destination_set: AbstractSet[int], k: int
) -> list[frozenset[int]]:
    """Enumerate important cuts of size at most `k`.

    Parameters
    ----------
    graph : `IndexedGraph`
        Original graph.
    source_set : `collections.abc.Set`
        Source vertices.
    destination_set : `collections.abc.Set`
        Destination vertices.
    k : `int`
        Size budget.

    Returns
    -------
    `list`
        Edge sets in discovery order without duplicates.
        Each is the minimum cut closest to the destination found at one recursion step together with the edges
        committed along the way, so the list contains every important cut but also some dominated ones.
    """
    found: dict[frozenset[int], None] = {}
    _branch(
        graph,
        frozenset(source_set),
        frozenset(destination_set),
        k,
        np.ones(graph.edge_count, dtype=np.bool_),
        frozenset(),
        found,
    )
    return list(found)
