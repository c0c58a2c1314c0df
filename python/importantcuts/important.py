"""Important cut enumeration.

This module enumerates important edge cuts of bounded size between two node sets by branching on the minimum cut
closest to the destination.
See :footcite:t:`Marx2006` for details.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from importantcuts import _common
from importantcuts._common import IndexMap
from importantcuts._impl import branch as branch_bind
from importantcuts.common import Cut, ImportantCut, InvariantViolationError, V
from importantcuts.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable
    from collections.abc import Set as AbstractSet

    import networkx as nx

logger = get_logger(__name__)


def generate_important_cuts(
    g: nx.Graph[V], sset: AbstractSet[V], tset: AbstractSet[V], k: int
) -> list[ImportantCut[V]]:
    """Enumerate important cuts between `sset` and `tset`.

    Parameters
    ----------
    g : `networkx.Graph`
        Undirected simple graph. Every edge has unit capacity.
    sset : `collections.abc.Set`
        Source nodes.
    tset : `collections.abc.Set`
        Destination nodes.
    k : `int`
        Maximum number of cut edges.

    Returns
    -------
    `list`
        Distinct cuts in discovery order.

    Notes
    -----
    Every important cut of size at most `k` is returned, but so are the dominated cuts met along the way.
    Use `prune_important_cuts` or `find` to keep the important ones only.
    """
    _common.check_graph(g)
    _common.check_terminals(g, sset, tset)
    _common.check_budget(k)
    codec = IndexMap(g)
    g_ = codec.encode_graph()
    sset_ = codec.encode_set(sset)
    tset_ = codec.encode_set(tset)
    cuts_ = codec.ecatch(branch_bind.important_cuts, g_, sset_, tset_, k)
    logger.debug("%d candidate cuts of size at most %d.", len(cuts_), k)
    return [ImportantCut(codec.decode_edges(c)) for c in cuts_]


def prune_important_cuts(
    g: nx.Graph[V], sset: AbstractSet[V], tset: AbstractSet[V], cuts: Iterable[ImportantCut[V]]
) -> list[Cut[V]]:
    """Keep the important cuts among `cuts`.

    For each candidate, the nodes still reachable from `sset` once its edges are removed form the source side, and
    the edges leaving that side form the cut.
    A cut is dropped if another cut with no more edges has a strictly larger source side.

    Parameters
    ----------
    g : `networkx.Graph`
        Graph the cuts were computed on.
    sset : `collections.abc.Set`
        Source nodes.
    tset : `collections.abc.Set`
        Destination nodes.
    cuts : `collections.abc.Iterable`
        Candidates, typically from `generate_important_cuts`.

    Returns
    -------
    `list`
        Important cuts, in the order of their first candidate.

    Raises
    ------
    `InvariantViolationError`
        If a candidate does not separate `sset` from `tset`.
    """
    _common.check_graph(g)
    _common.check_terminals(g, sset, tset)
    codec = IndexMap(g)
    vset = set(g.nodes)
    exact: dict[frozenset[V], Cut[V]] = {}
    for c in cuts:
        # Raises on edges outside g
        codec.encode_edges(c.cut_edge_set)
        side = _common.reachable(g, sset, c.cut_edge_set)
        if not side.isdisjoint(tset):
            msg = f"Cut {sorted(map(str, c.cut_edge_set))} does not separate the terminals."
            raise InvariantViolationError(msg)
        key = frozenset(side)
        if key not in exact:
            edges = {e for e in codec.edges if (e[0] in side) != (e[1] in side)}
            exact[key] = Cut(side, vset - side, edges)
    return [
        c
        for c in exact.values()
        if not any(o.size <= c.size and c.source_set < o.source_set for o in exact.values())
    ]


def find(g: nx.Graph[V], sset: AbstractSet[V], tset: AbstractSet[V], k: int) -> list[Cut[V]]:
    """Compute all important cuts of size at most `k`.

    Parameters
    ----------
    g : `networkx.Graph`
        Undirected simple graph. Every edge has unit capacity.
    sset : `collections.abc.Set`
        Source nodes.
    tset : `collections.abc.Set`
        Destination nodes.
    k : `int`
        Maximum number of cut edges.

    Returns
    -------
    `list`
        Important cuts with their source and destination sides.
    """
    return prune_important_cuts(g, sset, tset, generate_important_cuts(g, sset, tset, k))
