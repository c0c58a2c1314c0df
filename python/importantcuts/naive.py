"""Brute-force cut enumeration.

Only meant as a reference on small graphs.
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING

from importantcuts import _common
from importantcuts._common import IndexMap
from importantcuts._impl import naive as naive_bind
from importantcuts.common import Cut, V
from importantcuts.config import CUT_CONFIG

if TYPE_CHECKING:
    from collections.abc import Sequence

    import networkx as nx


def generate_cuts(g: nx.Graph[V], source: V, destination: V, k: int) -> list[Cut[V]]:
    """Enumerate BFS prefix cuts of size at most `k`.

    Parameters
    ----------
    g : `networkx.Graph`
        Undirected simple graph.
    source : `V`
        Source node.
    destination : `V`
        Destination node. Never put on the source side.
    k : `int`
        Maximum number of cut edges.

    Returns
    -------
    `list`
        Distinct cuts, each with the nodes visited so far as its source side.
    """
    _common.check_graph(g)
    _common.check_terminals(g, {source}, {destination})
    _common.check_budget(k)
    if len(g) > CUT_CONFIG.naive_warn_nodes:
        msg = f"Naive enumeration on {len(g)} nodes. Use important.find instead."
        warnings.warn(msg, stacklevel=2)
    codec = IndexMap(g)
    g_ = codec.encode_graph()
    cuts_ = naive_bind.generate_cuts(g_, codec.encode(source), codec.encode(destination), k)
    return [codec.decode_cut(c) for c in cuts_]


def filter_important_cuts(cuts: Sequence[Cut[V]]) -> list[Cut[V]]:
    """Drop dominated cuts.

    A cut is dominated if another cut with no more edges has a strictly smaller source side.

    Parameters
    ----------
    cuts : `collections.abc.Sequence`
        Candidates, typically from `generate_cuts`.

    Returns
    -------
    `list`
        Non-dominated cuts in their original order.
    """
    return [
        ci
        for i, ci in enumerate(cuts)
        if not any(j != i and cj.size <= ci.size and cj.source_set < ci.source_set for j, cj in enumerate(cuts))
    ]
