"""Private common functionalities."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from collections.abc import Set as AbstractSet
from typing import Generic, ParamSpec, TypeVar

import networkx as nx

from importantcuts._impl.graph import IndexedGraph
from importantcuts._impl.messages import CutInvariantMessage
from importantcuts._impl.mincut import IndexCut
from importantcuts.common import Cut, InvariantViolationError, V

S = ParamSpec("S")
T = TypeVar("T")


def check_graph(g: nx.Graph[V]) -> None:
    """Check if `g` is a nonempty undirected simple graph.

    Raises
    ------
    TypeError
        If `g` is not a `networkx.Graph`, or is directed or a multigraph.
    ValueError
        If the graph is empty or has self-loops.
    """
    if not isinstance(g, nx.Graph):
        msg = "g must be a networkx.Graph."
        raise TypeError(msg)
    if g.is_directed() or g.is_multigraph():
        msg = "g must be an undirected simple graph."
        raise TypeError(msg)
    if len(g) == 0:
        msg = "Graph is empty."
        raise ValueError(msg)
    if any(True for _ in nx.selfloop_edges(g)):
        msg = "Self-loop detected."
        raise ValueError(msg)


def check_terminals(g: nx.Graph[V], sset: AbstractSet[V], tset: AbstractSet[V]) -> None:
    """Check if `sset` and `tset` are disjoint nonempty sets of nodes.

    Raises
    ------
    TypeError
        If input types are incorrect.
    ValueError
        If a set is empty, is not a subset of nodes, or the sets overlap.
    """
    if not isinstance(sset, AbstractSet):
        msg = "sset must be a set."
        raise TypeError(msg)
    if not isinstance(tset, AbstractSet):
        msg = "tset must be a set."
        raise TypeError(msg)
    if not sset:
        msg = "sset must be nonempty."
        raise ValueError(msg)
    if not tset:
        msg = "tset must be nonempty."
        raise ValueError(msg)
    vset = set(g.nodes)
    if not (sset <= vset):
        msg = "sset must be a subset of the nodes."
        raise ValueError(msg)
    if not (tset <= vset):
        msg = "tset must be a subset of the nodes."
        raise ValueError(msg)
    if not sset.isdisjoint(tset):
        msg = "sset and tset must be disjoint."
        raise ValueError(msg)


def check_budget(k: int) -> None:
    """Check if `k` is a nonnegative integer.

    Raises
    ------
    TypeError
        If `k` is not an `int`.
    ValueError
        If `k` is negative.
    """
    # bool is an int subclass
    if not isinstance(k, int) or isinstance(k, bool):
        msg = "k must be an integer."
        raise TypeError(msg)
    if k < 0:
        msg = "k must be nonnegative."
        raise ValueError(msg)


class IndexMap(Generic[V]):
    """Map between nodes/edges of `g` and 0-based indices."""

    __v2i: dict[V, int]
    __i2v: list[V]
    __e2i: dict[frozenset[V], int]
    __i2e: list[tuple[V, V]]

    def __init__(self, g: nx.Graph[V]) -> None:
        """Initialize the map from `g`.

        Parameters
        ----------
        g : `networkx.Graph`
            Simple graph.
            Nodes are numbered in `g.nodes` order and edges in `g.edges` order.
        """
        self.__i2v = list(g.nodes)
        self.__v2i = {v: i for i, v in enumerate(self.__i2v)}
        self.__i2e = list(g.edges)
        self.__e2i = {frozenset(e): i for i, e in enumerate(self.__i2e)}

    @property
    def edges(self) -> list[tuple[V, V]]:
        """Edges in index order."""
        return list(self.__i2e)

    def encode(self, v: V) -> int:
        """Encode `v` to the index.

        Returns
        -------
        `int`
            Index of `v`.

        Raises
        ------
        ValueError
            If `v` is not initially registered.
        """
        ind = self.__v2i.get(v)
        if ind is None:
            msg = f"{v} not found."
            raise ValueError(msg)
        return ind

    def encode_graph(self) -> IndexedGraph:
        """Encode the graph.

        Returns
        -------
        `IndexedGraph`
            Graph with transformed nodes and edges.
        """
        return IndexedGraph(len(self.__i2v), [(self.encode(u), self.encode(v)) for u, v in self.__i2e])

    def encode_set(self, vset: AbstractSet[V]) -> set[int]:
        """Encode set."""
        return {self.encode(v) for v in vset}

    def encode_edge(self, e: tuple[V, V]) -> int:
        """Encode an edge given in either orientation.

        Raises
        ------
        ValueError
            If `e` is not an edge of the graph.
        """
        ind = self.__e2i.get(frozenset(e))
        if ind is None:
            msg = f"Edge {e} not found."
            raise ValueError(msg)
        return ind

    def encode_edges(self, eset: Iterable[tuple[V, V]]) -> set[int]:
        """Encode edge set."""
        return {self.encode_edge(e) for e in eset}

    def decode(self, i: int) -> V:
        """Decode the index.

        Returns
        -------
        Value corresponding to the index.

        Raises
        ------
        ValueError
            If `i` is out of range.
        """
        try:
            v = self.__i2v[i]
        except IndexError:
            msg = f"{i} not found."
            raise ValueError(msg) from None
        return v

    def decode_set(self, iset: AbstractSet[int]) -> set[V]:
        """Decode set."""
        return {self.decode(i) for i in iset}

    def decode_edge(self, i: int) -> tuple[V, V]:
        """Decode the edge index.

        Raises
        ------
        ValueError
            If `i` is out of range.
        """
        try:
            e = self.__i2e[i]
        except IndexError:
            msg = f"Edge {i} not found."
            raise ValueError(msg) from None
        return e

    def decode_edges(self, iset: AbstractSet[int]) -> set[tuple[V, V]]:
        """Decode edge set."""
        return {self.decode_edge(i) for i in iset}

    def decode_cut(self, cut: IndexCut) -> Cut[V]:
        """Decode a cut computed on the encoded graph."""
        return Cut(
            self.decode_set(cut.source_set),
            self.decode_set(cut.destination_set),
            self.decode_edges(cut.cut_edge_set),
        )

    def decode_err(self, err: InvariantViolationError) -> InvariantViolationError:
        """Decode the payload stored in the first ctor argument of `InvariantViolationError`."""
        raw = err.args[0]
        if isinstance(raw, CutInvariantMessage.IllegalEndpoint):
            node = self.decode(raw.vertex)
            edge = self.decode_edge(raw.edge)
            msg = f"Node {node} is not an endpoint of edge {edge}."
        elif isinstance(raw, CutInvariantMessage.MissingMapping):
            msg = f"Contracted {raw.kind} {raw.index} has no original counterpart."
        elif isinstance(raw, CutInvariantMessage.NoCrossingEdge):
            nodes = [self.decode(i) for i in raw.vertices]
            msg = f"Path {nodes} does not cross the cut."
        elif isinstance(raw, CutInvariantMessage.MissingResidualArc):
            tail = self.decode(raw.tail)
            head = self.decode(raw.head)
            edge = self.decode_edge(raw.edge)
            msg = f"Residual graph has no arc {tail} -> {head} for edge {edge}."
        else:
            raise TypeError  # pragma: no cover
        return InvariantViolationError(msg)

    def ecatch(self, f: Callable[S, T], *args: S.args, **kwargs: S.kwargs) -> T:
        """Wrap engine call to decode invariant violations."""
        try:
            return f(*args, **kwargs)
        except InvariantViolationError as e:
            raise self.decode_err(e) from None


def reachable(g: nx.Graph[V], sset: AbstractSet[V], removed: Iterable[tuple[V, V]]) -> set[V]:
    """Nodes reachable from `sset` in `g` without the `removed` edges."""
    h = nx.restricted_view(g, [], list(removed))
    ret: set[V] = set()
    for s in sset:
        if s not in ret:
            ret |= nx.node_connected_component(h, s)
    return ret
