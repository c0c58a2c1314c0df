"""Common functionalities."""

from __future__ import annotations

import dataclasses
from collections.abc import Hashable
from typing import Generic, TypeVar

V = TypeVar("V", bound=Hashable)  #: Node type.


class InvariantViolationError(RuntimeError):
    """Internal bookkeeping of the cut engine is inconsistent.

    The first argument is a payload from `importantcuts._impl.messages` or, once decoded, a message string.
    """


@dataclasses.dataclass(frozen=True)
class Cut(Generic[V]):
    r"""Edge cut between a source side and a destination side."""

    source_set: set[V]
    """Nodes reachable from the sources once :py:attr:`cut_edge_set` is removed."""
    destination_set: set[V]
    r"""Remaining nodes, i.e., :math:`V \setminus` :py:attr:`source_set`."""
    cut_edge_set: set[tuple[V, V]]
    """Edges with exactly one endpoint in each side, as yielded by `networkx.Graph.edges`."""

    @property
    def size(self) -> int:
        """Number of cut edges."""
        return len(self.cut_edge_set)


@dataclasses.dataclass(frozen=True)
class ImportantCut(Generic[V]):
    """Edges collected along one branch of the important cut enumeration."""

    cut_edge_set: set[tuple[V, V]]
    """Edges as yielded by `networkx.Graph.edges`."""

    @property
    def size(self) -> int:
        """Number of cut edges."""
        return len(self.cut_edge_set)
