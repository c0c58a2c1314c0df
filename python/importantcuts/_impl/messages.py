"""Structured payloads of `InvariantViolationError`.

The engine works on dense indices only.
Each payload keeps the offending indices so that the public layer can report them with the original labels.
"""

from __future__ import annotations

import dataclasses


class CutInvariantMessage:
    """Namespace of invariant violation payloads."""

    @dataclasses.dataclass(frozen=True)
    class IllegalEndpoint:
        """`vertex` is not an endpoint of `edge`."""

        vertex: int
        edge: int

    @dataclasses.dataclass(frozen=True)
    class MissingMapping:
        """Contracted `index` of the given `kind` (``"vertex"`` or ``"edge"``) has no original."""

        kind: str
        index: int

    @dataclasses.dataclass(frozen=True)
    class NoCrossingEdge:
        """No edge of the path leaves the source side."""

        vertices: tuple[int, ...]

    @dataclasses.dataclass(frozen=True)
    class MissingResidualArc:
        """Residual graph lacks the arc `tail -> head` keyed by `edge`."""

        tail: int
        head: int
        edge: int
