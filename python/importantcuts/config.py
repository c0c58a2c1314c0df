"""Tunable defaults."""

from __future__ import annotations

import dataclasses


@dataclasses.dataclass
class CutConfig:
    """Configuration of the cut enumerators."""

    naive_warn_nodes: int = 32
    """`naive.generate_cuts` warns above this many nodes."""


# Global configuration instance
CUT_CONFIG = CutConfig()
