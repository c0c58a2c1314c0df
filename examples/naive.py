"""Example code for the brute-force reference."""

# %%

from __future__ import annotations

import networkx as nx
from importantcuts import naive

# %%

# 0 - 1 - 2 - 3 - 4
g = nx.path_graph(5)

cuts = naive.generate_cuts(g, 0, 4, 1)

# One cut per BFS step
assert len(cuts) == 4

# %%

# Every cut has a single edge, so the smallest source side wins
filtered = naive.filter_important_cuts(cuts)

assert len(filtered) == 1
assert filtered[0].source_set == {0}
