"""Example code for finding important cuts."""

# %%

from __future__ import annotations

import networkx as nx
from importantcuts import important

g: nx.Graph[int]

# %%

#         2
#        /
# 0 - 1
#        \
#         3
g = nx.Graph([(0, 1), (1, 2), (1, 3)])
sset = {0}
tset = {2, 3}

result = important.find(g, sset, tset, 2)

# The bridge, and both leaves cut off together
assert {frozenset(c.cut_edge_set) for c in result} == {
    frozenset({(0, 1)}),
    frozenset({(1, 2), (1, 3)}),
}

# %%

# Raw candidates may contain dominated cuts
raw = important.generate_important_cuts(g, sset, tset, 2)
assert len(raw) >= len(result)
assert all(c.size <= 2 for c in raw)

# %%

#   1
#  / \
# 0   3
#  \ /
#   2
g = nx.Graph([(0, 1), (0, 2), (1, 3), (2, 3)])

# Two disjoint paths do not fit in a single edge
result = important.find(g, {0}, {3}, 1)

assert result == []
