"""Index-level cut engine.

Everything here works on dense zero-based vertex and edge indices.
Public modules translate from and to node labels.
"""
