"""Enumerate important edge cuts of bounded size in undirected graphs."""
