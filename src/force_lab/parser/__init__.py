"""Readers that turn graph files into force_lab Graphs."""

from force_lab.parser.edgelist import parse_graph, read_graph

__all__ = ["parse_graph", "read_graph"]
