"""Parser for plain-text graph definitions.

Uses a simple line-by-line approach. Two notations are accepted and may be
mixed:

- Mermaid-style links: ``a --- b``, ``a --> b --> c`` (arrows are read as
  undirected edges, ``|labels|`` and ``[node text]`` are dropped)
- Adjacency lists: ``a b c`` connects ``a`` to ``b`` and to ``c``

A line with a single node name adds an isolated node. ``%%`` comments and
``graph``/``flowchart`` headers are skipped. Node names are kept as strings.
"""

from __future__ import annotations

__all__ = ["parse_graph", "read_graph"]

import re
from pathlib import Path

import networkx as nx

from force_lab.graph.model import Graph

_LINK_PATTERN = re.compile(r"\s*(?:<-->|-->|---|==>|===|-\.->)\s*")
_EDGE_LABEL_PATTERN = re.compile(r"\|[^|]*\|")
_NODE_PATTERN = re.compile(r"^([A-Za-z0-9_.]+)(?:\[[^\]]*\]|\([^)]*\)|\{[^}]*\})?$")
_HEADER_PATTERN = re.compile(r"^(?:graph|flowchart)(?:\s+\w+)?$")


def _node_name(token: str, lineno: int) -> str:
    m = _NODE_PATTERN.match(token.strip())
    if not m:
        raise ValueError(f"line {lineno}: cannot read node {token.strip()!r}")
    return m.group(1)


def _link(graph: Graph, a: str, b: str, lineno: int) -> None:
    if a == b:
        raise ValueError(f"line {lineno}: self-loop on {a!r} is not allowed")
    for name in (a, b):
        if name not in graph:
            graph.add_node(name)
    # Edge lists often repeat an edge in both directions
    if not graph.neighbors(a, b):
        graph.add_edge(a, b)


def parse_graph(text: str) -> Graph:
    """Parse a graph definition into a Graph with all nodes at the origin."""
    graph = Graph()

    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip().rstrip(";")
        if not stripped or stripped.startswith("%%") or stripped.startswith("#"):
            continue
        if _HEADER_PATTERN.match(stripped):
            continue

        stripped = _EDGE_LABEL_PATTERN.sub(" ", stripped)
        if _LINK_PATTERN.search(stripped):
            parts = [p for p in _LINK_PATTERN.split(stripped)]
            if any(not p.strip() for p in parts):
                raise ValueError(f"line {lineno}: dangling link in {line.strip()!r}")
            names = [_node_name(p, lineno) for p in parts]
            for a, b in zip(names, names[1:]):
                _link(graph, a, b, lineno)
            continue

        # A lone declaration may carry spaces inside its [node text]
        m = _NODE_PATTERN.match(stripped)
        names = [m.group(1)] if m else [_node_name(t, lineno) for t in stripped.split()]
        first = names[0]
        if first not in graph:
            graph.add_node(first)
        for other in names[1:]:
            _link(graph, first, other, lineno)

    return graph


def read_graph(path: Path) -> Graph:
    """Read a graph file, choosing the format by suffix.

    ``.graphml`` and ``.gml`` go through networkx (directed inputs are read
    as undirected); anything else is parsed as text by parse_graph().
    """
    suffix = path.suffix.lower()
    if suffix in (".graphml", ".gml"):
        G = nx.read_graphml(path) if suffix == ".graphml" else nx.read_gml(path)
        if G.is_directed():
            G = G.to_undirected()
        return Graph.from_networkx(G)
    return parse_graph(path.read_text())
