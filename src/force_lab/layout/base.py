"""The contract every layout algorithm implements.

An algorithm owns a private copy of the graph it lays out and advances it by
one unit of work per ``step()``. There is no common base class; each
algorithm is a separate type tagged by its ``name`` and keeps only the state
it declares.
"""

from __future__ import annotations

__all__ = ["Layout", "Steppable", "capture_layout", "restore_layout"]

from collections.abc import Hashable
from typing import Protocol, runtime_checkable

from force_lab.graph.model import Graph
from force_lab.graph.vector import Vec

Layout = dict[Hashable, Vec]


@runtime_checkable
class Steppable(Protocol):
    """A layout algorithm driven one step at a time."""

    name: str
    graph: Graph

    @property
    def finished(self) -> bool: ...

    def step(self) -> None: ...

    def reset(self) -> None: ...

    def set_graph(self, graph: Graph) -> None: ...


def capture_layout(graph: Graph) -> Layout:
    """Record every node's position by label."""
    return {node.label: node.pos for node in graph.node_list()}


def restore_layout(graph: Graph, layout: Layout) -> None:
    """Move nodes back to recorded positions and clear highlights."""
    for node in graph.node_list():
        node.pos = layout[node.label]
        node.highlight = False
