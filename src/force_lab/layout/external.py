"""Adapter for layout engines that live outside this package.

The engine sees a snapshot of the graph and answers with new positions;
the adapter copies them back onto its own nodes. Everything else, including
how the engine iterates, is the engine's business.
"""

from __future__ import annotations

__all__ = ["ExternalLayout", "LayoutEngine"]

from collections.abc import Hashable, Mapping
from typing import Protocol

from force_lab.errors import AlreadyFinished, UnknownNode
from force_lab.graph.model import Graph
from force_lab.layout.base import capture_layout, restore_layout
from force_lab.layout.constants import ITERATIONS_PER_NODE


class LayoutEngine(Protocol):
    def iterate(self, graph: Graph) -> Mapping[Hashable, tuple[float, float]]:
        """Run one internal iteration and return positions by label."""
        ...


class ExternalLayout:
    """Steppable wrapper around a LayoutEngine."""

    name = "external"

    def __init__(
        self,
        graph: Graph,
        engine: LayoutEngine,
        iterations: int | None = None,
    ) -> None:
        self.engine = engine
        self._budget = iterations
        self.set_graph(graph)

    @property
    def finished(self) -> bool:
        return self._finished

    def set_graph(self, graph: Graph) -> None:
        self.graph = graph.copy()
        self._initial = capture_layout(self.graph)
        self._rearm()

    def reset(self) -> None:
        restore_layout(self.graph, self._initial)
        self._rearm()

    def _rearm(self) -> None:
        if self._budget is None:
            self.iterations = ITERATIONS_PER_NODE * len(self.graph)
        else:
            self.iterations = self._budget
        self._finished = self.iterations <= 0

    def step(self) -> None:
        if self._finished:
            raise AlreadyFinished(f"{self.name} layout has finished")
        positions = self.engine.iterate(self.graph.copy())
        for label, pos in positions.items():
            if label not in self.graph:
                raise UnknownNode(f"engine returned unknown node {label!r}")
            self.graph.node(label).pos = pos
        self.iterations -= 1
        self._finished = self.iterations <= 0
