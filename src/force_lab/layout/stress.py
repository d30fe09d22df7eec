"""Stress majorization (Gansner, Koren and North).

Each step moves every node at once (Jacobi style) to the weighted average
of where each other node would put it: the other node's position plus the
ideal graph distance along their current axis, weighted by 1 / distance**2.

The algorithm tracks no convergence criterion of its own; ``finished``
stays False and a driver decides when to stop (see layout.driver).

Reference:
    Gansner, E. R., Koren, Y., North, S. "Graph drawing by stress
    majorization." (2004)
"""

from __future__ import annotations

__all__ = ["StressMajorization"]

import numpy as np

from force_lab.graph.model import Graph
from force_lab.layout.base import capture_layout, restore_layout


class StressMajorization:
    """Synchronous stress majorization over graph distances."""

    name = "stress"

    def __init__(self, graph: Graph) -> None:
        self.set_graph(graph)

    @property
    def finished(self) -> bool:
        return False

    def set_graph(self, graph: Graph) -> None:
        self.graph = graph.copy()
        self.nodes = self.graph.node_list()
        self._initial = capture_layout(self.graph)
        dist = self.graph.distance_matrix()
        finite = np.isfinite(dist)
        with np.errstate(divide="ignore"):
            self._weights = np.where(finite & (dist > 0), 1.0 / dist**2, 0.0)
        self._lengths = np.where(finite, dist, 0.0)
        self.steps = 0

    def reset(self) -> None:
        restore_layout(self.graph, self._initial)
        self.steps = 0

    def _positions(self) -> np.ndarray:
        return np.array([[n.x, n.y] for n in self.nodes], dtype=float).reshape(-1, 2)

    def step(self) -> None:
        pos = self._positions()
        # delta[i, j] = pos[i] - pos[j]
        delta = pos[:, None, :] - pos[None, :, :]
        space = np.hypot(delta[..., 0], delta[..., 1])[..., None]
        unit = np.divide(delta, space, out=np.zeros_like(delta), where=space > 0)
        # Where node j would place node i
        target = pos[None, :, :] + self._lengths[..., None] * unit

        weights = self._weights
        total = weights.sum(axis=1)
        placed = (weights[..., None] * target).sum(axis=1)
        # Nodes that reach no other node keep their position
        new = np.where(
            total[:, None] > 0,
            placed / np.where(total > 0, total, 1.0)[:, None],
            pos,
        )
        for node, (x, y) in zip(self.nodes, new.tolist()):
            node.x, node.y = x, y
        self.steps += 1

    def stress(self) -> float:
        """Weighted squared deviation of layout distances from graph distances."""
        pos = self._positions()
        delta = pos[:, None, :] - pos[None, :, :]
        space = np.hypot(delta[..., 0], delta[..., 1])
        # Each pair appears twice in the full matrix
        return float((self._weights * (space - self._lengths) ** 2).sum() / 2)
