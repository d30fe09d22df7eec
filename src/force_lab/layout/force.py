"""Spring embedders: Eades and Fruchterman-Reingold.

Both share one stepping model. Every unordered node pair contributes a
force from a pluggable pair law, net forces are clamped to a per-step cap,
and positions move by the clamped force directly. No velocity carries over
between steps.

References:
    Eades, P. "A Heuristic for Graph Drawing." (1984)
    Fruchterman, T. M. J., Reingold, E. M. "Graph drawing by
    force-directed placement." (1991)
"""

from __future__ import annotations

__all__ = ["Eades", "FruchtermanReingold", "PairForce", "apply_forces"]

import math
import random
from collections.abc import Callable

from force_lab.errors import AlreadyFinished
from force_lab.graph.model import Graph, Node
from force_lab.graph.vector import Vec
from force_lab.layout.base import capture_layout, restore_layout
from force_lab.layout.constants import (
    EADES_CHARGE,
    EADES_DAMPENING,
    EADES_MAX_FORCE_SCALE,
    EADES_SPRING_LENGTH,
    FR_COOLING,
    FR_K,
    FR_MIN_TEMPERATURE_SCALE,
    FR_TEMPERATURE_SCALE,
    ITERATIONS_PER_NODE,
    MIN_DISTANCE,
)

PairForce = Callable[[Node, Node, float, float, float], Vec]
"""Force on the first node of a pair.

Called as ``law(node1, node2, dx, dy, d)`` where ``(dx, dy)`` points from
node2 to node1 and ``d`` is its length. The second node receives the
opposite force.
"""


def apply_forces(
    graph: Graph,
    pair_force: PairForce,
    max_force: float,
    rng: random.Random | None = None,
) -> list[Vec]:
    """Move every node by the clamped sum of its pairwise forces.

    Returns the clamped net force per node, in index order.
    """
    rng = rng or random.Random()
    nodes = graph.node_list()
    fx = [0.0] * len(nodes)
    fy = [0.0] * len(nodes)

    for i, n1 in enumerate(nodes):
        for j in range(i + 1, len(nodes)):
            n2 = nodes[j]
            dx = n1.x - n2.x
            dy = n1.y - n2.y
            d = math.hypot(dx, dy)
            if d < MIN_DISTANCE:
                # No axis between coincident nodes, pick one
                angle = rng.random() * 2 * math.pi
                dx = math.cos(angle) * MIN_DISTANCE
                dy = math.sin(angle) * MIN_DISTANCE
                d = MIN_DISTANCE
            f = pair_force(n1, n2, dx, dy, d)
            fx[i] += f.x
            fy[i] += f.y
            fx[j] -= f.x
            fy[j] -= f.y

    forces = []
    for node, x, y in zip(nodes, fx, fy):
        mag = math.hypot(x, y)
        if mag > max_force:
            x *= max_force / mag
            y *= max_force / mag
        node.x += x
        node.y += y
        forces.append(Vec(x, y))
    return forces


def repulsion(dx: float, dy: float, d: float, strength: float) -> Vec:
    """Push away along the pair axis with magnitude strength / d**2."""
    s = strength / (d * d) / d
    return Vec(dx * s, dy * s)


class Eades:
    """Spring embedder: edges are springs, every other pair repels."""

    name = "eades"

    def __init__(
        self,
        graph: Graph,
        dampening: float = EADES_DAMPENING,
        spring_length: float = EADES_SPRING_LENGTH,
        charge: float = EADES_CHARGE,
        seed: int | None = None,
    ) -> None:
        self.dampening = dampening
        self.spring_length = spring_length
        self.charge = charge
        self.rng = random.Random(seed)
        self.set_graph(graph)

    @property
    def finished(self) -> bool:
        return self._finished

    def set_graph(self, graph: Graph) -> None:
        self.graph = graph.copy()
        self._initial = capture_layout(self.graph)
        self.max_force = EADES_MAX_FORCE_SCALE * math.sqrt(len(self.graph))
        self._rearm()

    def reset(self) -> None:
        restore_layout(self.graph, self._initial)
        self._rearm()

    def _rearm(self) -> None:
        self.iterations = ITERATIONS_PER_NODE * len(self.graph)
        self._finished = self.iterations == 0

    def pair_force(self, n1: Node, n2: Node, dx: float, dy: float, d: float) -> Vec:
        if n2.index in self.graph.adjacent_indices(n1.index):
            # Pull together when stretched, apart when compressed
            s = -self.dampening * (d - self.spring_length) / d
            return Vec(dx * s, dy * s)
        return repulsion(dx, dy, d, self.charge**2)

    def step(self) -> None:
        if self._finished:
            raise AlreadyFinished(f"{self.name} layout has finished")
        apply_forces(self.graph, self.pair_force, self.max_force, self.rng)
        self.iterations -= 1
        self._finished = self.iterations == 0


class FruchtermanReingold:
    """Force simulation with a cooling force cap.

    Every pair repels with temperature * k**2 / d**2 and edges add an
    attraction that grows with the square of their length. The temperature
    doubles as the force cap and cools geometrically down to a floor.
    """

    name = "fruchterman-reingold"

    def __init__(
        self,
        graph: Graph,
        k: float = FR_K,
        cooling: float = FR_COOLING,
        seed: int | None = None,
    ) -> None:
        self.k = k
        self.cooling = cooling
        self.rng = random.Random(seed)
        self.set_graph(graph)

    @property
    def finished(self) -> bool:
        return self._finished

    def set_graph(self, graph: Graph) -> None:
        self.graph = graph.copy()
        self._initial = capture_layout(self.graph)
        self.min_temperature = FR_MIN_TEMPERATURE_SCALE * math.sqrt(len(self.graph))
        self._rearm()

    def reset(self) -> None:
        restore_layout(self.graph, self._initial)
        self._rearm()

    def _rearm(self) -> None:
        self.temperature = FR_TEMPERATURE_SCALE * math.sqrt(len(self.graph))
        self.iterations = ITERATIONS_PER_NODE * len(self.graph)
        self._finished = self.iterations == 0

    def pair_force(self, n1: Node, n2: Node, dx: float, dy: float, d: float) -> Vec:
        force = repulsion(dx, dy, d, self.temperature * self.k**2)
        if n2.index in self.graph.adjacent_indices(n1.index):
            s = d / self.k
            force = Vec(force.x - dx * s, force.y - dy * s)
        return force

    def step(self) -> None:
        if self._finished:
            raise AlreadyFinished(f"{self.name} layout has finished")
        apply_forces(self.graph, self.pair_force, self.temperature, self.rng)
        self.temperature = max(self.temperature * self.cooling, self.min_temperature)
        self.iterations -= 1
        self._finished = self.iterations == 0
