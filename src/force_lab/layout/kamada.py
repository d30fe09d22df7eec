"""Kamada-Kawai energy minimization.

Every node pair is joined by a spring whose ideal length is the pair's graph
distance and whose stiffness is 1 / distance**2. A node's energy is the
magnitude of the net spring force on it. Each step relaxes the node with the
highest energy by Newton iterations on its two coordinates. A Newton move
that would raise the node's spring stress is replaced by a gradient step,
so every move lowers the total stress.

Reference:
    Kamada, T., Kawai, S. "An algorithm for drawing general undirected
    graphs." (1989)
"""

from __future__ import annotations

__all__ = ["Discriminator", "KamadaKawai", "consider_all"]

import logging
import math
import random
from collections.abc import Callable, Iterable

import numpy as np

from force_lab.errors import AlreadyFinished, DegenerateSystem
from force_lab.graph.model import Graph, Node
from force_lab.layout.base import capture_layout, restore_layout
from force_lab.layout.constants import (
    KK_ENERGY_THRESHOLD,
    KK_MAX_VERTEX_ITERS,
    KK_STABLE_COUNT_THRESHOLD,
    KK_STABLE_THRESHOLD,
    MIN_DISTANCE,
)

logger = logging.getLogger(__name__)

Discriminator = Callable[[Node, Node], bool]
"""Predicate deciding whether node v counts toward the energy of node u."""


def consider_all(u: Node, v: Node) -> bool:
    return True


class KamadaKawai:
    """Spring model over graph distances, relaxed one node at a time."""

    name = "kamada-kawai"

    def __init__(
        self,
        graph: Graph,
        energy_threshold: float = KK_ENERGY_THRESHOLD,
        stable_threshold: float = KK_STABLE_THRESHOLD,
        stable_count_threshold: int = KK_STABLE_COUNT_THRESHOLD,
        max_vertex_iters: int = KK_MAX_VERTEX_ITERS,
        seed: int | None = None,
        copy: bool = True,
    ) -> None:
        self.energy_threshold = energy_threshold
        self.stable_threshold = stable_threshold
        self.stable_count_threshold = stable_count_threshold
        self.max_vertex_iters = max_vertex_iters
        self.discriminator: Discriminator = consider_all
        self.rng = random.Random(seed)
        self.set_graph(graph, copy=copy)

    @property
    def finished(self) -> bool:
        return self._finished

    def set_graph(self, graph: Graph, copy: bool = True) -> None:
        """Bind to ``graph`` and rebuild the spring model from its distances.

        With ``copy=False`` the algorithm works on the given graph directly;
        a composing algorithm uses this to share its own private graph.
        """
        self.graph = graph.copy() if copy else graph
        self.nodes = self.graph.node_list()
        self._initial = capture_layout(self.graph)
        self._model_springs()
        self._rearm()

    def reset(self) -> None:
        restore_layout(self.graph, self._initial)
        self._rearm()

    def _rearm(self) -> None:
        self.stable_count = 0
        self.previous_max_energy = math.inf
        self._finished = not self.nodes

    def _model_springs(self) -> None:
        dist = self.graph.distance_matrix()
        finite = np.isfinite(dist)
        with np.errstate(divide="ignore"):
            # Unreachable pairs and the diagonal carry no spring
            strengths = np.where(finite & (dist > 0), 1.0 / dist**2, 0.0)
        lengths = np.where(finite, dist, 0.0)
        # Nested lists index faster than numpy scalars in the per-pair loops
        self._lengths: list[list[float]] = lengths.tolist()
        self._strengths: list[list[float]] = strengths.tolist()

    def _springs(self, node: Node) -> Iterable[tuple[float, float, float, float]]:
        """Yield (dx, dy, length, strength) for every spring acting on ``node``."""
        i = node.index
        lengths = self._lengths[i]
        strengths = self._strengths[i]
        for other in self.nodes:
            j = other.index
            if strengths[j] == 0.0 or not self.discriminator(node, other):
                continue
            dx = node.x - other.x
            dy = node.y - other.y
            if dx == 0.0 and dy == 0.0:
                continue
            yield dx, dy, lengths[j], strengths[j]

    def separate_coincident(self) -> int:
        """Nudge every node that shares a position with an earlier node.

        Coincident pairs exert no spring on each other, so a collapsed
        layout would otherwise read as converged. Each nudge is
        ``MIN_DISTANCE`` along a random axis. Returns the number of nodes
        moved.
        """
        occupied = set()
        moved = 0
        for node in self.nodes:
            if node.pos in occupied:
                angle = self.rng.random() * 2 * math.pi
                node.x += math.cos(angle) * MIN_DISTANCE
                node.y += math.sin(angle) * MIN_DISTANCE
                moved += 1
            occupied.add(node.pos)
        if moved:
            logger.debug("%s separated %d coincident nodes", self.name, moved)
        return moved

    def local_stress(self, node: Node) -> float:
        """Spring stress of the pairs that involve ``node``."""
        stress = 0.0
        for dx, dy, length, strength in self._springs(node):
            stress += strength * (math.hypot(dx, dy) - length) ** 2
        return stress / 2

    def compute_energy(self, node: Node) -> float:
        """Magnitude of the net spring force on ``node``."""
        fx = 0.0
        fy = 0.0
        for dx, dy, length, strength in self._springs(node):
            s = strength * (1.0 - length / math.hypot(dx, dy))
            fx += dx * s
            fy += dy * s
        return math.hypot(fx, fy)

    def highest_energy_node(
        self, candidates: Iterable[Node] | None = None
    ) -> tuple[Node, float]:
        """Return the node with the highest energy and that energy.

        Only ``candidates`` are scanned when given, otherwise every node.
        """
        best: Node | None = None
        best_energy = -math.inf
        for node in self.nodes if candidates is None else candidates:
            energy = self.compute_energy(node)
            if energy > best_energy:
                best, best_energy = node, energy
        if best is None:
            raise ValueError("no nodes to choose from")
        return best, best_energy

    def compute_next_position(self, node: Node) -> None:
        """Apply one Newton step to the position of ``node``.

        Solves the 2x2 system built from the first and second partial
        derivatives of the node's energy. When the second derivatives are
        not positive definite, or the Newton move would raise the node's
        stress, the node instead takes a gradient step of length
        1 / (total spring strength), which never raises the stress.

        Raises DegenerateSystem, leaving the node in place, when no spring
        acts on the node or the derivatives are not finite.
        """
        ex = ey = exx = exy = eyy = 0.0
        total = 0.0
        for dx, dy, length, strength in self._springs(node):
            space = math.hypot(dx, dy)
            cubed = space**3
            total += strength
            ex += strength * dx * (1.0 - length / space)
            ey += strength * dy * (1.0 - length / space)
            exy += strength * length * dx * dy / cubed
            exx += strength * (1.0 - length * dy * dy / cubed)
            eyy += strength * (1.0 - length * dx * dx / cubed)

        determinant = exx * eyy - exy * exy
        if total == 0.0 or not math.isfinite(determinant):
            raise DegenerateSystem(f"singular Newton system at node {node.label!r}")

        x, y = node.x, node.y
        if determinant > 0.0 and exx > 0.0:
            before = self.local_stress(node)
            node.x = x + (exy * ey - eyy * ex) / determinant
            node.y = y + (exy * ex - exx * ey) / determinant
            if self.local_stress(node) <= before:
                return
        node.x = x - ex / total
        node.y = y - ey / total

    def move_node(self, node: Node) -> float:
        """Relax ``node`` until its energy is small or the budget runs out.

        Returns the node's energy after the last Newton step. If a later
        iteration raises DegenerateSystem, the moves already made are kept.
        """
        energy = self.compute_energy(node)
        for _ in range(self.max_vertex_iters):
            self.compute_next_position(node)
            energy = self.compute_energy(node)
            if energy <= self.energy_threshold:
                break
        return energy

    def step(self) -> None:
        """Relax the highest-energy node, or finish if there is nothing to do."""
        if self._finished:
            raise AlreadyFinished(f"{self.name} layout has finished")

        self.separate_coincident()
        node, energy = self.highest_energy_node()
        if abs(energy - self.previous_max_energy) < self.stable_threshold:
            self.stable_count += 1
        else:
            self.stable_count = 0
        self.previous_max_energy = energy

        if energy <= self.energy_threshold:
            logger.debug("%s converged, max energy %g", self.name, energy)
            self._finished = True
            return
        if self.stable_count >= self.stable_count_threshold:
            logger.debug("%s plateaued at max energy %g", self.name, energy)
            self._finished = True
            return

        self.move_node(node)
