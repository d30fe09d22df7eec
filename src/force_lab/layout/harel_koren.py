"""Harel-Koren multiscale layout.

Runs Kamada-Kawai on a growing sequence of coarse graphs. In each phase a
set of supernodes is chosen by k-centers and only those are relaxed, each
against the other supernodes within a neighborhood radius. Between phases
every other node is dropped onto its nearest supernode, and the supernode
count grows geometrically until the last phase covers the whole graph.

A priority queue keyed by negated local energy picks the worst supernode;
after a move only the moved supernode's neighborhood is re-scored.

Reference:
    Harel, D., Koren, Y. "A fast multi-scale method for drawing large
    graphs." (2000)
"""

from __future__ import annotations

__all__ = ["HarelKoren", "PhaseState"]

import logging
import math
import random
from dataclasses import dataclass, field

from force_lab.errors import AlreadyFinished, DegenerateSystem
from force_lab.graph.centers import k_centers
from force_lab.graph.model import Graph, Node
from force_lab.graph.priority_queue import IndexedPriorityQueue
from force_lab.layout.base import capture_layout, restore_layout
from force_lab.layout.constants import (
    HK_COARSE_RATE,
    HK_ITERATIONS,
    HK_LOCAL_RADIUS,
    HK_MIN_GRANULARITY,
    HK_NOISE,
)
from force_lab.layout.kamada import KamadaKawai

logger = logging.getLogger(__name__)


@dataclass
class PhaseState:
    """Everything one multiscale phase works with."""

    size: int
    centers: list[Node]
    center_indices: set[int]
    radius: float
    # center index -> centers within radius (itself included)
    neighborhoods: dict[int, list[Node]]
    queue: IndexedPriorityQueue[Node] = field(default_factory=IndexedPriorityQueue)
    # center index -> queue entry id
    queue_ids: dict[int, int] = field(default_factory=dict)
    remaining: int = 0
    is_final: bool = False


def next_phase_size(size: int, total: int, coarse_rate: float) -> int:
    """Supernode count of the phase after one with ``size`` supernodes."""
    return min(total, max(size + 1, int(size * coarse_rate)))


class HarelKoren:
    """Multiscale Kamada-Kawai over k-centers supernodes."""

    name = "harel-koren"

    def __init__(
        self,
        graph: Graph,
        local_radius: float = HK_LOCAL_RADIUS,
        iterations: int = HK_ITERATIONS,
        coarse_rate: float = HK_COARSE_RATE,
        noise: float = HK_NOISE,
        seed: int | None = None,
    ) -> None:
        self.local_radius = local_radius
        self.iterations = iterations
        self.coarse_rate = coarse_rate
        self.noise = noise
        self.rng = random.Random(seed)
        self.set_graph(graph)

    @property
    def finished(self) -> bool:
        return self._finished

    def set_graph(self, graph: Graph) -> None:
        self.graph = graph.copy()
        self.nodes = self.graph.node_list()
        self._initial = capture_layout(self.graph)
        self.min_granularity = min(HK_MIN_GRANULARITY, len(self.graph))
        self.kamada = KamadaKawai(self.graph, copy=False)
        self.kamada.rng = self.rng
        self._rearm()

    def reset(self) -> None:
        restore_layout(self.graph, self._initial)
        self._rearm()

    def _rearm(self) -> None:
        self.num_super_nodes = self.min_granularity
        self._finished = not self.nodes
        self.phase: PhaseState | None = None
        if not self._finished:
            self.phase = self._start_phase(self.num_super_nodes)

    def phase_sizes(self) -> list[int]:
        """Supernode counts of every phase, coarsest first."""
        total = len(self.graph)
        if total == 0:
            return []
        sizes = [self.min_granularity]
        while sizes[-1] < total:
            sizes.append(next_phase_size(sizes[-1], total, self.coarse_rate))
        return sizes

    def _start_phase(self, size: int) -> PhaseState:
        is_final = size == len(self.graph)
        dist = self.graph.distance_matrix()
        self.kamada.separate_coincident()

        if is_final:
            centers = list(self.nodes)
            radius = self.local_radius
        else:
            centers = k_centers(self.graph, size, rng=self.rng)
            # The sparsest center's distance to its nearest neighbor center
            # scales the neighborhood radius
            spacing = max(
                min((dist[c.index, o.index] for o in centers if o is not c), default=0.0)
                for c in centers
            )
            radius = spacing * self.local_radius
            for c in centers:
                c.highlight = True

        center_indices = {c.index for c in centers}
        neighborhoods = {
            c.index: [o for o in centers if dist[c.index, o.index] <= radius]
            for c in centers
        }

        def within_radius(u: Node, v: Node) -> bool:
            return v.index in center_indices and dist[u.index, v.index] <= radius

        self.kamada.discriminator = within_radius

        phase = PhaseState(
            size=size,
            centers=centers,
            center_indices=center_indices,
            radius=radius,
            neighborhoods=neighborhoods,
            remaining=size * self.iterations,
            is_final=is_final,
        )
        for c in centers:
            # Negated: the queue serves the lowest value, we want the highest energy
            phase.queue_ids[c.index] = phase.queue.enqueue(
                c, -self.kamada.compute_energy(c)
            )
        logger.debug(
            "%s phase with %d supernodes, radius %g", self.name, size, radius
        )
        return phase

    def _end_phase(self, phase: PhaseState) -> None:
        """Drop every non-center onto its nearest center, with jitter."""
        if phase.is_final:
            return
        dist = self.graph.distance_matrix()
        for node in self.nodes:
            if node.index in phase.center_indices:
                node.highlight = False
                continue
            nearest = min(phase.centers, key=lambda c: dist[c.index, node.index])
            if math.isinf(dist[nearest.index, node.index]):
                # No center in this component, leave the node where it is
                continue
            node.x = nearest.x + self.rng.random() * self.noise
            node.y = nearest.y + self.rng.random() * self.noise

    def advance_phase(self) -> None:
        """Close the current phase and open the next, or finish after the last."""
        if self._finished or self.phase is None:
            raise AlreadyFinished(f"{self.name} layout has finished")
        self._end_phase(self.phase)
        if self.phase.is_final:
            self._finished = True
            return
        self.num_super_nodes = next_phase_size(
            self.num_super_nodes, len(self.graph), self.coarse_rate
        )
        self.phase = self._start_phase(self.num_super_nodes)

    def step(self) -> None:
        """Relax the supernode with the highest local energy.

        A supernode with no other supernode in reach raises DegenerateSystem
        inside the relaxation; the step logs it and goes on. Any Newton moves
        made before the error are kept.
        """
        if self._finished or self.phase is None:
            raise AlreadyFinished(f"{self.name} layout has finished")
        phase = self.phase

        node = phase.queue.top()
        try:
            self.kamada.move_node(node)
        except DegenerateSystem:
            # No other supernode within reach; nothing pulls on this one
            logger.debug("%s skipped isolated supernode %r", self.name, node.label)
        for other in phase.neighborhoods[node.index]:
            phase.queue.update_priority(
                phase.queue_ids[other.index], -self.kamada.compute_energy(other)
            )

        phase.remaining -= 1
        if phase.remaining <= 0:
            self.advance_phase()
