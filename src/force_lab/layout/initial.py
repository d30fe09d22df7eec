"""Seed layouts to start a simulation from."""

from __future__ import annotations

__all__ = ["radial_layout", "random_layout"]

import math
import random

from force_lab.graph.model import Graph
from force_lab.graph.vector import Vec, rotate


def random_layout(
    graph: Graph,
    width: float | None = None,
    rng: random.Random | None = None,
) -> None:
    """Place nodes uniformly at random in a ``width`` x ``width`` square.

    The square's side defaults to the node count.
    """
    rng = rng or random.Random()
    side = float(len(graph)) if width is None else width
    for node in graph.node_list():
        node.pos = (rng.random() * side, rng.random() * side)


def radial_layout(graph: Graph, radius: float) -> None:
    """Space nodes evenly on a circle around the origin, in index order."""
    nodes = graph.node_list()
    if not nodes:
        return
    separation = 2 * math.pi / len(nodes)
    pos = Vec(radius, 0.0)
    for node in nodes:
        node.pos = pos
        pos = rotate(pos, separation)
