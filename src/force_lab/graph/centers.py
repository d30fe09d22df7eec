"""k-centers clustering by farthest-point selection.

Greedy 2-approximation: after a first center, keep choosing the node whose
distance to its nearest chosen center is largest.
"""

from __future__ import annotations

__all__ = ["k_centers"]

import random
from collections.abc import Hashable

import numpy as np

from force_lab.errors import InsufficientNodes
from force_lab.graph.model import Graph, Node


def k_centers(
    graph: Graph,
    k: int,
    rng: random.Random | None = None,
    start: Hashable | None = None,
) -> list[Node]:
    """Choose ``k`` distinct nodes spread out by graph distance.

    Args:
        graph: The graph to cluster.
        k: Number of centers.
        rng: Source for drawing the first center when ``start`` is None.
        start: Label of the first center.

    Returns the centers in selection order. Unreachable nodes count as
    infinitely far, so every connected component receives a center before
    any component receives a second one. Ties go to the lowest index.
    """
    nodes = graph.node_list()
    if k > len(nodes):
        raise InsufficientNodes(
            f"graph has {len(nodes)} nodes, cannot choose {k} centers"
        )
    if k <= 0:
        return []

    if start is not None:
        first = graph.index_of(start)
    else:
        first = (rng or random).randrange(len(nodes))

    dist = graph.distance_matrix()
    # Distance from every node to its nearest chosen center
    nearest = dist[first].copy()
    chosen = [first]
    nearest[first] = -1.0

    while len(chosen) < k:
        # argmax returns the first maximum, and inf beats every finite value
        candidate = int(np.argmax(nearest))
        chosen.append(candidate)
        np.minimum(nearest, dist[candidate], out=nearest)
        nearest[chosen] = -1.0

    return [nodes[i] for i in chosen]
