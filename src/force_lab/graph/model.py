"""Undirected graph model with a lazily computed shortest-path oracle.

Nodes are addressed by label at the API surface but stored densely: every
node gets a stable integer index at insertion, and adjacency plus the
distance matrix are indexed by it, so the O(n^2) loops of the layout
algorithms never hash labels.
"""

from __future__ import annotations

__all__ = ["Graph", "Node", "UNREACHABLE", "shortest_paths"]

import logging
import math
from collections.abc import Hashable, Iterator
from dataclasses import dataclass

import networkx as nx
import numpy as np

from force_lab.errors import DuplicateEdge, DuplicateNode, SelfLoop, UnknownNode
from force_lab.graph.vector import Vec, intersects

logger = logging.getLogger(__name__)

UNREACHABLE = math.inf
"""Distance reported between nodes in different connected components."""


@dataclass(eq=False)
class Node:
    """A graph node with a mutable 2-D position."""

    label: Hashable
    index: int
    x: float = 0.0
    y: float = 0.0
    # Marks the current supernodes during multiscale refinement
    highlight: bool = False
    weight: float = 1.0

    @property
    def pos(self) -> Vec:
        return Vec(self.x, self.y)

    @pos.setter
    def pos(self, value: tuple[float, float]) -> None:
        self.x, self.y = float(value[0]), float(value[1])


class Graph:
    """Undirected, unweighted graph without parallel edges or self-loops."""

    def __init__(self, n: int = 0) -> None:
        self._nodes: list[Node] = []
        self._index: dict[Hashable, int] = {}
        self._adjacency: list[set[int]] = []
        self._edges: list[tuple[Hashable, Hashable]] = []
        # None means invalid: recomputed on the next distance query
        self._distances: np.ndarray | None = None
        for label in range(n):
            self.add_node(label)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, label: object) -> bool:
        return label in self._index

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, edges={len(self._edges)})"

    @property
    def size(self) -> int:
        return len(self._nodes)

    @property
    def has_distances(self) -> bool:
        """True while the cached distance matrix reflects the current edges."""
        return self._distances is not None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_node(self, label: Hashable) -> Node:
        """Add an isolated node at the origin and return it."""
        if label in self._index:
            raise DuplicateNode(f"node {label!r} already exists")
        node = Node(label=label, index=len(self._nodes))
        self._index[label] = node.index
        self._nodes.append(node)
        self._adjacency.append(set())
        self._distances = None
        return node

    def add_edge(self, a: Hashable, b: Hashable) -> None:
        """Connect two existing nodes."""
        ia = self.index_of(a)
        ib = self.index_of(b)
        if ia == ib:
            raise SelfLoop(f"cannot connect {a!r} to itself")
        if ib in self._adjacency[ia]:
            raise DuplicateEdge(f"{a!r} and {b!r} are already connected")
        self._edges.append((a, b))
        self._adjacency[ia].add(ib)
        self._adjacency[ib].add(ia)
        self._distances = None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def index_of(self, label: Hashable) -> int:
        try:
            return self._index[label]
        except KeyError:
            raise UnknownNode(f"no node labelled {label!r}") from None

    def node(self, label: Hashable) -> Node:
        return self._nodes[self.index_of(label)]

    def node_list(self) -> list[Node]:
        """Return the nodes in insertion (index) order."""
        return list(self._nodes)

    def labels(self) -> list[Hashable]:
        return [n.label for n in self._nodes]

    def edge_list(self) -> list[tuple[Hashable, Hashable]]:
        return list(self._edges)

    def neighbors(self, a: Hashable, b: Hashable) -> bool:
        """Return True if ``a`` and ``b`` share an edge."""
        return self.index_of(b) in self._adjacency[self.index_of(a)]

    def neighbors_of(self, a: Hashable) -> set[Hashable]:
        return {self._nodes[i].label for i in self._adjacency[self.index_of(a)]}

    def adjacent_indices(self, index: int) -> set[int]:
        """Neighbor indices of the node at ``index`` (no copy, do not mutate)."""
        return self._adjacency[index]

    # ------------------------------------------------------------------
    # Distance oracle
    # ------------------------------------------------------------------

    def compute_distances(self) -> None:
        """Recompute the all-pairs shortest-path matrix now."""
        logger.debug("Computing shortest paths for %d nodes", len(self._nodes))
        self._distances = shortest_paths(self)

    def distance_matrix(self) -> np.ndarray:
        """Return the dense distance matrix, indexed by node index.

        Entries are floats; unreachable pairs hold ``inf``. The array is
        shared with copies of this graph and must not be written to.
        """
        if self._distances is None:
            self.compute_distances()
        return self._distances

    def dist(self, u: Hashable, v: Hashable) -> int | float:
        """Graph-theoretic distance between two nodes.

        Returns the edge count of a shortest path, or ``UNREACHABLE``.
        """
        value = self.distance_matrix()[self.index_of(u), self.index_of(v)]
        if math.isinf(value):
            return UNREACHABLE
        return int(value)

    def diameter(self) -> int:
        """Largest finite distance between any two nodes."""
        if len(self._nodes) < 2:
            return 0
        dist = self.distance_matrix()
        finite = dist[np.isfinite(dist)]
        return int(finite.max())

    def is_connected(self) -> bool:
        if not self._nodes:
            return True
        return bool(np.isfinite(self.distance_matrix()).all())

    # ------------------------------------------------------------------
    # Layout diagnostics
    # ------------------------------------------------------------------

    def get_bounds(self) -> tuple[tuple[float, float], tuple[float, float]]:
        """Return ((min_x, max_x), (min_y, max_y)) of the node positions."""
        if not self._nodes:
            return (0.0, 0.0), (0.0, 0.0)
        xs = [n.x for n in self._nodes]
        ys = [n.y for n in self._nodes]
        return (min(xs), max(xs)), (min(ys), max(ys))

    def edge_crossings(self) -> int:
        """Count pairs of straight-line edges that cross in the current layout."""
        crossings = 0
        edges = [(self._index[u], self._index[v]) for u, v in self._edges]
        for i, (u, v) in enumerate(edges):
            for w, z in edges[i + 1:]:
                # Edges sharing an endpoint cannot cross
                if u in (w, z) or v in (w, z):
                    continue
                nodes = self._nodes
                if intersects(nodes[u].pos, nodes[v].pos, nodes[w].pos, nodes[z].pos):
                    crossings += 1
        return crossings

    # ------------------------------------------------------------------
    # Copy and interop
    # ------------------------------------------------------------------

    def copy(self) -> Graph:
        """Independent graph with the same topology and positions.

        Distances depend only on edges, so a still-valid matrix is carried
        over by reference.
        """
        new = Graph()
        for node in self._nodes:
            clone = new.add_node(node.label)
            clone.x, clone.y = node.x, node.y
            clone.highlight = node.highlight
            clone.weight = node.weight
        for a, b in self._edges:
            new.add_edge(a, b)
        new._distances = self._distances
        return new

    @classmethod
    def from_networkx(cls, G: nx.Graph) -> Graph:
        """Copy the topology of an undirected networkx graph.

        Node attributes are not copied, except ``pos`` when present.
        Self-loops are dropped and multigraph edges collapse to one.
        """
        if G.is_directed():
            raise ValueError("directed graphs are not supported")
        graph = cls()
        for label, data in G.nodes(data=True):
            node = graph.add_node(label)
            if "pos" in data:
                node.pos = data["pos"]
        for u, v in G.edges():
            if u == v or graph.neighbors(u, v):
                continue
            graph.add_edge(u, v)
        return graph

    def to_networkx(self) -> nx.Graph:
        G = nx.Graph()
        for node in self._nodes:
            G.add_node(node.label, pos=(node.x, node.y))
        G.add_edges_from(self._edges)
        return G


def shortest_paths(graph: Graph) -> np.ndarray:
    """All-pairs shortest paths by Floyd-Warshall with unit edge weights.

    Row and column ``k`` are fixed points of iteration ``k``, so each
    iteration relaxes the whole matrix against them in one vectorized pass.
    """
    n = len(graph)
    dist = np.full((n, n), np.inf)
    np.fill_diagonal(dist, 0.0)
    for i in range(n):
        neighbors = graph.adjacent_indices(i)
        if neighbors:
            dist[i, sorted(neighbors)] = 1.0
    for k in range(n):
        np.minimum(dist, dist[:, k, None] + dist[None, k, :], out=dist)
    return dist
