"""Tests for k-centers selection."""

import random

import networkx as nx
import pytest

from force_lab.errors import InsufficientNodes
from force_lab.graph import Graph, k_centers


def _path(n):
    graph = Graph(n)
    for i in range(n - 1):
        graph.add_edge(i, i + 1)
    return graph


def test_path_farthest_point_order():
    centers = k_centers(_path(5), 3, start=0)
    assert [c.label for c in centers] == [0, 4, 2]


def test_centers_are_distinct():
    graph = Graph.from_networkx(nx.grid_2d_graph(4, 4))
    for k in range(1, 17):
        centers = k_centers(graph, k, rng=random.Random(k))
        assert len(centers) == k
        assert len({c.label for c in centers}) == k


def test_too_many_centers():
    with pytest.raises(InsufficientNodes):
        k_centers(_path(3), 4)


def test_zero_centers():
    assert k_centers(_path(3), 0) == []


def test_isolated_nodes_all_chosen():
    centers = k_centers(Graph(5), 5, start=2)
    assert sorted(c.label for c in centers) == [0, 1, 2, 3, 4]


def test_every_component_gets_a_center_first():
    graph = _path(4)
    graph.add_node("x")
    graph.add_node("y")
    graph.add_edge("x", "y")
    centers = k_centers(graph, 2, start=1)
    assert centers[1].label in ("x", "y")
