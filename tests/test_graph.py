"""Tests for the graph model and the shortest-path oracle."""

import itertools

import networkx as nx
import pytest

from force_lab.errors import DuplicateEdge, DuplicateNode, SelfLoop, UnknownNode
from force_lab.graph import UNREACHABLE, Graph


def _make_path(n=4):
    graph = Graph(n)
    for i in range(n - 1):
        graph.add_edge(i, i + 1)
    return graph


def _place(graph, positions):
    for label, pos in positions.items():
        graph.node(label).pos = pos


def test_add_node_duplicate():
    graph = Graph()
    graph.add_node("a")
    with pytest.raises(DuplicateNode):
        graph.add_node("a")


def test_add_edge_unknown_node():
    graph = Graph(2)
    with pytest.raises(UnknownNode):
        graph.add_edge(0, 5)
    with pytest.raises(UnknownNode):
        graph.add_edge(7, 1)
    assert graph.edge_list() == []


def test_add_edge_duplicate_either_order():
    graph = Graph(2)
    graph.add_edge(0, 1)
    with pytest.raises(DuplicateEdge):
        graph.add_edge(0, 1)
    with pytest.raises(DuplicateEdge):
        graph.add_edge(1, 0)
    assert graph.edge_list() == [(0, 1)]


def test_add_edge_self_loop():
    graph = Graph(1)
    with pytest.raises(SelfLoop):
        graph.add_edge(0, 0)


def test_errors_are_builtin_compatible():
    graph = Graph(1)
    with pytest.raises(KeyError):
        graph.node("missing")
    with pytest.raises(ValueError):
        graph.add_node(0)


def test_neighbors_symmetric():
    graph = _make_path(3)
    assert graph.neighbors(0, 1)
    assert graph.neighbors(1, 0)
    assert not graph.neighbors(0, 2)
    assert graph.neighbors_of(1) == {0, 2}
    assert graph.neighbors_of(0) == {1}


def test_path_distances():
    graph = _make_path(4)
    assert graph.dist(0, 3) == 3
    assert graph.dist(0, 1) == 1
    assert graph.dist(1, 3) == 2
    assert graph.dist(3, 0) == 3


def test_self_distance_zero():
    graph = Graph.from_networkx(nx.petersen_graph())
    for label in graph.labels():
        assert graph.dist(label, label) == 0


def test_distances_match_networkx():
    G = nx.connected_watts_strogatz_graph(16, 4, 0.3, seed=4)
    graph = Graph.from_networkx(G)
    expected = dict(nx.all_pairs_shortest_path_length(G))
    for u, v in itertools.product(G.nodes, repeat=2):
        assert graph.dist(u, v) == expected[u][v]


def test_triangle_inequality():
    graph = Graph.from_networkx(nx.barbell_graph(4, 3))
    labels = graph.labels()
    for u, v, w in itertools.product(labels, repeat=3):
        assert graph.dist(u, v) <= graph.dist(u, w) + graph.dist(w, v)


def test_distance_cache_idempotent():
    graph = _make_path(5)
    first = [[graph.dist(u, v) for v in range(5)] for u in range(5)]
    matrix = graph.distance_matrix()
    second = [[graph.dist(u, v) for v in range(5)] for u in range(5)]
    assert first == second
    assert graph.distance_matrix() is matrix


def test_add_edge_invalidates_cache():
    graph = _make_path(5)
    assert graph.dist(0, 4) == 4
    assert graph.has_distances
    graph.add_edge(0, 4)
    assert not graph.has_distances
    assert graph.dist(0, 4) == 1
    assert graph.dist(1, 4) == 2


def test_add_node_invalidates_cache():
    graph = _make_path(3)
    graph.distance_matrix()
    graph.add_node(3)
    assert not graph.has_distances
    assert graph.dist(0, 3) == UNREACHABLE


def test_isolated_nodes_unreachable():
    graph = Graph(5)
    for u in range(5):
        for v in range(5):
            if u == v:
                assert graph.dist(u, v) == 0
            else:
                assert graph.dist(u, v) == UNREACHABLE
    assert not graph.is_connected()
    assert graph.diameter() == 0


def test_diameter_ignores_unreachable():
    graph = _make_path(4)
    graph.add_node("lonely")
    assert graph.diameter() == 3
    assert not graph.is_connected()
    assert _make_path(4).is_connected()


def test_copy_is_independent():
    graph = _make_path(3)
    _place(graph, {0: (1.0, 2.0), 1: (3.0, 4.0), 2: (5.0, 6.0)})
    clone = graph.copy()
    assert clone.node(1).pos == (3.0, 4.0)
    clone.node(1).pos = (9.0, 9.0)
    assert graph.node(1).pos == (3.0, 4.0)
    clone.add_edge(0, 2)
    assert not graph.neighbors(0, 2)
    assert clone.node(0) is not graph.node(0)


def test_copy_carries_valid_cache():
    graph = _make_path(4)
    matrix = graph.distance_matrix()
    clone = graph.copy()
    assert clone.has_distances
    assert clone.distance_matrix() is matrix


def test_copy_without_cache():
    graph = _make_path(4)
    clone = graph.copy()
    assert not clone.has_distances
    assert clone.dist(0, 3) == 3


def test_get_bounds():
    graph = Graph(3)
    _place(graph, {0: (-1.0, 2.0), 1: (4.0, -3.0), 2: (0.5, 0.5)})
    assert graph.get_bounds() == ((-1.0, 4.0), (-3.0, 2.0))


def test_get_bounds_empty():
    assert Graph().get_bounds() == ((0.0, 0.0), (0.0, 0.0))


def test_edge_crossings_square_diagonals():
    graph = Graph(4)
    _place(graph, {0: (0, 0), 1: (1, 0), 2: (1, 1), 3: (0, 1)})
    graph.add_edge(0, 2)
    graph.add_edge(1, 3)
    assert graph.edge_crossings() == 1


def test_edge_crossings_square_outline():
    graph = Graph(4)
    _place(graph, {0: (0, 0), 1: (1, 0), 2: (1, 1), 3: (0, 1)})
    for a, b in [(0, 1), (1, 2), (2, 3), (3, 0)]:
        graph.add_edge(a, b)
    assert graph.edge_crossings() == 0


def test_from_networkx_rejects_directed():
    with pytest.raises(ValueError):
        Graph.from_networkx(nx.DiGraph([(0, 1)]))


def test_from_networkx_drops_self_loops_and_keeps_pos():
    G = nx.MultiGraph()
    G.add_node("a", pos=(1.0, 2.0))
    G.add_edges_from([("a", "b"), ("a", "b"), ("b", "b")])
    graph = Graph.from_networkx(G)
    assert graph.edge_list() == [("a", "b")]
    assert graph.node("a").pos == (1.0, 2.0)


def test_to_networkx_roundtrip_topology():
    graph = _make_path(4)
    G = graph.to_networkx()
    assert set(G.nodes) == {0, 1, 2, 3}
    assert G.number_of_edges() == 3
    assert G.nodes[0]["pos"] == (0.0, 0.0)
