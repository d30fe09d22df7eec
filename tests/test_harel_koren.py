"""Tests for the Harel-Koren multiscale layout."""

import math
import random

import networkx as nx
import pytest

from force_lab.errors import AlreadyFinished
from force_lab.graph import Graph
from force_lab.layout import HarelKoren, random_layout
from force_lab.layout.harel_koren import next_phase_size


def _grid(seed=3):
    graph = Graph.from_networkx(nx.grid_2d_graph(5, 5))
    random_layout(graph, rng=random.Random(seed))
    return graph


def _path(n):
    graph = Graph(n)
    for i in range(n - 1):
        graph.add_edge(i, i + 1)
    random_layout(graph, rng=random.Random(n))
    return graph


def test_phase_sizes():
    assert HarelKoren(_path(100), seed=1).phase_sizes() == [10, 30, 90, 100]
    assert HarelKoren(_path(5), seed=1).phase_sizes() == [5]
    assert HarelKoren(Graph(), seed=1).phase_sizes() == []


@pytest.mark.parametrize("n", [1, 9, 10, 11, 29, 31, 64])
def test_phase_sizes_grow_to_full_graph(n):
    sizes = HarelKoren(_path(n), seed=1).phase_sizes()
    assert sizes[-1] == n
    assert all(a < b for a, b in zip(sizes, sizes[1:]))


def test_next_phase_size_always_grows():
    assert next_phase_size(1, 10, 1.0) == 2
    assert next_phase_size(4, 10, 3.0) == 10


def test_step_budget():
    algo = HarelKoren(_grid(), seed=1)
    assert algo.phase_sizes() == [10, 25]
    for _ in range(174):
        algo.step()
    assert not algo.finished
    algo.step()
    assert algo.finished
    with pytest.raises(AlreadyFinished):
        algo.step()


def test_first_phase_highlights_centers():
    algo = HarelKoren(_grid(), seed=1)
    highlighted = [n for n in algo.graph.node_list() if n.highlight]
    assert len(highlighted) == 10
    assert {n.index for n in highlighted} == algo.phase.center_indices


def test_non_centers_dropped_near_centers():
    algo = HarelKoren(_grid(), seed=1)
    centers = list(algo.phase.centers)
    center_labels = {c.label for c in centers}
    for _ in range(50):
        algo.step()
    assert algo.phase.is_final
    assert not any(n.highlight for n in algo.graph.node_list())
    for node in algo.graph.node_list():
        if node.label in center_labels:
            continue
        assert any(
            0 <= node.x - c.x <= algo.noise and 0 <= node.y - c.y <= algo.noise
            for c in centers
        )


def test_queue_serves_highest_energy_center():
    algo = HarelKoren(_grid(), seed=1)
    best, energy = algo.kamada.highest_energy_node(algo.phase.centers)
    assert algo.phase.queue.top() is best
    assert algo.phase.queue.top_priority() == pytest.approx(-energy)


def test_input_graph_untouched():
    graph = _grid()
    before = [n.pos for n in graph.node_list()]
    algo = HarelKoren(graph, seed=1)
    for _ in range(20):
        algo.step()
    assert [n.pos for n in graph.node_list()] == before
    assert not any(n.highlight for n in graph.node_list())


def test_reset():
    graph = _grid()
    algo = HarelKoren(graph, seed=1)
    for _ in range(60):
        algo.step()
    algo.reset()
    assert algo.num_super_nodes == 10
    assert not algo.phase.is_final
    assert [n.pos for n in algo.graph.node_list()] == [n.pos for n in graph.node_list()]


def test_set_graph_rederives_granularity():
    algo = HarelKoren(_grid(), seed=1)
    algo.set_graph(_path(4))
    assert algo.min_granularity == 4
    assert algo.phase_sizes() == [4]
    assert algo.phase.is_final


def test_disconnected_graph_runs_to_completion():
    graph = Graph.from_networkx(nx.disjoint_union(nx.path_graph(8), nx.cycle_graph(7)))
    random_layout(graph, rng=random.Random(9))
    algo = HarelKoren(graph, seed=2)
    for _ in range(10_000):
        if algo.finished:
            break
        algo.step()
    assert algo.finished
    assert all(math.isfinite(n.x) and math.isfinite(n.y) for n in algo.graph.node_list())


def test_empty_graph_is_finished():
    assert HarelKoren(Graph()).finished


def test_collapsed_start_is_separated():
    graph = Graph.from_networkx(nx.grid_2d_graph(5, 5))
    algo = HarelKoren(graph, seed=1)
    assert len({n.pos for n in algo.graph.node_list()}) == 25
    assert algo.phase.queue.top_priority() < 0


def test_isolated_supernodes_are_skipped():
    graph = Graph(12)
    random_layout(graph, rng=random.Random(6))
    algo = HarelKoren(graph, seed=6)
    for _ in range(110):
        algo.step()
    assert algo.finished
    assert [n.pos for n in algo.graph.node_list()] == [n.pos for n in graph.node_list()]
