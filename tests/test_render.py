"""Tests for SVG rendering."""

import xml.etree.ElementTree as ET

import pytest

from force_lab.graph import Graph
from force_lab.layout import radial_layout
from force_lab.render.svg import render_svg
from force_lab.themes import DARK_THEME, LIGHT_THEME, THEMES

SVG_NS = "{http://www.w3.org/2000/svg}"


def _triangle():
    graph = Graph()
    for name in ("alpha", "beta", "gamma"):
        graph.add_node(name)
    graph.add_edge("alpha", "beta")
    graph.add_edge("beta", "gamma")
    graph.add_edge("gamma", "alpha")
    radial_layout(graph, radius=10)
    return graph


def test_render_produces_valid_svg():
    root = ET.fromstring(render_svg(_triangle(), DARK_THEME))
    assert root.tag == f"{SVG_NS}svg"


def test_one_circle_per_node_one_line_per_edge():
    root = ET.fromstring(render_svg(_triangle(), DARK_THEME))
    assert len(list(root.iter(f"{SVG_NS}circle"))) == 3
    assert len(list(root.iter(f"{SVG_NS}line"))) == 3


def test_theme_colors():
    svg = render_svg(_triangle(), DARK_THEME)
    assert DARK_THEME.background_color in svg
    assert DARK_THEME.node_fill in svg
    assert DARK_THEME.edge_color in svg


def test_highlighted_nodes_are_larger():
    graph = _triangle()
    graph.node("beta").highlight = True
    root = ET.fromstring(render_svg(graph, LIGHT_THEME))
    circles = {c.get("fill"): float(c.get("r")) for c in root.iter(f"{SVG_NS}circle")}
    assert circles[LIGHT_THEME.highlight_fill] == pytest.approx(3 * circles[LIGHT_THEME.node_fill], rel=1e-3)


def test_nodes_fit_canvas():
    root = ET.fromstring(render_svg(_triangle(), DARK_THEME, width=200, height=100))
    for circle in root.iter(f"{SVG_NS}circle"):
        assert 0 <= float(circle.get("cx")) <= 200
        assert 0 <= float(circle.get("cy")) <= 100


def test_labels_optional():
    assert "alpha" not in render_svg(_triangle(), DARK_THEME)
    assert "alpha" in render_svg(_triangle(), DARK_THEME, show_labels=True)


def test_single_node():
    graph = Graph(1)
    root = ET.fromstring(render_svg(graph, DARK_THEME))
    assert len(list(root.iter(f"{SVG_NS}circle"))) == 1


def test_empty_graph():
    svg = render_svg(Graph(), DARK_THEME)
    assert svg.endswith("\n")
    assert ET.fromstring(svg).tag == f"{SVG_NS}svg"


def test_theme_registry():
    assert THEMES["dark"] is DARK_THEME
    assert THEMES["light"] is LIGHT_THEME
