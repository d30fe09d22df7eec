"""SVG generation for laid-out graphs using drawsvg."""

from __future__ import annotations

import math

import drawsvg as draw

from force_lab.graph.model import Graph
from force_lab.render.style import Theme

DEFAULT_SIZE: int = 600
"""Canvas side in pixels when no width or height is given."""


def render_svg(
    graph: Graph,
    theme: Theme,
    width: int | None = None,
    height: int | None = None,
    padding: float = 30.0,
    show_labels: bool = False,
) -> str:
    """Render the current node positions of ``graph`` to an SVG string.

    The layout is scaled uniformly to fit the canvas. Node size follows the
    layout density, and highlighted nodes are drawn at three times the
    normal radius.
    """
    if not len(graph):
        return '<svg xmlns="http://www.w3.org/2000/svg"></svg>\n'

    svg_width = width or DEFAULT_SIZE
    svg_height = height or DEFAULT_SIZE

    (min_x, max_x), (min_y, max_y) = graph.get_bounds()
    span_x = max(max_x - min_x, 1e-9)
    span_y = max(max_y - min_y, 1e-9)
    scale = min(
        (svg_width - 2 * padding) / span_x,
        (svg_height - 2 * padding) / span_y,
    )
    if max_x == min_x and max_y == min_y:
        scale = 1.0

    def project(x: float, y: float) -> tuple[float, float]:
        return padding + (x - min_x) * scale, padding + (y - min_y) * scale

    inner = (svg_width - 2 * padding) * (svg_height - 2 * padding)
    node_radius = theme.node_scale * min(
        math.sqrt(inner / (len(graph) * math.pi * 20)), padding / 3
    )
    edge_width = node_radius * theme.edge_width_ratio

    d = draw.Drawing(svg_width, svg_height)
    d.append(draw.Rectangle(0, 0, svg_width, svg_height, fill=theme.background_color))

    # Edges behind nodes
    for a, b in graph.edge_list():
        x1, y1 = project(*graph.node(a).pos)
        x2, y2 = project(*graph.node(b).pos)
        d.append(draw.Line(
            x1, y1, x2, y2,
            stroke=theme.edge_color,
            stroke_width=edge_width,
        ))

    for node in graph.node_list():
        cx, cy = project(node.x, node.y)
        d.append(draw.Circle(
            cx, cy,
            node_radius * 3 if node.highlight else node_radius,
            fill=theme.highlight_fill if node.highlight else theme.node_fill,
            stroke=theme.node_stroke,
            stroke_width=theme.node_stroke_width,
        ))

    if show_labels:
        for node in graph.node_list():
            cx, cy = project(node.x, node.y)
            d.append(draw.Text(
                str(node.label),
                node_radius * 2,
                cx, cy + node_radius * 0.8,
                fill=theme.label_color,
                font_family=theme.label_font_family,
                text_anchor="middle",
            ))

    svg = d.as_svg()
    return svg if svg.endswith("\n") else svg + "\n"
