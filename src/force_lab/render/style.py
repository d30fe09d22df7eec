"""Theme definition for graph rendering."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for a rendered layout."""

    name: str
    background_color: str
    node_fill: str
    node_stroke: str
    highlight_fill: str
    edge_color: str
    label_color: str
    label_font_family: str
    node_scale: float = 1.0  # multiplier on the density-based node radius
    edge_width_ratio: float = 0.2  # edge width relative to node radius
    node_stroke_width: float = 1.0
