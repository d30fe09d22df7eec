"""SVG export of laid-out graphs."""

from force_lab.render.style import Theme
from force_lab.render.svg import render_svg

__all__ = ["Theme", "render_svg"]
