"""Light theme."""

from force_lab.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    background_color="none",
    node_fill="#75c1ff",
    node_stroke="#333333",
    highlight_fill="#c80000",
    edge_color="#8a8a8a",
    label_color="#333333",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    node_stroke_width=1.5,
)
