"""Dark grey theme."""

from force_lab.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#2b2b2b",
    node_fill="#c093fa",
    node_stroke="#333333",
    highlight_fill="#ff0000",
    edge_color="#a1bed6",
    label_color="#e0e0e0",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
)
