"""Theme definitions for rendered layouts."""

from force_lab.themes.dark import DARK_THEME
from force_lab.themes.light import LIGHT_THEME

THEMES = {
    "dark": DARK_THEME,
    "light": LIGHT_THEME,
}

__all__ = ["THEMES", "DARK_THEME", "LIGHT_THEME"]
