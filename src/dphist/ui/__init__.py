"""User-facing glue: key dispatch and snapshot rendering."""

from .dispatcher import KEY_BINDINGS, dispatch
from .renderer import MENU_TITLES, TextRenderer, display_order, format_menu, format_params, render_snapshot_png

__all__ = [
    "KEY_BINDINGS",
    "dispatch",
    "MENU_TITLES",
    "TextRenderer",
    "display_order",
    "format_menu",
    "format_params",
    "render_snapshot_png",
]
