"""Rendering helpers for the universe simulator."""

from .assets import (
    GlowLibrary,
    get_text_surface,
    load_font,
)
from .draw import (
    draw_body,
    draw_glow,
    draw_scene,
    to_screen,
)
from .ui import (
    build_text_panel,
    hud_lines,
)

__all__ = [
    "GlowLibrary",
    "build_text_panel",
    "draw_body",
    "draw_glow",
    "draw_scene",
    "get_text_surface",
    "hud_lines",
    "load_font",
    "to_screen",
]
