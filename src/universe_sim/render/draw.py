from __future__ import annotations

from typing import Iterable, TYPE_CHECKING

import pygame

from .assets import GlowLibrary

if TYPE_CHECKING:  # pragma: no cover
    from universe_sim.core.config import RenderCfg
    from universe_sim.core.scene import Drawable


def to_screen(position: tuple[float, float]) -> tuple[int, int]:
    return int(round(position[0])), int(round(position[1]))


def draw_glow(
    surface: pygame.Surface,
    position: tuple[int, int],
    radius: int,
    *,
    color: tuple[int, int, int],
    blur: int,
    glows: GlowLibrary,
) -> None:
    if blur <= 0:
        return
    glow = glows.get_glow(radius, color, blur)
    surface.blit(glow, glow.get_rect(center=position))


def draw_body(
    surface: pygame.Surface,
    drawable: Drawable,
    *,
    glows: GlowLibrary,
) -> None:
    position = to_screen(drawable.position)
    # sub-pixel satellites still get one lit pixel
    radius = max(1, int(round(drawable.radius)))
    draw_glow(
        surface,
        position,
        radius,
        color=drawable.glow.color,
        blur=drawable.glow.blur,
        glows=glows,
    )
    pygame.draw.circle(surface, drawable.fill_color, position, radius)


def draw_scene(
    surface: pygame.Surface,
    drawables: Iterable[Drawable],
    *,
    render_cfg: RenderCfg,
    glows: GlowLibrary,
) -> None:
    surface.fill(render_cfg.background_color)
    for drawable in drawables:
        draw_body(surface, drawable, glows=glows)
