from __future__ import annotations

from typing import Sequence

import pygame

from .assets import Color, get_text_surface


def hud_lines(
    *,
    planets: int,
    satellites: int,
    tick: int,
    fps: float,
    scenario_name: str,
) -> list[str]:
    return [
        f"Scenario: {scenario_name}",
        f"Planets: {planets}",
        f"Satellites: {satellites}",
        f"Tick: {tick}",
        f"FPS: {fps:.0f}",
        "Click empty space to spawn, drag planets to move",
        "H: toggle HUD   R: reseed   Esc: quit",
    ]


def build_text_panel(
    font: pygame.font.Font,
    lines: Sequence[tuple[str, tuple[int, int, int]]],
    *,
    background_color: Color,
    padding: tuple[int, int] = (14, 14),
    alpha: int | None = None,
) -> pygame.Surface:
    if not lines:
        raise ValueError("lines must not be empty")
    padding_x, padding_y = padding
    line_height = font.get_linesize()
    width = max(font.size(text)[0] for text, _ in lines) + padding_x * 2
    height = line_height * len(lines) + padding_y * 2
    panel_surface = pygame.Surface((width, height), pygame.SRCALPHA)
    pygame.draw.rect(
        panel_surface,
        background_color,
        panel_surface.get_rect(),
        border_radius=12,
    )
    for idx, (text, color) in enumerate(lines):
        if not text:
            continue
        text_surf = get_text_surface(font, text, color)
        panel_surface.blit(text_surf, (padding_x, padding_y + idx * line_height))
    if alpha is not None and alpha < 255:
        panel_surface.set_alpha(alpha)
    return panel_surface
