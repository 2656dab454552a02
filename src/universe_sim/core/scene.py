"""Conversion of simulation state into renderer-agnostic circles."""
from __future__ import annotations

from dataclasses import dataclass

from .config import RENDER_CFG, GlowStyle, RenderCfg


@dataclass(frozen=True)
class Drawable:
    position: tuple[float, float]
    radius: float
    fill_color: tuple[int, int, int]
    glow: GlowStyle


def build_drawables(state, render_cfg: RenderCfg = RENDER_CFG) -> list[Drawable]:
    """Planets first, then satellites, in store order."""

    drawables: list[Drawable] = []
    for planet in state.store.planets():
        drawables.append(
            Drawable(
                position=(planet.x, planet.y),
                radius=planet.radius,
                fill_color=render_cfg.planet_color,
                glow=render_cfg.planet_glow,
            )
        )
    for satellite in state.store.satellites():
        color = (
            render_cfg.spawned_satellite_color
            if satellite.spawned
            else render_cfg.seeded_satellite_color
        )
        drawables.append(
            Drawable(
                position=(satellite.x, satellite.y),
                radius=satellite.dot_radius,
                fill_color=color,
                glow=render_cfg.satellite_glow,
            )
        )
    return drawables


__all__ = ["Drawable", "build_drawables"]
