"""Eases planet radii toward their live satellite population."""
from __future__ import annotations

import logging

from .config import SIM_CFG, SimCfg
from .store import EntityStore

logger = logging.getLogger(__name__)


def eased_radius(radius: float, population: int, easing: float, floor: float) -> float:
    radius += (population - radius) * easing
    return max(radius, floor)


def regulate_sizes(store: EntityStore, cfg: SimCfg = SIM_CFG) -> None:
    planets = store.planets()
    if not planets:
        logger.debug("No planets to resize")
        return
    counts = store.satellite_counts()
    floor = max(cfg.min_planet_radius, store.min_planet_radius)
    for planet in planets:
        planet.radius = eased_radius(planet.radius, counts[planet.id], cfg.radius_easing, floor)


__all__ = ["eased_radius", "regulate_sizes"]
