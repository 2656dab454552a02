"""Orbit motion: smoothed center tracking plus a rotating circular offset."""
from __future__ import annotations

import math

import numpy as np

from .config import SIM_CFG, SimCfg
from .model import Planet, Satellite
from .store import EntityStore


def advance_phase(satellite: Satellite) -> None:
    satellite.phase += satellite.orbit.speed


def track_center(satellite: Satellite, target: np.ndarray) -> None:
    """First-order exponential smoothing of the center toward ``target``.

    The satellite's own speed is the smoothing coefficient, so fast satellites
    follow their planet tightly and reassigned ones re-home gradually.
    """

    satellite.center += (target - satellite.center) * satellite.orbit.speed


def orbit_offset(orbit_radius: float, seed: float, phase: np.ndarray) -> np.ndarray:
    return np.array(
        [
            orbit_radius * math.cos(seed + phase[0]),
            orbit_radius * math.sin(seed + phase[1]),
        ],
        dtype=float,
    )


def phase_seed_for(satellite: Satellite, index: int, mode: str = "stable") -> float:
    if mode == "index":
        return float(index)
    return satellite.orbit.phase_seed


def advance_satellite(satellite: Satellite, planet: Planet, seed: float) -> None:
    advance_phase(satellite)
    track_center(satellite, planet.position)
    satellite.position = satellite.center + orbit_offset(
        satellite.orbit.orbit_radius, seed, satellite.phase
    )


def advance_orbits(store: EntityStore, cfg: SimCfg = SIM_CFG) -> None:
    """Move every satellite one tick around its currently assigned planet."""

    for index, satellite in enumerate(store.satellites()):
        planet = store.planet(satellite.planet_id)
        advance_satellite(satellite, planet, phase_seed_for(satellite, index, cfg.phase_seed))


__all__ = [
    "advance_orbits",
    "advance_phase",
    "advance_satellite",
    "orbit_offset",
    "phase_seed_for",
    "track_center",
]
