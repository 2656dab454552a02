"""Data models for the universe simulation state."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import NewType, Union

import numpy as np

PlanetId = NewType("PlanetId", int)
SatelliteId = NewType("SatelliteId", int)


def as_vector(position) -> np.ndarray:
    return np.array(position, dtype=float).reshape(2)


@dataclass
class Planet:
    """Attractor whose radius follows the number of satellites it holds."""

    id: PlanetId
    position: np.ndarray
    radius: float

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])


@dataclass(frozen=True)
class OrbitParams:
    """Per-satellite constants drawn once at creation."""

    orbit_radius: float
    speed: float
    phase_seed: float


@dataclass
class Satellite:
    """Mutable orbit state for one satellite.

    ``position`` is derived from ``center`` and ``phase`` every tick and should
    not be written by consumers. ``planet_id`` is a relation only; the planet
    itself lives in the :class:`~universe_sim.core.store.EntityStore`.
    """

    id: SatelliteId
    planet_id: PlanetId
    orbit: OrbitParams
    center: np.ndarray
    position: np.ndarray
    phase: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=float))
    dot_radius: float = 1.0
    spawned: bool = False

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])


@dataclass(frozen=True)
class NoSelection:
    pass


@dataclass(frozen=True)
class SpawnPending:
    """Pointer is held over empty space; a planet spawns there each tick."""


@dataclass(frozen=True)
class Dragging:
    planet_id: PlanetId


Selection = Union[NoSelection, SpawnPending, Dragging]

NO_SELECTION = NoSelection()
SPAWN_PENDING = SpawnPending()


__all__ = [
    "Dragging",
    "NO_SELECTION",
    "NoSelection",
    "OrbitParams",
    "Planet",
    "PlanetId",
    "SPAWN_PENDING",
    "Satellite",
    "SatelliteId",
    "Selection",
    "SpawnPending",
    "as_vector",
]
