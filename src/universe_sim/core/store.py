"""Owner of every planet and satellite in a simulation."""
from __future__ import annotations

from collections import Counter
from typing import Sequence

import numpy as np

from .errors import InvariantViolation, UnknownPlanetError
from .model import OrbitParams, Planet, PlanetId, Satellite, SatelliteId, as_vector


class EntityStore:
    """Append-only collections of planets and satellites.

    Ids are dense insertion indices, so ``planet(id)`` is a list lookup and a
    satellite's id doubles as its stable position in :meth:`satellites`.
    """

    def __init__(self, min_planet_radius: float = 2.0) -> None:
        self._planets: list[Planet] = []
        self._satellites: list[Satellite] = []
        self._min_planet_radius = min_planet_radius

    def add_planet(self, position, radius: float = 10.0) -> PlanetId:
        planet_id = PlanetId(len(self._planets))
        self._planets.append(
            Planet(
                id=planet_id,
                position=as_vector(position),
                radius=max(float(radius), self._min_planet_radius),
            )
        )
        return planet_id

    def add_satellite(
        self,
        position,
        planet_id: PlanetId,
        orbit: OrbitParams,
        *,
        dot_radius: float = 1.0,
        spawned: bool = False,
    ) -> SatelliteId:
        # resolve first so a bad id can never produce an orphan
        self.planet(planet_id)
        satellite_id = SatelliteId(len(self._satellites))
        center = as_vector(position)
        self._satellites.append(
            Satellite(
                id=satellite_id,
                planet_id=planet_id,
                orbit=orbit,
                center=center,
                position=center.copy(),
                dot_radius=dot_radius,
                spawned=spawned,
            )
        )
        return satellite_id

    def planets(self) -> Sequence[Planet]:
        return self._planets

    def satellites(self) -> Sequence[Satellite]:
        return self._satellites

    def planet(self, planet_id: PlanetId) -> Planet:
        if not 0 <= planet_id < len(self._planets):
            raise UnknownPlanetError(planet_id)
        return self._planets[planet_id]

    def satellite(self, satellite_id: SatelliteId) -> Satellite:
        return self._satellites[satellite_id]

    def satellites_of(self, planet_id: PlanetId) -> list[Satellite]:
        return [s for s in self._satellites if s.planet_id == planet_id]

    def satellite_counts(self) -> Counter:
        """Number of satellites currently referencing each planet id."""

        return Counter(s.planet_id for s in self._satellites)

    @property
    def min_planet_radius(self) -> float:
        return self._min_planet_radius

    def check_invariants(self) -> None:
        planet_count = len(self._planets)
        for planet in self._planets:
            if not planet.radius >= self._min_planet_radius:
                raise InvariantViolation(
                    f"planet {planet.id} radius {planet.radius} below {self._min_planet_radius}"
                )
            if not np.all(np.isfinite(planet.position)):
                raise InvariantViolation(f"planet {planet.id} has a non-finite position")
        for satellite in self._satellites:
            if not 0 <= satellite.planet_id < planet_count:
                raise InvariantViolation(
                    f"satellite {satellite.id} references missing planet {satellite.planet_id}"
                )


__all__ = ["EntityStore"]
