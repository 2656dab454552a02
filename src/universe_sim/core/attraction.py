"""Per-tick reassignment of satellites to the planet that attracts them.

All satellites are solved in one pass over an ``(satellites, planets)``
distance matrix built from last tick's derived positions.
"""
from __future__ import annotations

import logging

import numpy as np

from .config import POLICY_ALIASES, SIM_CFG, SimCfg
from .model import PlanetId
from .store import EntityStore

logger = logging.getLogger(__name__)


def planet_positions(store: EntityStore) -> np.ndarray:
    """``(n, 2)`` array of planet centers in store order."""

    planets = store.planets()
    if not planets:
        return np.zeros((0, 2), dtype=float)
    return np.stack([planet.position for planet in planets])


def satellite_positions(store: EntityStore) -> np.ndarray:
    satellites = store.satellites()
    if not satellites:
        return np.zeros((0, 2), dtype=float)
    return np.stack([satellite.position for satellite in satellites])


def distances_to(points: np.ndarray, position: np.ndarray) -> np.ndarray:
    delta = points - position
    return np.hypot(delta[:, 0], delta[:, 1])


def distance_matrix(points: np.ndarray, positions: np.ndarray) -> np.ndarray:
    """Row ``i`` holds the distances from ``positions[i]`` to every planet."""

    delta = positions[:, np.newaxis, :] - points[np.newaxis, :, :]
    return np.hypot(delta[..., 0], delta[..., 1])


def _sequential(distances: np.ndarray, current: np.ndarray) -> np.ndarray:
    # a running strict comparison in store order lands on the first minimum
    rows = np.arange(distances.shape[0])
    held = distances[rows, current]
    best = np.argmin(distances, axis=1)
    return np.where(distances[rows, best] < held, best, current)


def _last_closer(distances: np.ndarray, current: np.ndarray) -> np.ndarray:
    rows = np.arange(distances.shape[0])
    held = distances[rows, current]
    closer = distances < held[:, np.newaxis]
    last = distances.shape[1] - 1 - np.argmax(closer[:, ::-1], axis=1)
    return np.where(closer.any(axis=1), last, current)


_POLICIES = {
    "sequential": _sequential,
    "last_closer": _last_closer,
}


def choose_planets(distances: np.ndarray, current: np.ndarray, policy: str = "sequential") -> np.ndarray:
    """Planet index per row of ``distances`` given each row's held planet.

    Only strictly closer planets take a satellite away from its current one.
    """

    policy = POLICY_ALIASES.get(policy, policy)
    return _POLICIES[policy](distances, np.asarray(current, dtype=np.intp))


def choose_planet(distances: np.ndarray, current: int, policy: str = "sequential") -> int:
    chosen = choose_planets(distances[np.newaxis, :], np.array([current]), policy)
    return int(chosen[0])


def resolve_attraction(store: EntityStore, cfg: SimCfg = SIM_CFG) -> int:
    """Reassign every satellite using last tick's derived positions.

    Returns the number of satellites that changed planet.
    """

    points = planet_positions(store)
    satellites = store.satellites()
    if points.shape[0] == 0:
        logger.debug("No planets to attract %d satellites", len(satellites))
        return 0
    if not satellites:
        return 0
    current = np.array([satellite.planet_id for satellite in satellites], dtype=np.intp)
    distances = distance_matrix(points, satellite_positions(store))
    chosen = choose_planets(distances, current, cfg.attraction_policy)
    moved = np.flatnonzero(chosen != current)
    for index in moved:
        satellites[index].planet_id = PlanetId(int(chosen[index]))
    return int(moved.size)


__all__ = [
    "choose_planet",
    "choose_planets",
    "distance_matrix",
    "distances_to",
    "planet_positions",
    "resolve_attraction",
    "satellite_positions",
]
