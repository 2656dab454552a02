"""Pointer handling: hit testing, dragging and press-and-hold spawning."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass

import numpy as np

from .config import SIM_CFG, SimCfg
from .model import (
    NO_SELECTION,
    SPAWN_PENDING,
    Dragging,
    NoSelection,
    OrbitParams,
    PlanetId,
    Selection,
    SpawnPending,
    as_vector,
)
from .store import EntityStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InteractionEvent:
    """Something the controller did that a run log may want to record."""

    kind: str
    planet_id: PlanetId | None
    x: float
    y: float
    details: str = ""


def random_orbit(rng: random.Random, phase_seed: float, cfg: SimCfg = SIM_CFG) -> OrbitParams:
    low, high = cfg.orbit_radius_range
    return OrbitParams(
        orbit_radius=rng.uniform(low, high),
        speed=rng.uniform(cfg.speed_min, cfg.speed_max),
        phase_seed=phase_seed,
    )


def random_dot_radius(rng: random.Random) -> float:
    return 0.5 + rng.random() * 2.0


def spawn_planet(
    store: EntityStore,
    position,
    rng: random.Random,
    cfg: SimCfg = SIM_CFG,
) -> PlanetId:
    """Create a planet together with its satellite cluster.

    Every new satellite starts with its smoothed center (and derived position)
    on the planet and references it.
    """

    center = as_vector(position)
    planet_id = store.add_planet(center, radius=cfg.initial_planet_radius)
    for _ in range(cfg.satellites_per_spawn):
        store.add_satellite(
            center,
            planet_id,
            random_orbit(rng, float(len(store.satellites())), cfg),
            dot_radius=random_dot_radius(rng),
            spawned=True,
        )
    return planet_id


def hit_test(store: EntityStore, x: float, y: float, margin: float = 10.0) -> PlanetId | None:
    """First planet (in store order) whose padded bounding box contains ``(x, y)``."""

    for planet in store.planets():
        reach = planet.radius + margin
        if abs(x - planet.x) <= reach and abs(y - planet.y) <= reach:
            return planet.id
    return None


class InteractionController:
    """Turns pointer state into store mutations at tick boundaries.

    The ``on_*`` callbacks only record intent. :meth:`apply` is the single
    place where pointer input changes entities.
    """

    def __init__(
        self,
        store: EntityStore,
        size: tuple[int, int],
        *,
        cfg: SimCfg = SIM_CFG,
        rng: random.Random | None = None,
    ) -> None:
        self._store = store
        self._cfg = cfg
        self._rng = rng or random.Random()
        self.bounds = (int(size[0]), int(size[1]))
        self.pointer = np.array([size[0] / 2.0, size[1] / 2.0], dtype=float)
        self.selection: Selection = NO_SELECTION
        self._pending: list[InteractionEvent] = []

    @property
    def rng(self) -> random.Random:
        return self._rng

    def on_pointer_move(self, x: float, y: float) -> None:
        self.pointer[:] = (x, y)

    def on_pointer_down(self, x: float, y: float) -> None:
        self.pointer[:] = (x, y)
        planet_id = hit_test(self._store, x, y, self._cfg.hit_margin)
        if planet_id is None:
            self.selection = SPAWN_PENDING
            return
        self.selection = Dragging(planet_id)
        self._pending.append(InteractionEvent("drag_start", planet_id, x, y))

    def on_pointer_up(self) -> None:
        if isinstance(self.selection, Dragging):
            x, y = self.pointer
            self._pending.append(
                InteractionEvent("drag_end", self.selection.planet_id, float(x), float(y))
            )
        self.selection = NO_SELECTION

    def on_resize(self, width: int, height: int) -> None:
        bounds = (int(width), int(height))
        # pygame reports one resize through several events
        if bounds == self.bounds:
            return
        self.bounds = bounds
        self._pending.append(
            InteractionEvent("resize", None, float(width), float(height))
        )

    def spawn_planet(self, x: float, y: float) -> PlanetId:
        return spawn_planet(self._store, (x, y), self._rng, self._cfg)

    def apply(self) -> list[InteractionEvent]:
        """Apply the held selection for this tick and drain recorded events."""

        events, self._pending = self._pending, []
        selection = self.selection
        x, y = float(self.pointer[0]), float(self.pointer[1])
        if isinstance(selection, Dragging):
            self._store.planet(selection.planet_id).position[:] = (x, y)
        elif isinstance(selection, SpawnPending):
            planet_id = self.spawn_planet(x, y)
            logger.debug("Spawned planet %d at (%.1f, %.1f)", planet_id, x, y)
            events.append(
                InteractionEvent("spawn", planet_id, x, y, details=str(self._cfg.satellites_per_spawn))
            )
        elif isinstance(selection, NoSelection):
            pass
        else:  # pragma: no cover
            raise TypeError(f"unexpected selection {selection!r}")
        return events


__all__ = [
    "InteractionController",
    "InteractionEvent",
    "hit_test",
    "random_dot_radius",
    "random_orbit",
    "spawn_planet",
]
