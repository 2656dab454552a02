"""Simulation state container, seeding and the fixed-order tick."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from .attraction import resolve_attraction
from .config import SIM_CFG, SimCfg
from .interaction import (
    InteractionController,
    InteractionEvent,
    random_dot_radius,
    random_orbit,
)
from .model import PlanetId
from .orbit import advance_orbits
from .sizing import regulate_sizes
from .store import EntityStore

logger = logging.getLogger(__name__)


@dataclass
class SimState:
    """High level simulation state container."""

    store: EntityStore
    controller: InteractionController
    tick: int = 0

    @property
    def bounds(self) -> tuple[int, int]:
        return self.controller.bounds


@dataclass
class TickReport:
    tick: int
    reassigned: int = 0
    events: list[InteractionEvent] = field(default_factory=list)


def new_state(
    size: tuple[int, int],
    *,
    cfg: SimCfg = SIM_CFG,
    rng: random.Random | None = None,
) -> SimState:
    """Empty state; call :func:`seed_state` or spawn before advancing."""

    store = EntityStore(min_planet_radius=cfg.min_planet_radius)
    controller = InteractionController(store, size, cfg=cfg, rng=rng)
    return SimState(store=store, controller=controller)


def seed_state(
    size: tuple[int, int],
    *,
    planets: int | None = None,
    satellites: int | None = None,
    cfg: SimCfg = SIM_CFG,
    rng: random.Random | None = None,
) -> SimState:
    """Planets at random positions and satellites shared randomly among them.

    Seeded satellites all start at the canvas center and drift to their
    planets over the first ticks.
    """

    planets = cfg.initial_planets if planets is None else planets
    satellites = cfg.initial_satellites if satellites is None else satellites
    if planets < 1:
        raise ValueError("at least one planet is required to seed a simulation")
    rng = rng or random.Random()
    state = new_state(size, cfg=cfg, rng=rng)
    store = state.store
    width, height = size
    for _ in range(planets):
        store.add_planet(
            (rng.random() * width, rng.random() * height),
            radius=cfg.initial_planet_radius,
        )
    start = (width / 2.0, height / 2.0)
    for _ in range(satellites):
        planet_id = PlanetId(rng.randrange(planets))
        store.add_satellite(
            start,
            planet_id,
            random_orbit(rng, float(len(store.satellites())), cfg),
            dot_radius=random_dot_radius(rng),
        )
    logger.info("Seeded %d planets and %d satellites on %dx%d", planets, satellites, width, height)
    return state


def advance(state: SimState, cfg: SimCfg = SIM_CFG) -> TickReport:
    """Run one tick: interaction, attraction, orbit motion, then sizing.

    The order is load-bearing: planets spawned by the interaction step get
    their satellites attraction-solved in the same tick.
    """

    events = state.controller.apply()
    store = state.store
    if not store.planets():
        logger.warning("Tick %d with no planets; nothing to simulate", state.tick)
        state.tick += 1
        return TickReport(tick=state.tick, events=events)
    reassigned = resolve_attraction(store, cfg)
    advance_orbits(store, cfg)
    regulate_sizes(store, cfg)
    state.tick += 1
    return TickReport(tick=state.tick, reassigned=reassigned, events=events)


def run_ticks(state: SimState, ticks: int, cfg: SimCfg = SIM_CFG) -> list[TickReport]:
    return [advance(state, cfg) for _ in range(ticks)]


__all__ = ["SimState", "TickReport", "advance", "new_state", "run_ticks", "seed_state"]
