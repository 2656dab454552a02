import random

import pytest

from universe_sim.core.config import SimCfg
from universe_sim.core.model import OrbitParams
from universe_sim.core.simulation import new_state


@pytest.fixture
def cfg() -> SimCfg:
    return SimCfg()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def empty_state(cfg, rng):
    return new_state((400, 400), cfg=cfg, rng=rng)


def make_orbit(orbit_radius: float = 50.0, speed: float = 0.05, phase_seed: float = 0.0) -> OrbitParams:
    return OrbitParams(orbit_radius=orbit_radius, speed=speed, phase_seed=phase_seed)
