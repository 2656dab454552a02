import random

import numpy as np
import pytest

from conftest import make_orbit
from universe_sim.core.attraction import (
    choose_planet,
    choose_planets,
    distance_matrix,
    planet_positions,
    resolve_attraction,
)
from universe_sim.core.config import SimCfg
from universe_sim.core.store import EntityStore


def _store_with(planets, satellite_at, planet_id):
    store = EntityStore()
    for position in planets:
        store.add_planet(position)
    store.add_satellite(satellite_at, planet_id, make_orbit())
    return store


@pytest.mark.parametrize("policy", ["sequential", "last_closer", "nearest"])
def test_strictly_closer_planet_takes_satellite(policy: str) -> None:
    store = _store_with([(0.0, 0.0), (100.0, 0.0)], (90.0, 0.0), 0)
    reassigned = resolve_attraction(store, SimCfg(attraction_policy=policy))
    assert reassigned == 1
    assert store.satellites()[0].planet_id == 1


@pytest.mark.parametrize("policy", ["sequential", "last_closer", "nearest"])
def test_ties_never_reassign(policy: str) -> None:
    store = _store_with([(0.0, 0.0), (100.0, 0.0)], (50.0, 0.0), 0)
    assert resolve_attraction(store, SimCfg(attraction_policy=policy)) == 0
    assert store.satellites()[0].planet_id == 0


def test_policies_differ_when_several_planets_are_closer() -> None:
    distances = np.array([10.0, 2.0, 5.0])
    assert choose_planet(distances, 0, "sequential") == 1
    assert choose_planet(distances, 0, "nearest") == 1
    assert choose_planet(distances, 0, "last_closer") == 2


def test_sequential_scan_compares_against_running_choice() -> None:
    store = _store_with([(0.0, 0.0), (12.0, 0.0), (15.0, 0.0)], (10.0, 0.0), 0)
    resolve_attraction(store, SimCfg(attraction_policy="sequential"))
    assert store.satellites()[0].planet_id == 1


def test_solver_uses_previous_derived_position_not_center() -> None:
    store = _store_with([(0.0, 0.0), (100.0, 0.0)], (10.0, 0.0), 0)
    satellite = store.satellites()[0]
    satellite.position = np.array([95.0, 0.0])
    resolve_attraction(store)
    assert satellite.planet_id == 1


def test_reassignment_happens_within_one_tick_for_static_layout() -> None:
    store = _store_with([(0.0, 0.0), (30.0, 0.0), (200.0, 0.0)], (190.0, 5.0), 0)
    resolve_attraction(store)
    assert store.satellites()[0].planet_id == 2
    # stable afterwards
    assert resolve_attraction(store) == 0


def test_empty_planet_set_is_a_no_op() -> None:
    store = EntityStore()
    assert resolve_attraction(store) == 0
    assert planet_positions(store).shape == (0, 2)


def _running_scan(distances, current):
    for index, distance in enumerate(distances):
        if index != current and distance < distances[current]:
            current = index
    return current


def _last_closer_scan(distances, current):
    chosen = current
    for index, distance in enumerate(distances):
        if index != current and distance < distances[current]:
            chosen = index
    return chosen


def test_vectorized_policies_match_scalar_scans_with_ties() -> None:
    rng = np.random.default_rng(5)
    # small integer distances so ties are common
    distances = rng.integers(0, 6, size=(2000, 7)).astype(float)
    current = rng.integers(0, 7, size=2000)

    sequential = choose_planets(distances, current, "sequential")
    last_closer = choose_planets(distances, current, "last_closer")

    assert sequential.tolist() == [_running_scan(list(d), int(c)) for d, c in zip(distances, current)]
    assert last_closer.tolist() == [_last_closer_scan(list(d), int(c)) for d, c in zip(distances, current)]
    np.testing.assert_array_equal(choose_planets(distances, current, "nearest"), sequential)


def test_distance_matrix_rows_follow_satellites() -> None:
    points = np.array([[0.0, 0.0], [3.0, 4.0]])
    positions = np.array([[0.0, 0.0], [3.0, 0.0], [6.0, 8.0]])
    np.testing.assert_allclose(
        distance_matrix(points, positions),
        [[0.0, 5.0], [3.0, 4.0], [10.0, 5.0]],
    )


def test_resolve_attraction_matches_per_satellite_scan() -> None:
    rand = random.Random(8)
    store = EntityStore()
    for _ in range(12):
        store.add_planet((rand.uniform(0, 300), rand.uniform(0, 300)))
    for _ in range(60):
        store.add_satellite((rand.uniform(0, 300), rand.uniform(0, 300)), rand.randrange(12), make_orbit())
    points = planet_positions(store)
    expected = [
        _running_scan(list(np.hypot(*(points - s.position).T)), s.planet_id) for s in store.satellites()
    ]
    before = [s.planet_id for s in store.satellites()]

    reassigned = resolve_attraction(store)

    assert [s.planet_id for s in store.satellites()] == expected
    assert reassigned == sum(1 for old, new in zip(before, expected) if old != new)
