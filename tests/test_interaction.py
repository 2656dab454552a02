import random

import numpy as np

from universe_sim.core.config import SimCfg
from universe_sim.core.interaction import InteractionController, hit_test, spawn_planet
from universe_sim.core.model import NO_SELECTION, SPAWN_PENDING, Dragging
from universe_sim.core.store import EntityStore


def test_spawn_creates_planet_with_five_linked_satellites(cfg) -> None:
    store = EntityStore()
    store.add_planet((0.0, 0.0))
    planets_before = len(store.planets())
    satellites_before = len(store.satellites())

    pid = spawn_planet(store, (120.0, 80.0), random.Random(3), cfg)

    assert len(store.planets()) == planets_before + 1
    assert len(store.satellites()) == satellites_before + 5
    assert store.planet(pid).radius == cfg.initial_planet_radius
    new_satellites = store.satellites()[satellites_before:]
    low, high = cfg.orbit_radius_range
    for satellite in new_satellites:
        assert satellite.planet_id == pid
        assert satellite.spawned
        np.testing.assert_allclose(satellite.center, [120.0, 80.0])
        np.testing.assert_allclose(satellite.position, [120.0, 80.0])
        assert low <= satellite.orbit.orbit_radius <= high
        assert cfg.speed_min <= satellite.orbit.speed <= cfg.speed_max
        assert satellite.orbit.phase_seed == float(satellite.id)
        assert 0.5 <= satellite.dot_radius <= 2.5


def test_hit_test_uses_padded_box() -> None:
    store = EntityStore()
    pid = store.add_planet((100.0, 100.0), radius=10.0)
    # corner of the box is outside the padded circle but still hits
    assert hit_test(store, 120.0, 120.0) == pid
    assert hit_test(store, 80.0, 80.0) == pid
    assert hit_test(store, 121.0, 100.0) is None
    assert hit_test(store, 100.0, 79.5) is None


def test_hit_test_first_planet_wins() -> None:
    store = EntityStore()
    first = store.add_planet((100.0, 100.0))
    store.add_planet((105.0, 100.0))
    assert hit_test(store, 103.0, 100.0) == first


def test_pointer_down_on_planet_selects_it(empty_state) -> None:
    store = empty_state.store
    pid = store.add_planet((50.0, 50.0))
    controller = empty_state.controller
    controller.on_pointer_down(55.0, 45.0)
    assert controller.selection == Dragging(pid)


def test_pointer_down_on_empty_space_selects_spawn(empty_state) -> None:
    empty_state.store.add_planet((50.0, 50.0))
    controller = empty_state.controller
    controller.on_pointer_down(300.0, 300.0)
    assert controller.selection == SPAWN_PENDING


def test_callbacks_do_not_mutate_entities(empty_state) -> None:
    store = empty_state.store
    pid = store.add_planet((50.0, 50.0))
    controller = empty_state.controller
    controller.on_pointer_down(50.0, 50.0)
    controller.on_pointer_move(200.0, 220.0)
    np.testing.assert_allclose(store.planet(pid).position, [50.0, 50.0])
    controller.apply()
    np.testing.assert_allclose(store.planet(pid).position, [200.0, 220.0])


def test_pointer_up_clears_selection_and_records_drag_events(empty_state) -> None:
    store = empty_state.store
    pid = store.add_planet((50.0, 50.0))
    controller = empty_state.controller
    controller.on_pointer_down(50.0, 50.0)
    controller.on_pointer_move(70.0, 90.0)
    controller.on_pointer_up()
    assert controller.selection == NO_SELECTION
    events = controller.apply()
    assert [event.kind for event in events] == ["drag_start", "drag_end"]
    assert events[0].planet_id == pid
    assert (events[1].x, events[1].y) == (70.0, 90.0)
    assert controller.apply() == []


def test_spawn_pending_spawns_every_apply(empty_state) -> None:
    controller = empty_state.controller
    controller.on_pointer_down(10.0, 10.0)
    for _ in range(3):
        events = controller.apply()
        assert [event.kind for event in events] == ["spawn"]
    assert len(empty_state.store.planets()) == 3
    assert len(empty_state.store.satellites()) == 15


def test_resize_updates_bounds_only(empty_state) -> None:
    store = empty_state.store
    pid = store.add_planet((50.0, 50.0))
    controller = empty_state.controller
    controller.on_resize(1280, 720)
    assert controller.bounds == (1280, 720)
    assert empty_state.bounds == (1280, 720)
    np.testing.assert_allclose(store.planet(pid).position, [50.0, 50.0])
    assert [event.kind for event in controller.apply()] == ["resize"]


def test_spawn_count_follows_config() -> None:
    store = EntityStore()
    controller = InteractionController(store, (100, 100), cfg=SimCfg(satellites_per_spawn=2), rng=random.Random(0))
    controller.spawn_planet(1.0, 1.0)
    assert len(store.satellites()) == 2


def test_pointer_starts_at_canvas_center(empty_state) -> None:
    np.testing.assert_allclose(empty_state.controller.pointer, [200.0, 200.0])


def test_resize_to_current_bounds_records_nothing(empty_state) -> None:
    controller = empty_state.controller
    controller.on_resize(400, 400)
    assert controller.apply() == []
    controller.on_resize(500, 400)
    controller.on_resize(500, 400)
    assert [event.kind for event in controller.apply()] == ["resize"]
