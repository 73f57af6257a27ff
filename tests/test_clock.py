import logging

import numpy as np
import pytest

import simulation.clock as clock_module
from errors import InvalidConfiguration, InvalidStepInput, SimulationStalled
from simulation.fields import TerrainChannel, WaterChannel
from simulation.params import PlantMarker, PlantSpecies, RateConstants, ToolKind


def _frames(state):
    return state.water.snapshot(), state.terrain.snapshot(), state.obstacles.resistance.copy()


def test_zero_delta_from_rest_changes_nothing(small_clock, step_factory):
    state = small_clock.state
    water, terrain, obstacles = _frames(state)

    small_clock.tick(step_factory(delta=0.0))

    assert np.array_equal(state.water_view(), water)
    assert np.array_equal(state.terrain_view(), terrain)
    assert np.array_equal(state.obstacle_view(), obstacles)
    assert small_clock.step_count == 1
    assert small_clock.time == 0.0


def test_zero_delta_on_a_wet_table_changes_nothing(step_factory):
    from simulation.clock import SimulationClock
    from simulation.params import SimulationSettings
    from stream_state import build_initial_state

    state = build_initial_state(SimulationSettings(width=32, height=32))
    clock = SimulationClock(state)
    clock.run(step_factory(delta=1 / 60, tool=ToolKind.WATER, radius=0.2), 30)
    clock.run(step_factory(delta=1 / 60, tool=ToolKind.SAND, uv=(0.3, 0.6)), 30)
    water, terrain, obstacles = _frames(state)
    assert np.any(water[WaterChannel.HEIGHT] > 0)
    assert np.any(water[WaterChannel.VELOCITY] != 0)

    clock.tick(step_factory(delta=0.0, tool=ToolKind.WATER, radius=0.2))

    assert np.array_equal(state.water_view(), water)
    assert np.array_equal(state.terrain_view(), terrain)
    assert np.array_equal(state.obstacle_view(), obstacles)
    assert clock.step_count == 61


def test_time_advances_by_delta(small_clock, step_factory):
    for _ in range(3):
        small_clock.tick(step_factory(delta=0.01))
    assert small_clock.time == pytest.approx(0.03)
    assert small_clock.step_count == 3


@pytest.mark.parametrize("kwargs, error", [
    ({"delta": -1.0}, InvalidStepInput),
    ({"delta": float("nan")}, InvalidStepInput),
    ({"tool": ToolKind.WATER, "uv": (0.5, 2.0)}, InvalidStepInput),
    ({"tool": ToolKind.DIG, "radius": -0.1}, InvalidStepInput),
    ({"rates": RateConstants(viscosity=2.0)}, InvalidConfiguration),
    ({"plants": (PlantMarker((-0.1, 0.5), PlantSpecies.TREE),)}, InvalidStepInput),
])
def test_bad_input_leaves_state_untouched(small_clock, step_factory, kwargs, error):
    state = small_clock.state
    water, terrain, obstacles = _frames(state)

    with pytest.raises(error):
        small_clock.tick(step_factory(**kwargs))

    assert np.array_equal(state.water_view(), water)
    assert np.array_equal(state.terrain_view(), terrain)
    assert np.array_equal(state.obstacle_view(), obstacles)
    assert state.plants == ()
    assert small_clock.step_count == 0
    assert not state.stalled


def test_failed_step_stalls_the_simulation(small_clock, step_factory, monkeypatch):
    state = small_clock.state
    water, _, _ = _frames(state)

    def broken(water_prev, *args):
        return np.full(water_prev.shape, np.nan, dtype=np.float32)

    monkeypatch.setattr(clock_module, "simulate_water", broken)
    with pytest.raises(SimulationStalled):
        small_clock.tick(step_factory())

    assert state.stalled
    assert small_clock.step_count == 0
    assert np.array_equal(state.water_view(), water)

    monkeypatch.undo()
    with pytest.raises(SimulationStalled):
        small_clock.tick(step_factory())


def test_malformed_frame_stalls_the_simulation(small_clock, step_factory, monkeypatch):
    state = small_clock.state
    water, terrain, _ = _frames(state)

    def wrong_shape(terrain_prev, *args):
        return np.zeros((4, 3, 3), dtype=np.float32)

    monkeypatch.setattr(clock_module, "simulate_terrain", wrong_shape)
    with pytest.raises(SimulationStalled):
        small_clock.tick(step_factory())

    assert state.stalled
    assert small_clock.step_count == 0
    assert np.array_equal(state.water_view(), water)
    assert np.array_equal(state.terrain_view(), terrain)


def test_plants_are_painted_before_the_step(small_clock, step_factory):
    state = small_clock.state
    marker = PlantMarker((0.5, 0.5), PlantSpecies.TREE)

    small_clock.run(step_factory(plants=(marker,)), 3)

    assert state.plants == (marker,)
    assert np.count_nonzero(state.obstacle_view()) == 9
    assert state.cell(8, 8)[2].resistance == 1.0
    assert small_clock.step_count == 3


def test_water_and_terrain_read_the_same_frame(small_clock, step_factory, monkeypatch):
    state = small_clock.state
    small_clock.run(step_factory(tool=ToolKind.WATER, radius=0.3), 5)
    expected_water = state.water.snapshot()
    seen = {}

    real_simulate_terrain = clock_module.simulate_terrain

    def spy(terrain, water, *args):
        seen["water"] = np.array(water)
        return real_simulate_terrain(terrain, water, *args)

    monkeypatch.setattr(clock_module, "simulate_terrain", spy)
    small_clock.tick(step_factory(tool=ToolKind.WATER, radius=0.3))

    assert np.array_equal(seen["water"], expected_water)
    assert not np.array_equal(state.water_view(), expected_water)


def test_large_delta_is_logged(small_clock, step_factory, caplog):
    with caplog.at_level(logging.WARNING, logger="simulation.clock"):
        small_clock.tick(step_factory(delta=0.5))
    assert "Large delta" in caplog.text
    assert small_clock.step_count == 1


def test_fields_stay_in_bounds_over_many_steps(step_factory, rng):
    from simulation.clock import SimulationClock
    from simulation.params import SimulationSettings
    from stream_state import build_initial_state

    state = build_initial_state(SimulationSettings(width=32, height=32))
    clock = SimulationClock(state)
    kinds = [ToolKind.WATER, ToolKind.DIG, ToolKind.SAND, None]

    for _ in range(200):
        kind = kinds[rng.integers(len(kinds))]
        uv = (float(rng.uniform()), float(rng.uniform()))
        plants = ()
        if rng.uniform() < 0.02:
            plants = (PlantMarker(uv, PlantSpecies.GRASS),)
        clock.tick(step_factory(delta=1 / 60, tool=kind, uv=uv, radius=0.1,
                                strength=float(rng.uniform(1.0, 10.0)), plants=plants))

    water = state.water_view()
    terrain = state.terrain_view()
    assert np.all(np.isfinite(water)) and np.all(np.isfinite(terrain))
    assert np.all(water[WaterChannel.HEIGHT] >= 0.0)
    assert np.all((terrain[TerrainChannel.HEIGHT] >= 0.0) & (terrain[TerrainChannel.HEIGHT] <= 5.0))
    assert np.all((terrain[TerrainChannel.SAND] >= 0.0) & (terrain[TerrainChannel.SAND] <= 100.0))
    assert np.all(terrain[TerrainChannel.SEDIMENT] >= 0.0)
    seeds = terrain[TerrainChannel.COLOR_SEED]
    assert np.all((seeds >= 0.0) & (seeds < 1.0))
    assert np.all((seeds > 0.0) == (terrain[TerrainChannel.SAND] > 0.01))
    assert not state.stalled
