"""Shared fixtures for the stream table tests."""
from __future__ import annotations

import numpy as np
import pytest

from simulation.clock import SimulationClock
from simulation.params import RateConstants, SimulationSettings, StepInput, ToolState
from stream_state import build_initial_state


@pytest.fixture
def small_state():
    """16x16 table: no drain bands, spray bar on the top row only."""
    return build_initial_state(SimulationSettings(width=16, height=16))


@pytest.fixture
def full_state():
    return build_initial_state(SimulationSettings())


@pytest.fixture
def small_clock(small_state):
    return SimulationClock(small_state)


@pytest.fixture
def full_clock(full_state):
    return SimulationClock(full_state)


def make_step(delta=0.016, slope=0.0, tool=None, uv=(0.5, 0.5), active=True,
              radius=0.05, strength=5.0, rates=None, plants=()):
    """StepInput with an optional tool held at uv."""
    tool_state = ToolState()
    if tool is not None:
        tool_state = ToolState(tool_kind=tool, pointer_uv=uv, pointer_active=active,
                               brush_radius=radius, brush_strength=strength)
    return StepInput(delta=delta, slope_degrees=slope, tool_state=tool_state,
                     rates=rates if rates is not None else RateConstants(), plants=plants)


@pytest.fixture
def step_factory():
    return make_step


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


