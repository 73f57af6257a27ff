# simulation/clock.py
"""Drives one simulation step per external frame tick.

A tick:
1. Validates the frame input at the boundary
2. Applies queued plant placements (obstacle paints happen between steps)
3. Computes water and terrain from the same previous-frame snapshot
4. Stages both results and swaps both fields together
5. Advances the clock

A step either completes fully or the simulation is marked stalled and
refuses further ticks.
"""
from __future__ import annotations

import logging
from dataclasses import replace

import numpy as np

from config import LARGE_DELTA_WARNING
from errors import SimulationStalled
from simulation.fields import TerrainChannel
from simulation.params import StepInput
from simulation.terrain import simulate_terrain
from simulation.water import simulate_water
from stream_state.state import StreamState

logger = logging.getLogger(__name__)


class SimulationClock:
    """Owns step ordering and buffer swapping for a StreamState."""

    def __init__(self, state: StreamState):
        self.state = state

    @property
    def time(self) -> float:
        return self.state.time

    @property
    def step_count(self) -> int:
        return self.state.step_count

    def tick(self, step: StepInput) -> None:
        """Advance exactly one step.

        Raises:
            InvalidStepInput / InvalidConfiguration: malformed frame input
                (the state is left untouched)
            SimulationStalled: the step could not complete, or an earlier
                step already failed
        """
        state = self.state
        if state.stalled:
            raise SimulationStalled("simulation stalled on an earlier step")

        step.validate()
        if step.delta > LARGE_DELTA_WARNING:
            # Passed through verbatim; explicit Euler may diverge
            logger.warning("Large delta %.3fs at step %d", step.delta, state.step_count)

        for marker in step.plants:
            state.place_plant(marker)

        try:
            water_prev = state.water.view()
            terrain_prev = state.terrain.view()
            new_water = simulate_water(
                water_prev,
                terrain_prev[TerrainChannel.HEIGHT],
                state.obstacles.view(),
                state.u,
                state.v,
                step,
            )
            new_terrain = simulate_terrain(
                terrain_prev,
                water_prev,
                state.xs,
                state.ys,
                state.u,
                state.v,
                step,
                state.time,
                state.settings.seed,
            )
            if not (np.all(np.isfinite(new_water)) and np.all(np.isfinite(new_terrain))):
                raise FloatingPointError("non-finite values in step output")

            state.water.stage(new_water)
            state.terrain.stage(new_terrain)
        except (FloatingPointError, ValueError, MemoryError) as exc:
            state.stalled = True
            logger.error("Step %d failed: %s", state.step_count, exc)
            raise SimulationStalled(f"step {state.step_count} failed: {exc}") from exc

        state.water.swap()
        state.terrain.swap()
        state.time += step.delta
        state.step_count += 1
        logger.debug("Step %d done (t=%.3f, delta=%.4f)", state.step_count, state.time, step.delta)

    def run(self, step: StepInput, steps: int) -> None:
        """Repeat the same frame input for a number of ticks.

        Plant placements in the input are applied on the first tick only.
        """
        for i in range(steps):
            self.tick(step if i == 0 else replace(step, plants=()))
