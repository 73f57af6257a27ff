# simulation/water.py
"""Free-surface water update.

Every cell accelerates toward the average surface (water + terrain) of its
4 neighbors, is damped by viscosity and planted obstacles, then receives the
brush, spray bar and drain terms. The whole grid is computed at once from the
previous frame; no cell sees another cell's new value.

Key concepts:
- Surface = water height + terrain height
- velocity is a signed scalar flux rate, not a 2D vector
- Edges clamp: an out-of-grid neighbor reads as the edge cell itself
- A dry neighborhood (no water in the cell or its 4 neighbors) carries no flux
"""
from __future__ import annotations

import numpy as np

from grid_helpers import NEIGHBORS_4, brush_mask, shift_clamped
from simulation.config import (
    GRAVITY,
    SLOPE_GAIN,
    SOURCE_BAND_MIN_V,
    DRAIN_BAND_MAX_V,
    DRAIN_FACTOR,
    SIDE_DRAIN_MIN_U,
    SIDE_DRAIN_MAX_U,
    SIDE_DRAIN_FACTOR,
)
from simulation.fields import WaterChannel
from simulation.params import StepInput, ToolKind


def slope_forcing(slope_degrees: float) -> float:
    """Downhill bias from the trailer tilt (degrees are used as given)."""
    return slope_degrees


def simulate_water(
    water: np.ndarray,
    terrain_height: np.ndarray,
    resistance: np.ndarray,
    u: np.ndarray,
    v: np.ndarray,
    step: StepInput,
) -> np.ndarray:
    """Compute the next water frame.

    Args:
        water: Previous water field, shape (2, width, height)
        terrain_height: Previous terrain heights, shape (width, height)
        resistance: Obstacle resistance 0-1, shape (width, height)
        u, v: Cell-center UV coordinates, shape (width, height)
        step: Frame input (delta, slope, tool, rates)

    Returns:
        New water field, shape (2, width, height), float32
        (an unchanged copy of water when delta is 0)
    """
    delta = step.delta
    if delta == 0:
        # Damping and drains are per-step factors; a zero-length step skips them
        return np.array(water, dtype=np.float32)
    rates = step.rates
    tool = step.tool_state

    height = water[WaterChannel.HEIGHT]
    velocity = water[WaterChannel.VELOCITY]

    # 1-2. Surface and its 4-neighbor average
    surface = height + terrain_height
    neighbor_sum = np.zeros_like(surface)
    neighbor_water = np.zeros_like(height, dtype=bool)
    for dx, dy in NEIGHBORS_4:
        neighbor_sum += shift_clamped(surface, dx, dy)
        neighbor_water |= shift_clamped(height, dx, dy) > 0
    average = neighbor_sum * np.float32(0.25)

    # 3-5. Acceleration, tilt bias, then damping and obstacle drag
    new_velocity = velocity + (average - surface) * np.float32(GRAVITY * delta)
    new_velocity = new_velocity + np.float32(slope_forcing(step.slope_degrees) * delta * SLOPE_GAIN)
    new_velocity = new_velocity * (np.float32(rates.viscosity) * (1.0 - resistance))

    # Terrain steps alone never create water
    wet = (height > 0) | neighbor_water
    new_velocity = np.where(wet, new_velocity, 0.0)

    # 6. Integrate; floor at zero and stop a floored cell from draining further
    new_height = np.where(wet, height + new_velocity * np.float32(delta), height)
    floored = new_height < 0
    new_height = np.maximum(new_height, 0.0)
    new_velocity = np.where(floored, np.maximum(new_velocity, 0.0), new_velocity)

    # 7. Water brush: flat add inside the circle
    if tool.acts_as(ToolKind.WATER):
        in_brush = brush_mask(u, v, tool.pointer_uv, tool.brush_radius)
        new_height = new_height + np.where(in_brush, np.float32(tool.brush_strength * delta), 0.0)

    # 8. Spray bar, always on
    new_height = new_height + np.where(v > SOURCE_BAND_MIN_V, np.float32(rates.flow_rate * delta), 0.0)

    # 9-10. Bottom drain and side drains
    new_height = np.where(v < DRAIN_BAND_MAX_V, new_height * np.float32(DRAIN_FACTOR), new_height)
    side = (u < SIDE_DRAIN_MIN_U) | (u > SIDE_DRAIN_MAX_U)
    new_height = np.where(side, new_height * np.float32(SIDE_DRAIN_FACTOR), new_height)

    return np.stack([new_height, new_velocity]).astype(np.float32, copy=False)
