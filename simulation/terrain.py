# simulation/terrain.py
"""Terrain update: sand settling, dig/sand brush, reconciliation, erosion.

Order within one step:
1. Sand settling on dry-ish cells
2. Dig / Sand brush
3. Accumulated sand props up the bed (height >= sand * 0.02)
4. Clamp height to [0, 5] and sand to [0, 100]
5. Erosion / deposition with the previous frame's water
6. colorSeed bookkeeping (assign on first sand, clear when sand is gone)
"""
from __future__ import annotations

import numpy as np

from grid_helpers import brush_mask, cell_hash
from simulation.config import (
    TOOL_HEIGHT_GAIN,
    SAND_HEIGHT_PER_PARTICLE,
    SAND_RESET_THRESHOLD,
    TERRAIN_MIN_HEIGHT,
    TERRAIN_MAX_HEIGHT,
    SAND_MIN_PARTICLES,
    SAND_MAX_PARTICLES,
    MIN_COLOR_SEED,
    COLOR_SEED_SALT,
)
from simulation.erosion import exchange_sediment
from simulation.fields import TerrainChannel, WaterChannel
from simulation.params import StepInput, ToolKind
from simulation.sand import settle_sand


def apply_terrain_brush(
    height: np.ndarray,
    sand: np.ndarray,
    u: np.ndarray,
    v: np.ndarray,
    step: StepInput,
) -> tuple[np.ndarray, np.ndarray]:
    """Dig removes bed and sand inside the brush; Sand adds both."""
    tool = step.tool_state
    if not (tool.acts_as(ToolKind.DIG) or tool.acts_as(ToolKind.SAND)):
        return height, sand

    in_brush = brush_mask(u, v, tool.pointer_uv, tool.brush_radius)
    amount = np.float32(tool.brush_strength * step.delta * TOOL_HEIGHT_GAIN)
    particles = np.float32(amount / SAND_HEIGHT_PER_PARTICLE)

    if tool.tool_kind is ToolKind.DIG:
        height = np.where(in_brush, np.maximum(height - amount, 0.0), height)
        sand = np.where(in_brush, np.maximum(sand - particles, 0.0), sand)
    else:
        height = np.where(in_brush, height + amount, height)
        sand = np.where(in_brush, sand + particles, sand)
    return height, sand


def assign_color_seeds(
    color_seed: np.ndarray,
    sand: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    time: float,
    seed: int,
) -> np.ndarray:
    """Give cells that just gained sand a seed; keep existing seeds; clear empty cells."""
    has_sand = sand > SAND_RESET_THRESHOLD
    fresh = np.maximum(cell_hash(xs, ys, time, seed ^ COLOR_SEED_SALT), np.float32(MIN_COLOR_SEED))
    kept = np.where(color_seed > 0, color_seed, fresh)
    return np.where(has_sand, kept, 0.0)


def simulate_terrain(
    terrain: np.ndarray,
    water: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    u: np.ndarray,
    v: np.ndarray,
    step: StepInput,
    time: float,
    seed: int,
) -> np.ndarray:
    """Compute the next terrain frame.

    Args:
        terrain: Previous terrain field, shape (4, width, height)
        water: Previous water field, shape (2, width, height)
        xs, ys: Integer cell coordinates
        u, v: Cell-center UV coordinates
        step: Frame input
        time: Simulation clock time, drives the deterministic hash
        seed: Session seed

    Returns:
        New terrain field, shape (4, width, height), float32
        (an unchanged copy of terrain when delta is 0)
    """
    if step.delta == 0:
        return np.array(terrain, dtype=np.float32)

    height = terrain[TerrainChannel.HEIGHT]
    sediment = terrain[TerrainChannel.SEDIMENT]
    sand = terrain[TerrainChannel.SAND]
    color_seed = terrain[TerrainChannel.COLOR_SEED]
    water_height = water[WaterChannel.HEIGHT]
    velocity = water[WaterChannel.VELOCITY]

    height, sand = settle_sand(height, sand, water_height, xs, ys, time, seed, step.delta)
    height, sand = apply_terrain_brush(height, sand, u, v, step)

    height = np.maximum(height, sand * np.float32(SAND_HEIGHT_PER_PARTICLE))
    height = np.clip(height, TERRAIN_MIN_HEIGHT, TERRAIN_MAX_HEIGHT)
    sand = np.clip(sand, SAND_MIN_PARTICLES, SAND_MAX_PARTICLES)

    height, sediment, sand = exchange_sediment(
        height, sediment, sand, water_height, velocity,
        step.rates.erosion_rate, step.rates.deposition_rate, step.delta,
    )

    color_seed = assign_color_seeds(color_seed, sand, xs, ys, time, seed)

    return np.stack([height, sediment, sand, color_seed]).astype(np.float32, copy=False)
