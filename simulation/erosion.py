# simulation/erosion.py
"""Erosion and deposition between the bed and moving water.

Key concepts:
- Capacity: how much sediment water can carry, proportional to its speed
- Erosion: below capacity, water picks up bed material as sediment
- Deposition: above capacity, sediment drops back onto the bed, partly as
  loose sand
- Height + sediment is unchanged by the exchange in every cell
"""
from __future__ import annotations

from typing import Tuple

import numpy as np

from simulation.config import (
    EROSION_WATER_THRESHOLD,
    CAPACITY_FACTOR,
    SAND_DISSOLVE_FACTOR,
    DEPOSIT_SAND_FRACTION,
    SAND_HEIGHT_PER_PARTICLE,
    SAND_MAX_PARTICLES,
    TERRAIN_MAX_HEIGHT,
)


def sediment_capacity(velocity: np.ndarray) -> np.ndarray:
    """Sediment a cell's water can carry at its current speed."""
    return np.abs(velocity) * np.float32(CAPACITY_FACTOR)


def exchange_sediment(
    height: np.ndarray,
    sediment: np.ndarray,
    sand: np.ndarray,
    water_height: np.ndarray,
    velocity: np.ndarray,
    erosion_rate: float,
    deposition_rate: float,
    delta: float,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Move material between bed and suspension on wet cells.

    Args:
        height, sediment, sand: Terrain channels, shape (width, height)
        water_height, velocity: Previous water frame channels
        erosion_rate, deposition_rate: Rate constants (per second)
        delta: Time step in seconds

    Returns:
        (new_height, new_sediment, new_sand)
    """
    wet = water_height > EROSION_WATER_THRESHOLD
    capacity = sediment_capacity(velocity)
    eroding = wet & (capacity > sediment)
    depositing = wet & ~eroding

    # Erode: capped at the bed that is there
    erode = (capacity - sediment) * np.float32(erosion_rate * delta)
    erode = np.where(eroding, np.clip(erode, 0.0, height), 0.0)

    # Deposit: capped at the sediment carried and the headroom under the max height
    deposit = (sediment - capacity) * np.float32(deposition_rate * delta)
    headroom = np.maximum(np.float32(TERRAIN_MAX_HEIGHT) - height, 0.0)
    deposit = np.where(depositing, np.clip(deposit, 0.0, np.minimum(sediment, headroom)), 0.0)

    new_height = height - erode + deposit
    new_sediment = np.maximum(sediment + erode - deposit, 0.0)

    # Eroded bed dissolves its loose sand; part of each deposit settles as sand
    new_sand = np.maximum(sand - erode * np.float32(SAND_DISSOLVE_FACTOR), 0.0)
    new_sand = new_sand + deposit * np.float32(DEPOSIT_SAND_FRACTION / SAND_HEIGHT_PER_PARTICLE)
    new_sand = np.minimum(new_sand, np.float32(SAND_MAX_PARTICLES))

    return new_height, new_sediment, new_sand
