# simulation/sand.py
"""Sand settling cellular automaton.

Loose sand on dry-ish cells slides toward the drain (lower y) when the
height gap to the receiving cell exceeds a stability threshold:
- Straight down first
- If straight down is blocked, one diagonal (down-left or down-right),
  picked per cell per step from a deterministic hash so there is no
  directional bias

Each transfer is computed once, on the donor side, from the previous frame.
The receiving side is the same flux array shifted onto the receiver, so what
one cell loses another gains exactly.
"""
from __future__ import annotations

from typing import Tuple

import numpy as np

from grid_helpers import cell_hash, shift_clamped, shift_filled
from simulation.config import (
    SAND_ACTIVE_THRESHOLD,
    SAND_DRY_WATER_LIMIT,
    SAND_STABILITY_THRESHOLD,
    SAND_FALL_RATE,
    SAND_HEIGHT_PER_PARTICLE,
    FALL_DIRECTION_SALT,
)


def _can_fall(height: np.ndarray, sand: np.ndarray, dx: int, dy: int) -> np.ndarray:
    """Gap to the (dx, dy) neighbor exceeds the threshold and it holds less sand."""
    gap = height - shift_clamped(height, dx, dy)
    return (gap > SAND_STABILITY_THRESHOLD) & (shift_clamped(sand, dx, dy) < sand)


def compute_sand_flux(
    height: np.ndarray,
    sand: np.ndarray,
    water_height: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    time: float,
    seed: int,
    delta: float,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Sand each donor sends down, down-left and down-right this step.

    Returns:
        (down, down_left, down_right) particle fluxes, indexed by donor cell
    """
    width, grid_height = height.shape
    active = (sand > SAND_ACTIVE_THRESHOLD) & (water_height < SAND_DRY_WATER_LIMIT)
    active &= ys > 0  # Bottom row has nothing below it

    move = np.minimum(sand, np.float32(SAND_FALL_RATE * delta))

    down = active & _can_fall(height, sand, 0, -1)

    # Blocked cells try one diagonal; which one is a coin flip per cell per step
    go_left = cell_hash(xs, ys, time, seed ^ FALL_DIRECTION_SALT) < 0.5
    left_ok = _can_fall(height, sand, -1, -1) & (xs > 0)
    right_ok = _can_fall(height, sand, 1, -1) & (xs < width - 1)
    blocked = active & ~down
    down_left = blocked & go_left & left_ok
    down_right = blocked & ~go_left & right_ok

    zero = np.float32(0.0)
    return (
        np.where(down, move, zero),
        np.where(down_left, move, zero),
        np.where(down_right, move, zero),
    )


def settle_sand(
    height: np.ndarray,
    sand: np.ndarray,
    water_height: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    time: float,
    seed: int,
    delta: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """Apply one settling step.

    Sand moves with its share of height (SAND_HEIGHT_PER_PARTICLE each),
    capped at the donor's height. Total sand and total height are both
    unchanged by this step.

    Returns:
        (new_height, new_sand)
    """
    down, down_left, down_right = compute_sand_flux(
        height, sand, water_height, xs, ys, time, seed, delta)

    sent = down + down_left + down_right
    if not np.any(sent):
        return height, sand

    # A donor sends to one neighbor at most, so the cap applies per donor
    lifted = np.minimum(sent * np.float32(SAND_HEIGHT_PER_PARTICLE), height)
    share = np.divide(lifted, sent, out=np.zeros_like(sent), where=sent > 0)

    # Receiver (x, y) collects from (x, y+1), (x+1, y+1) and (x-1, y+1)
    received = (shift_filled(down, 0, 1) + shift_filled(down_left, 1, 1)
                + shift_filled(down_right, -1, 1))
    received_height = (shift_filled(down * share, 0, 1) + shift_filled(down_left * share, 1, 1)
                       + shift_filled(down_right * share, -1, 1))

    new_sand = sand - sent + received
    new_height = height - lifted + received_height
    return new_height, np.maximum(new_sand, 0.0)
