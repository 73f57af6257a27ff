# grid_helpers.py
"""Helper functions for addressing the simulation grid.

These functions provide convenient access to grid coordinates, abstracting
away UV <-> cell <-> world conversions, clamped neighbor lookups and the
per-cell pseudo-random hash used by the update rules.

Arrays are indexed [x, y]; uv.x grows with x, uv.y grows with y.
"""
from __future__ import annotations

from typing import Tuple

import numpy as np

UV = Tuple[float, float]
Point = Tuple[int, int]


def cell_index_grid(width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
    """Integer (xs, ys) coordinate arrays, each of shape (width, height)."""
    return np.meshgrid(
        np.arange(width, dtype=np.int64),
        np.arange(height, dtype=np.int64),
        indexing="ij",
    )


def cell_uv_grid(width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
    """UV coordinates of every cell center.

    A cell's UV is its center, (x + 0.5) / width, so the first column sits at
    0.5 / width and the last at 1 - 0.5 / width.

    Returns:
        (u, v) float32 arrays of shape (width, height)
    """
    xs, ys = cell_index_grid(width, height)
    u = ((xs + 0.5) / width).astype(np.float32)
    v = ((ys + 0.5) / height).astype(np.float32)
    return u, v


def uv_to_cell(uv: UV, width: int, height: int) -> Point:
    """Nearest grid cell to a UV point, clamped to the grid.

    Example: uv (0.5, 0.5) on a 128x128 grid -> (64, 64)
    """
    x = int(np.floor(uv[0] * width))
    y = int(np.floor(uv[1] * height))
    return max(0, min(width - 1, x)), max(0, min(height - 1, y))


def uv_to_world(uv: UV, plane_size: Tuple[float, float]) -> Tuple[float, float]:
    """Map a UV point onto the physical plane, centered on the origin."""
    return (uv[0] - 0.5) * plane_size[0], (uv[1] - 0.5) * plane_size[1]


def shift_clamped(values: np.ndarray, dx: int, dy: int) -> np.ndarray:
    """Value of the neighbor at (x + dx, y + dy) aligned with each cell (x, y).

    Edges clamp: a neighbor outside the grid reads as the edge cell itself.
    Offsets must be -1, 0 or 1.

    Args:
        values: 2D array indexed [x, y]
        dx, dy: Neighbor offset

    Returns:
        Array with the same shape as values
    """
    width, height = values.shape
    padded = np.pad(values, 1, mode="edge")
    return padded[1 + dx:1 + dx + width, 1 + dy:1 + dy + height]


def cell_hash(xs: np.ndarray, ys: np.ndarray, time: float, seed: int = 0) -> np.ndarray:
    """Deterministic pseudo-random value in [0, 1) per cell.

    Same (x, y, time, seed) always gives the same value. Time is quantized to
    milliseconds so it can be mixed as an integer.
    """
    salt = ((int(round(time * 1000.0)) * 0xCB1AB31F) ^ (seed * 0x9E3779B9)) & 0xFFFFFFFF
    h = np.asarray(xs).astype(np.uint32) * np.uint32(0x8DA6B343)
    h = h ^ (np.asarray(ys).astype(np.uint32) * np.uint32(0xD8163841))
    h = h ^ np.uint32(salt)

    # Murmur3 finalizer
    h = h ^ (h >> np.uint32(16))
    h = h * np.uint32(0x85EBCA6B)
    h = h ^ (h >> np.uint32(13))
    h = h * np.uint32(0xC2B2AE35)
    h = h ^ (h >> np.uint32(16))

    # Top 24 bits fit a float32 mantissa exactly, so the result stays below 1.0
    return (h >> np.uint32(8)).astype(np.float32) / np.float32(1 << 24)


# 4 cardinal directions, used for the free-surface average
NEIGHBORS_4 = [
    (0, -1),           # below (toward the drain)
    (-1, 0), (1, 0),   # left, right
    (0,  1),           # above (toward the spray bar)
]


def brush_mask(u: np.ndarray, v: np.ndarray, center: UV, radius: float) -> np.ndarray:
    """Cells whose center lies strictly inside a circular brush in UV space."""
    return np.hypot(u - np.float32(center[0]), v - np.float32(center[1])) < radius


def shift_filled(values: np.ndarray, dx: int, dy: int, fill: float = 0.0) -> np.ndarray:
    """Like shift_clamped, but a neighbor outside the grid reads as fill."""
    width, height = values.shape
    padded = np.pad(values, 1, mode="constant", constant_values=fill)
    return padded[1 + dx:1 + dx + width, 1 + dy:1 + dy + height]
