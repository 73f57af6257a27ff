# simulation/obstacles.py
"""Static resistance map painted by the plant tool.

Resistance is 0 (open) to 1 (fully blocked). The physics rules only read
it; the only writes are explicit paints applied between steps.
"""
from __future__ import annotations

import logging
from typing import Tuple

import numpy as np
from scipy.ndimage import binary_dilation

from config import PLANT_PAINT_RADIUS, PLANT_RESISTANCE
from errors import OutOfRange
from grid_helpers import uv_to_cell
from simulation.fields import ObstacleCell

logger = logging.getLogger(__name__)


class ObstacleField:
    """Single-buffered resistance grid, shape (width, height)."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.resistance = np.zeros((width, height), dtype=np.float32)

    def read(self, x: int, y: int) -> ObstacleCell:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfRange(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")
        return ObstacleCell(float(self.resistance[x, y]))

    def paint(
        self,
        center_x: int,
        center_y: int,
        radius: int = PLANT_PAINT_RADIUS,
        value: float = PLANT_RESISTANCE,
    ) -> int:
        """Set resistance to value on the square block around a cell.

        The block is (2 * radius + 1) cells on a side and is cut off at the
        grid edges. Painting an already painted block changes nothing.

        Returns:
            Number of cells whose resistance changed
        """
        if not (0 <= center_x < self.width and 0 <= center_y < self.height):
            raise OutOfRange(f"paint center ({center_x}, {center_y}) outside grid")

        seed = np.zeros((self.width, self.height), dtype=bool)
        seed[center_x, center_y] = True
        structure = np.ones((2 * radius + 1, 2 * radius + 1), dtype=bool)
        block = binary_dilation(seed, structure=structure) if radius > 0 else seed

        changed = int(np.count_nonzero(self.resistance[block] != np.float32(value)))
        self.resistance[block] = value
        logger.debug("Painted obstacle at (%d, %d), %d cells changed", center_x, center_y, changed)
        return changed

    def paint_uv(self, uv: Tuple[float, float], radius: int = PLANT_PAINT_RADIUS,
                 value: float = PLANT_RESISTANCE) -> int:
        """Paint centered on the nearest cell to a UV point."""
        x, y = uv_to_cell(uv, self.width, self.height)
        return self.paint(x, y, radius, value)

    def view(self) -> np.ndarray:
        """Read-only resistance view."""
        view = self.resistance.view()
        view.flags.writeable = False
        return view
