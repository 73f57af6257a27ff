# simulation/fields.py
"""Double-buffered grid fields for water and terrain state.

Each field stores all of its per-cell channels in one float32 array of shape
(channels, width, height), indexed with a channel enum, e.g.
terrain[TerrainChannel.SAND, x, y].

Buffer discipline:
- Update rules read only from `current`
- New state is written into `next` (per cell with write(), or all at once
  with stage())
- swap() promotes next -> current for the whole grid at once
"""
from __future__ import annotations

from dataclasses import astuple, dataclass
from enum import IntEnum
from typing import Generic, Sequence, Type, TypeVar

import numpy as np

from errors import FieldShapeMismatch, OutOfRange


class WaterChannel(IntEnum):
    HEIGHT = 0
    VELOCITY = 1


class TerrainChannel(IntEnum):
    HEIGHT = 0
    SEDIMENT = 1
    SAND = 2
    COLOR_SEED = 3


@dataclass(frozen=True)
class WaterCell:
    """Water at one cell.

    velocity is a signed net vertical flux rate, not a 2D vector; flow
    direction is implicit in neighbor surface comparisons.
    """
    height: float = 0.0
    velocity: float = 0.0


@dataclass(frozen=True)
class TerrainCell:
    """Terrain at one cell: bed height, suspended sediment, loose sand, tint seed."""
    height: float = 0.0
    sediment: float = 0.0
    sand_particles: float = 0.0
    color_seed: float = 0.0


@dataclass(frozen=True)
class ObstacleCell:
    resistance: float = 0.0


CellT = TypeVar("CellT", WaterCell, TerrainCell)


class GridField(Generic[CellT]):
    """A fixed-size 2D field of small records, double buffered."""

    def __init__(
        self,
        channels: Type[IntEnum],
        cell_type: Type[CellT],
        width: int,
        height: int,
        initial: Sequence[float],
    ):
        self.channels = channels
        self.cell_type = cell_type
        self.width = width
        self.height = height

        shape = (len(channels), width, height)
        self._current = np.empty(shape, dtype=np.float32)
        for channel, value in zip(channels, initial):
            self._current[channel] = value
        self._next = self._current.copy()

    @property
    def shape(self) -> tuple[int, int, int]:
        return self._current.shape

    def _check_index(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfRange(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")

    def read(self, x: int, y: int) -> CellT:
        """Read one cell from the current buffer."""
        self._check_index(x, y)
        return self.cell_type(*(float(v) for v in self._current[:, x, y]))

    def write(self, x: int, y: int, cell: CellT) -> None:
        """Write one cell into the next buffer (invisible until swap)."""
        self._check_index(x, y)
        self._next[:, x, y] = astuple(cell)

    def stage(self, values: np.ndarray) -> None:
        """Write the whole next frame at once."""
        if values.shape != self._next.shape:
            raise FieldShapeMismatch(f"staged shape {values.shape} does not match field {self._next.shape}")
        np.copyto(self._next, values, casting="same_kind")

    def swap(self) -> None:
        """Promote next -> current.

        The new write buffer starts as a copy of the promoted frame, so cells
        left unwritten in the following step carry their value forward.
        """
        self._current, self._next = self._next, self._current
        np.copyto(self._next, self._current)

    def view(self) -> np.ndarray:
        """Read-only view of the whole current buffer."""
        view = self._current.view()
        view.flags.writeable = False
        return view

    def channel(self, channel: IntEnum) -> np.ndarray:
        """Read-only view of one channel of the current buffer."""
        return self.view()[channel]

    def snapshot(self) -> np.ndarray:
        """Independent copy of the current buffer."""
        return self._current.copy()


def water_field(width: int, height: int) -> GridField[WaterCell]:
    """Zero water everywhere."""
    return GridField(WaterChannel, WaterCell, width, height, initial=(0.0, 0.0))


def terrain_field(width: int, height: int, initial_height: float) -> GridField[TerrainCell]:
    """Flat bed at initial_height, no sediment, no sand."""
    return GridField(TerrainChannel, TerrainCell, width, height,
                     initial=(initial_height, 0.0, 0.0, 0.0))
