"""Grid-wide totals for mass bookkeeping.

The rules are not globally conservative (the spray bar adds water, drains
remove it), but several exchanges are: erosion/deposition keeps
height + sediment per cell, and sand settling keeps total sand and total
height. FieldTotals makes those checks one subtraction.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from simulation.fields import TerrainChannel, WaterChannel

if TYPE_CHECKING:
    from stream_state.state import StreamState


@dataclass(frozen=True)
class FieldTotals:
    """Sums over the whole grid of the current frame."""
    water: float = 0.0
    terrain: float = 0.0
    sediment: float = 0.0
    sand: float = 0.0
    obstacle_cells: int = 0

    @classmethod
    def from_state(cls, state: "StreamState") -> "FieldTotals":
        water = state.water_view()
        terrain = state.terrain_view()
        return cls(
            water=float(np.sum(water[WaterChannel.HEIGHT], dtype=np.float64)),
            terrain=float(np.sum(terrain[TerrainChannel.HEIGHT], dtype=np.float64)),
            sediment=float(np.sum(terrain[TerrainChannel.SEDIMENT], dtype=np.float64)),
            sand=float(np.sum(terrain[TerrainChannel.SAND], dtype=np.float64)),
            obstacle_cells=int(np.count_nonzero(state.obstacle_view())),
        )

    @property
    def bed_material(self) -> float:
        """Material on the bed or in suspension."""
        return self.terrain + self.sediment

    def delta(self, other: "FieldTotals") -> "FieldTotals":
        """other - self, field by field."""
        return FieldTotals(
            water=other.water - self.water,
            terrain=other.terrain - self.terrain,
            sediment=other.sediment - self.sediment,
            sand=other.sand - self.sand,
            obstacle_cells=other.obstacle_cells - self.obstacle_cells,
        )

    def summary(self) -> str:
        return (f"water={self.water:.3f} terrain={self.terrain:.3f} "
                f"sediment={self.sediment:.4f} sand={self.sand:.2f} "
                f"obstacles={self.obstacle_cells}")
