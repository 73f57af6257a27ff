"""Core stream table state data structures."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from simulation.fields import GridField, WaterCell, TerrainCell, ObstacleCell
from simulation.obstacles import ObstacleField
from simulation.params import PlantMarker, SimulationSettings

logger = logging.getLogger(__name__)


@dataclass
class StreamState:
    """Main simulation state container.

    All spatial data lives on one width x height grid indexed [x, y].
    The water and terrain fields are double buffered; the obstacle field is
    single buffered and only edited between steps.
    """
    settings: SimulationSettings
    water: GridField[WaterCell]
    terrain: GridField[TerrainCell]
    obstacles: ObstacleField

    # Cell coordinate caches, shape (width, height)
    xs: np.ndarray
    ys: np.ndarray
    u: np.ndarray
    v: np.ndarray

    # Append-only placement records for the rendering collaborator
    _plants: List[PlantMarker] = field(default_factory=list)

    # Simulation clock (advanced by SimulationClock only)
    time: float = 0.0
    step_count: int = 0
    stalled: bool = False

    @property
    def width(self) -> int:
        return self.settings.width

    @property
    def height(self) -> int:
        return self.settings.height

    # === Step output views (read-only, valid until the next swap) ===
    def water_view(self) -> np.ndarray:
        return self.water.view()

    def terrain_view(self) -> np.ndarray:
        return self.terrain.view()

    def obstacle_view(self) -> np.ndarray:
        return self.obstacles.view()

    @property
    def plants(self) -> Tuple[PlantMarker, ...]:
        return tuple(self._plants)

    def cell(self, x: int, y: int) -> Tuple[WaterCell, TerrainCell, ObstacleCell]:
        """Everything stored at one grid position."""
        return self.water.read(x, y), self.terrain.read(x, y), self.obstacles.read(x, y)

    def place_plant(self, marker: PlantMarker) -> None:
        """Paint the obstacle block under a plant and record the marker.

        Only called between steps, never while a step is computing.
        """
        self.obstacles.paint_uv(marker.position_uv)
        self._plants.append(marker)
        logger.info("Planted %s at uv=(%.3f, %.3f)", marker.species.value, *marker.position_uv)
