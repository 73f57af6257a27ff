"""Stream table state initialization."""
from __future__ import annotations

import logging
from typing import Optional

from grid_helpers import cell_index_grid, cell_uv_grid
from simulation.fields import terrain_field, water_field
from simulation.obstacles import ObstacleField
from simulation.params import SimulationSettings
from stream_state.state import StreamState

logger = logging.getLogger(__name__)


def build_initial_state(settings: Optional[SimulationSettings] = None) -> StreamState:
    """Create a new state with the deterministic starting conditions.

    Flat bed at the initial terrain height, no water, no sediment, no sand,
    no obstacles, no plants.

    Raises:
        InvalidConfiguration: resolution or plane settings are unusable
    """
    settings = settings if settings is not None else SimulationSettings()
    settings.validate()

    width, height = settings.width, settings.height
    xs, ys = cell_index_grid(width, height)
    u, v = cell_uv_grid(width, height)

    state = StreamState(
        settings=settings,
        water=water_field(width, height),
        terrain=terrain_field(width, height, settings.initial_terrain_height),
        obstacles=ObstacleField(width, height),
        xs=xs,
        ys=ys,
        u=u,
        v=v,
    )
    logger.info("Initialized %dx%d stream table (seed=%d)", width, height, settings.seed)
    return state
