"""Simulation modules for the stream table.

- fields: double-buffered water/terrain grids
- obstacles: plant resistance map
- water: free-surface water update
- terrain: sand settling, brush, erosion/deposition update
- clock: step ordering and buffer swapping (import from simulation.clock)
"""

from simulation.fields import GridField, WaterChannel, TerrainChannel
from simulation.obstacles import ObstacleField
from simulation.water import simulate_water
from simulation.terrain import simulate_terrain

__all__ = [
    "GridField",
    "WaterChannel",
    "TerrainChannel",
    "ObstacleField",
    "simulate_water",
    "simulate_terrain",
]
