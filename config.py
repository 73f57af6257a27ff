# config.py
"""
Centralized configuration for the stream table.

This file contains high-level, cross-cutting constants.
Domain-specific constants are in:
- simulation/config.py (physics, erosion, sand settling)
- render/config.py (colors, viewer dimensions)
"""
from __future__ import annotations

from typing import Tuple

# =============================================================================
# GRID & PLANE
# =============================================================================
# THE simulation grid resolution (unified for water, terrain and obstacles)
GRID_WIDTH = 128
GRID_HEIGHT = 128
MIN_GRID_SIZE = 2

# Physical plane the grid is draped over (world units, x by y)
PLANE_SIZE: Tuple[float, float] = (3.8, 7.8)

# =============================================================================
# INITIAL CONDITIONS
# =============================================================================
INITIAL_TERRAIN_HEIGHT = 1.0   # Flat sand bed
DEFAULT_SEED = 1337            # Seeds colorSeed hashing and plant species choice

# =============================================================================
# RATE CONSTANTS (defaults for the tuning panel)
# =============================================================================
DEFAULT_VISCOSITY = 0.98
VISCOSITY_MIN = 0.9            # Tuning panel range, enforced by RateConstants
VISCOSITY_MAX = 0.999
DEFAULT_FLOW_RATE = 2.0        # Spray bar output (height units per second)
DEFAULT_EROSION_RATE = 0.5
DEFAULT_DEPOSITION_RATE = 0.5
DEFAULT_SLOPE_DEGREES = 2.0    # Trailer tilt, UI range 0 - 15

# =============================================================================
# TOOLS
# =============================================================================
DEFAULT_BRUSH_RADIUS = 0.05    # In UV units, UI range 0.01 - 0.2
DEFAULT_BRUSH_STRENGTH = 5.0   # UI range 1.0 - 10.0
PLANT_PAINT_RADIUS = 1         # Plant tool paints a (2r+1)x(2r+1) block
PLANT_RESISTANCE = 1.0

# =============================================================================
# TIME
# =============================================================================
TICK_INTERVAL = 1.0 / 60.0     # Seconds per frame in the viewer and CLI
LARGE_DELTA_WARNING = 0.1      # Deltas above this are logged (passed verbatim)
