"""
Configuration constants for the simulation domain.
Includes water physics, erosion, and sand settling tuning values.
"""
from __future__ import annotations

# =============================================================================
# WATER PHYSICS
# =============================================================================
GRAVITY = 9.8                # Free-surface acceleration toward the neighbor average
SLOPE_GAIN = 5.0             # Downhill bias per degree of trailer tilt

# Boundary bands, in UV units along the flow axis (y) and across it (x)
SOURCE_BAND_MIN_V = 0.96     # Spray bar: uv.y above this always receives flowRate
DRAIN_BAND_MAX_V = 0.02      # Bottom drain: uv.y below this
DRAIN_FACTOR = 0.9           # Bottom drain keeps 90% per step
SIDE_DRAIN_MIN_U = 0.02      # Side drains: uv.x below this ...
SIDE_DRAIN_MAX_U = 0.98      # ... or above this
SIDE_DRAIN_FACTOR = 0.5      # Side drains keep 50% per step

# =============================================================================
# TERRAIN BOUNDS
# =============================================================================
TERRAIN_MIN_HEIGHT = 0.0
TERRAIN_MAX_HEIGHT = 5.0
SAND_MIN_PARTICLES = 0.0
SAND_MAX_PARTICLES = 100.0

# =============================================================================
# TOOLS
# =============================================================================
TOOL_HEIGHT_GAIN = 10.0      # Dig/Sand change height by strength * delta * gain
SAND_HEIGHT_PER_PARTICLE = 0.02  # Accumulated sand implies this much height per particle

# =============================================================================
# SAND SETTLING
# =============================================================================
SAND_ACTIVE_THRESHOLD = 0.1  # Cells with less sand than this never move
SAND_DRY_WATER_LIMIT = 0.5   # Only dry-ish cells settle
SAND_STABILITY_THRESHOLD = 0.15  # Min height gap before sand falls
SAND_FALL_RATE = 20.0        # Particles per second leaving a falling cell
SAND_RESET_THRESHOLD = 0.01  # At or below this a cell has "no sand"

# =============================================================================
# EROSION & SEDIMENT
# =============================================================================
EROSION_WATER_THRESHOLD = 0.05   # Min water height for erosion/deposition
CAPACITY_FACTOR = 2.0            # capacity = |velocity| * factor
SAND_DISSOLVE_FACTOR = 1.0 / SAND_HEIGHT_PER_PARTICLE  # Particles lost per eroded height
DEPOSIT_SAND_FRACTION = 0.5      # Fraction of deposited height that becomes loose sand

# =============================================================================
# PSEUDO-RANDOMNESS
# =============================================================================
MIN_COLOR_SEED = 1e-6        # Assigned seeds stay strictly positive (0 means "unset")
FALL_DIRECTION_SALT = 0x51DE     # Separate hash streams for fall direction ...
COLOR_SEED_SALT = 0xC0105        # ... and for sand tint
