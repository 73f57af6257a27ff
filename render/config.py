"""
Configuration constants for the rendering domain.
Includes viewer dimensions, colors, font sizes, and other visual tuning values.
"""
from __future__ import annotations

from typing import Dict, Tuple

# =============================================================================
# VIEWER LAYOUT & DIMENSIONS
# =============================================================================
CELL_PIXELS = 5                           # Screen pixels per grid cell (128 cells -> 640px)
SIDEBAR_WIDTH = 240
TOOLBAR_HEIGHT = 32
LINE_HEIGHT = 20
FONT_SIZE = 18
FRAME_RATE = 60

# =============================================================================
# COLORS
# =============================================================================
# UI Colors
COLOR_BG_DARK = (20, 20, 25)
COLOR_TEXT_WHITE = (230, 230, 230)
COLOR_TEXT_GRAY = (160, 160, 160)
COLOR_TEXT_HIGHLIGHT = (220, 200, 120)

# Toolbar Colors
TOOLBAR_BG_COLOR: Tuple[int, int, int] = (30, 30, 35)
TOOLBAR_SELECTED_COLOR: Tuple[int, int, int] = (60, 55, 40)
TOOLBAR_TEXT_COLOR: Tuple[int, int, int] = (200, 200, 180)

# Field Colors
COLOR_SAND = (210, 180, 140)              # Tan sand bed
COLOR_SAND_LOOSE = (232, 204, 150)        # Loose deposited sand (tint varied by colorSeed)
COLOR_WATER_DEEP = (0, 110, 200)
COLOR_WATER_SHALLOW = (0, 170, 255)
COLOR_OBSTACLE = (34, 139, 34)

PLANT_COLORS: Dict[str, Tuple[int, int, int]] = {
    "tree": (20, 100, 30),
    "bush": (60, 140, 50),
    "grass": (120, 190, 80),
}

# Shading
ELEVATION_BRIGHTNESS_MIN = 0.8            # Bed at height 0
ELEVATION_BRIGHTNESS_MAX = 1.2            # Bed at max height
SAND_TINT_VARIATION = 0.12                # +/- brightness from colorSeed
WATER_MIN_VISIBLE = 0.01                  # Thinner water is not drawn
WATER_OPACITY_MIN = 0.3
WATER_OPACITY_MAX = 0.9
