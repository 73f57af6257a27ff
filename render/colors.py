# render/colors.py
"""Color calculations for displaying the simulation fields.

Turns the read-only field views into RGB images (uint8, shape
(width, height, 3), indexed [x, y] like the fields). Pure NumPy, so the
images can be checked without a display.
"""
from __future__ import annotations


import numpy as np

from render.config import (
    COLOR_SAND,
    COLOR_SAND_LOOSE,
    COLOR_WATER_DEEP,
    COLOR_WATER_SHALLOW,
    COLOR_OBSTACLE,
    ELEVATION_BRIGHTNESS_MIN,
    ELEVATION_BRIGHTNESS_MAX,
    SAND_TINT_VARIATION,
    WATER_MIN_VISIBLE,
    WATER_OPACITY_MIN,
    WATER_OPACITY_MAX,
)
from simulation.config import TERRAIN_MAX_HEIGHT, SAND_RESET_THRESHOLD
from simulation.fields import TerrainChannel, WaterChannel



def elevation_brightness(height: np.ndarray) -> np.ndarray:
    """Brightness multiplier from bed height (higher is lighter)."""
    normalized = np.clip(height / TERRAIN_MAX_HEIGHT, 0.0, 1.0)
    return ELEVATION_BRIGHTNESS_MIN + normalized * (ELEVATION_BRIGHTNESS_MAX - ELEVATION_BRIGHTNESS_MIN)


def terrain_rgb(terrain: np.ndarray) -> np.ndarray:
    """Shaded bed colors; loose sand uses its own tint, varied per cell by colorSeed."""
    height = terrain[TerrainChannel.HEIGHT]
    sand = terrain[TerrainChannel.SAND]
    color_seed = terrain[TerrainChannel.COLOR_SEED]

    loose = (sand > SAND_RESET_THRESHOLD)[..., None]
    base = np.where(loose, np.array(COLOR_SAND_LOOSE, dtype=np.float32),
                    np.array(COLOR_SAND, dtype=np.float32))

    brightness = elevation_brightness(height)
    tint = np.where(sand > SAND_RESET_THRESHOLD, 1.0 + (color_seed - 0.5) * 2.0 * SAND_TINT_VARIATION, 1.0)
    rgb = base * (brightness * tint)[..., None]
    return np.clip(rgb, 0, 255).astype(np.uint8)


def water_opacity(water_height: np.ndarray) -> np.ndarray:
    """Per-cell water alpha; 0 where the water is too thin to draw."""
    alpha = np.clip(water_height * 2.0, WATER_OPACITY_MIN, WATER_OPACITY_MAX)
    return np.where(water_height < WATER_MIN_VISIBLE, 0.0, alpha)


def water_rgb(water: np.ndarray) -> np.ndarray:
    """Water color blended from shallow to deep by depth."""
    depth = np.clip(water[WaterChannel.HEIGHT], 0.0, 1.0)[..., None]
    shallow = np.array(COLOR_WATER_SHALLOW, dtype=np.float32)
    deep = np.array(COLOR_WATER_DEEP, dtype=np.float32)
    return (shallow * (1.0 - depth) + deep * depth).astype(np.uint8)


def compose_frame(terrain: np.ndarray, water: np.ndarray, resistance: np.ndarray) -> np.ndarray:
    """Top-down image: bed, then water alpha-blended over it, obstacles on top."""
    bed = terrain_rgb(terrain).astype(np.float32)
    alpha = water_opacity(water[WaterChannel.HEIGHT])[..., None]
    frame = bed * (1.0 - alpha) + water_rgb(water).astype(np.float32) * alpha

    blocked = resistance > 0
    frame[blocked] = np.array(COLOR_OBSTACLE, dtype=np.float32)
    return np.clip(frame, 0, 255).astype(np.uint8)


