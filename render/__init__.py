# render/__init__.py
"""
Rendering module for the stream table viewer.

colors is pure NumPy (field views -> RGB images); primitives and toolbar
draw with pygame.
"""
from render.colors import (
    elevation_brightness,
    terrain_rgb,
    water_rgb,
    water_opacity,
    compose_frame,
)

__all__ = [
    "elevation_brightness",
    "terrain_rgb",
    "water_rgb",
    "water_opacity",
    "compose_frame",
]
