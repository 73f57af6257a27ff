"""
keybindings.py - Centralized key mappings for the stream table viewer

Single source of truth for all keyboard controls.
"""
from __future__ import annotations

try:
    import pygame
except ImportError:
    # Allow import without pygame for type checking
    pygame = None


def _key(name: str) -> int:
    """Get pygame key constant by name, or placeholder if pygame not loaded."""
    if pygame is None:
        return 0
    return getattr(pygame, f"K_{name}", 0)


# Number keys for toolbar selection (1-4)
TOOL_KEYS = {
    _key("1"): 1,
    _key("2"): 2,
    _key("3"): 3,
    _key("4"): 4,
}

# Brush and tilt adjustment
BRUSH_SMALLER_KEY = _key("LEFTBRACKET")
BRUSH_LARGER_KEY = _key("RIGHTBRACKET")
STRENGTH_DOWN_KEY = _key("MINUS")
STRENGTH_UP_KEY = _key("EQUALS")
SLOPE_UP_KEY = _key("UP")
SLOPE_DOWN_KEY = _key("DOWN")

# System keys
PAUSE_KEY = _key("SPACE")
RESET_KEY = _key("r")
QUIT_KEY = _key("ESCAPE")
HELP_KEY = _key("h")

# Control descriptions for help display
CONTROL_DESCRIPTIONS = [
    "1-4: select tool",
    "LClick: use tool",
    "[ / ]: brush size",
    "- / =: brush strength",
    "Up/Down: slope",
    "Space: pause",
    "R: reset",
    "H: help",
    "Esc: quit",
]
