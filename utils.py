"""
utils.py - Common utility functions for the stream table

Provides shared, stateless helper functions used across different modules.
"""
from __future__ import annotations

import math



def clamp(val: float, low: float, high: float) -> float:
    """Clamp a value between low and high bounds."""
    return max(low, min(high, val))


def is_finite(*values: float) -> bool:
    """True when every value is a finite real number (no NaN, no inf)."""
    try:
        return all(math.isfinite(float(v)) for v in values)
    except (TypeError, ValueError):
        return False


