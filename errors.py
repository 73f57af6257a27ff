"""
errors.py - Exception taxonomy for the stream table.

Runtime numeric edge cases are clamped inside a step and never raise.
These exceptions cover programming errors and malformed external input.
"""
from __future__ import annotations


class SimulationError(Exception):
    """Base class for all stream table errors."""


class OutOfRange(SimulationError, IndexError):
    """A grid index outside the field was read or written."""


class InvalidConfiguration(SimulationError, ValueError):
    """Grid resolution or rate constants are unusable (fails at initialization)."""


class InvalidStepInput(SimulationError, ValueError):
    """Per-frame input rejected at the boundary (non-finite delta, bad brush...)."""


class SimulationStalled(SimulationError):
    """A step did not complete; the simulation refuses further ticks."""


class FieldShapeMismatch(SimulationError, ValueError):
    """A whole frame staged into a field has the wrong shape."""
