# simulation/params.py
"""Boundary types exchanged with the UI and rendering collaborators.

- SimulationSettings: fixed at initialization (resolution, plane, seed)
- RateConstants: tunable per frame (viscosity, flow, erosion, deposition)
- ToolState: pointer + selected tool for one frame
- StepInput: everything one tick consumes
- PlantMarker: placement record produced by the plant tool

All validation happens here, before any field is touched.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from config import (
    GRID_WIDTH,
    GRID_HEIGHT,
    MIN_GRID_SIZE,
    PLANE_SIZE,
    INITIAL_TERRAIN_HEIGHT,
    DEFAULT_SEED,
    DEFAULT_VISCOSITY,
    VISCOSITY_MIN,
    VISCOSITY_MAX,
    DEFAULT_FLOW_RATE,
    DEFAULT_EROSION_RATE,
    DEFAULT_DEPOSITION_RATE,
    DEFAULT_BRUSH_RADIUS,
    DEFAULT_BRUSH_STRENGTH,
)
from errors import InvalidConfiguration, InvalidStepInput
from grid_helpers import uv_to_world
from simulation.config import TERRAIN_MIN_HEIGHT, TERRAIN_MAX_HEIGHT
from utils import is_finite

UV = Tuple[float, float]


@dataclass(frozen=True)
class SimulationSettings:
    """Configuration only; nothing here changes behavior after startup."""
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    plane_size: Tuple[float, float] = PLANE_SIZE
    seed: int = DEFAULT_SEED
    initial_terrain_height: float = INITIAL_TERRAIN_HEIGHT

    def validate(self) -> None:
        if not isinstance(self.width, int) or not isinstance(self.height, int):
            raise InvalidConfiguration(f"grid resolution must be integers, got {self.width}x{self.height}")
        if self.width < MIN_GRID_SIZE or self.height < MIN_GRID_SIZE:
            raise InvalidConfiguration(
                f"grid resolution must be at least {MIN_GRID_SIZE}x{MIN_GRID_SIZE}, "
                f"got {self.width}x{self.height}")
        if not is_finite(*self.plane_size) or min(self.plane_size) <= 0:
            raise InvalidConfiguration(f"plane size must be positive, got {self.plane_size}")
        if not is_finite(self.initial_terrain_height) or not (
                TERRAIN_MIN_HEIGHT <= self.initial_terrain_height <= TERRAIN_MAX_HEIGHT):
            raise InvalidConfiguration(
                f"initial terrain height must be in [{TERRAIN_MIN_HEIGHT}, {TERRAIN_MAX_HEIGHT}]")


@dataclass(frozen=True)
class RateConstants:
    """Tunable rates; treated as explicit-Euler coefficients, so keep delta small."""
    viscosity: float = DEFAULT_VISCOSITY
    flow_rate: float = DEFAULT_FLOW_RATE
    erosion_rate: float = DEFAULT_EROSION_RATE
    deposition_rate: float = DEFAULT_DEPOSITION_RATE

    def validate(self) -> None:
        if not is_finite(self.viscosity, self.flow_rate, self.erosion_rate, self.deposition_rate):
            raise InvalidConfiguration(f"rate constants must be finite: {self}")
        if not VISCOSITY_MIN <= self.viscosity <= VISCOSITY_MAX:
            raise InvalidConfiguration(
                f"viscosity must be in [{VISCOSITY_MIN}, {VISCOSITY_MAX}], got {self.viscosity}")
        if min(self.flow_rate, self.erosion_rate, self.deposition_rate) < 0:
            raise InvalidConfiguration(f"rates must be non-negative: {self}")


class ToolKind(Enum):
    WATER = "water"
    DIG = "dig"
    SAND = "sand"
    PLANT = "plant"

    @property
    def is_continuous(self) -> bool:
        """Continuous tools act every frame while held; plant fires once per press."""
        return self is not ToolKind.PLANT


class PlantSpecies(Enum):
    TREE = "tree"
    BUSH = "bush"
    GRASS = "grass"


@dataclass(frozen=True)
class ToolState:
    """Pointer and tool selection for one frame."""
    tool_kind: ToolKind = ToolKind.WATER
    pointer_uv: UV = (0.5, 0.5)
    pointer_active: bool = False
    brush_radius: float = DEFAULT_BRUSH_RADIUS
    brush_strength: float = DEFAULT_BRUSH_STRENGTH

    def validate(self) -> None:
        if not is_finite(*self.pointer_uv):
            raise InvalidStepInput(f"pointer UV must be finite, got {self.pointer_uv}")
        if not all(0.0 <= c <= 1.0 for c in self.pointer_uv):
            raise InvalidStepInput(f"pointer UV must be in [0, 1], got {self.pointer_uv}")
        if not is_finite(self.brush_radius, self.brush_strength):
            raise InvalidStepInput("brush radius and strength must be finite")
        if self.brush_radius < 0 or self.brush_strength < 0:
            raise InvalidStepInput(
                f"brush radius/strength must be non-negative, got {self.brush_radius}/{self.brush_strength}")

    def acts_as(self, kind: ToolKind) -> bool:
        """True when this frame applies the given continuous tool."""
        return self.pointer_active and self.tool_kind is kind


@dataclass(frozen=True)
class PlantMarker:
    """Where a plant was placed; consumed only by the rendering collaborator."""
    position_uv: UV
    species: PlantSpecies

    def world_position(self, plane_size: Tuple[float, float] = PLANE_SIZE) -> Tuple[float, float]:
        return uv_to_world(self.position_uv, plane_size)


@dataclass(frozen=True)
class StepInput:
    """Everything a single tick consumes."""
    delta: float
    slope_degrees: float = 0.0
    tool_state: ToolState = field(default_factory=ToolState)
    rates: RateConstants = field(default_factory=RateConstants)
    plants: Tuple[PlantMarker, ...] = ()

    def validate(self) -> None:
        if not is_finite(self.delta):
            raise InvalidStepInput(f"delta must be finite, got {self.delta}")
        if self.delta < 0:
            raise InvalidStepInput(f"delta must be non-negative, got {self.delta}")
        if not is_finite(self.slope_degrees):
            raise InvalidStepInput(f"slope must be finite, got {self.slope_degrees}")
        self.tool_state.validate()
        self.rates.validate()
        for plant in self.plants:
            if not is_finite(*plant.position_uv) or not all(0.0 <= c <= 1.0 for c in plant.position_uv):
                raise InvalidStepInput(f"plant position must be in [0, 1], got {plant.position_uv}")
