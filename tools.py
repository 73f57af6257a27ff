# tools.py
"""
tools.py - Tool system for the stream table

Four tools act at the pointer:
- Water: pours water inside the brush while held
- Dig: removes bed and sand inside the brush while held
- Sand: adds bed and sand inside the brush while held
- Plant: places one plant per press (obstacle block + placement marker)

The ToolController turns pointer events into the per-frame ToolState and
queues plant placements so they land between steps.
"""
from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Deque, List, Optional, Tuple

from config import DEFAULT_BRUSH_RADIUS, DEFAULT_BRUSH_STRENGTH, DEFAULT_SEED
from simulation.params import (
    PlantMarker,
    PlantSpecies,
    RateConstants,
    StepInput,
    ToolKind,
    ToolState,
)
from utils import clamp

logger = logging.getLogger(__name__)

UV = Tuple[float, float]


class PointerPhase(Enum):
    IDLE = auto()
    ACTIVE = auto()


@dataclass(frozen=True)
class Tool:
    """A selectable tool as shown in the viewer toolbar."""
    kind: ToolKind
    name: str
    description: str
    icon: str = "?"


# =============================================================================
# Tool Definitions
# =============================================================================

TOOL_WATER = Tool(ToolKind.WATER, "Water", "Pour water while held", icon="~")
TOOL_DIG = Tool(ToolKind.DIG, "Dig", "Remove sand while held", icon="v")
TOOL_SAND = Tool(ToolKind.SAND, "Sand", "Add sand while held", icon="^")
TOOL_PLANT = Tool(ToolKind.PLANT, "Plant", "Place a plant (blocks flow)", icon="*")

# Default toolbar order (number keys 1-4)
DEFAULT_TOOLS: List[Tool] = [TOOL_WATER, TOOL_DIG, TOOL_SAND, TOOL_PLANT]


class ToolController:
    """
    Maps pointer events and tool selection to simulation forcing.

    Continuous tools: IDLE -> ACTIVE on pointer down, ACTIVE -> IDLE on
    pointer up or leave. Plant fires once per pointer down and never
    becomes ACTIVE.
    """

    def __init__(
        self,
        tool_kind: ToolKind = ToolKind.WATER,
        brush_radius: float = DEFAULT_BRUSH_RADIUS,
        brush_strength: float = DEFAULT_BRUSH_STRENGTH,
        seed: int = DEFAULT_SEED,
    ):
        self.tool_kind = tool_kind
        self.brush_radius = brush_radius
        self.brush_strength = brush_strength
        self.pointer_uv: UV = (0.5, 0.5)
        self.phase = PointerPhase.IDLE
        self._rng = random.Random(seed)
        self._pending_plants: Deque[PlantMarker] = deque()

    @property
    def is_active(self) -> bool:
        return self.phase is PointerPhase.ACTIVE

    def select_tool(self, kind: ToolKind) -> None:
        """Switch tools; a held continuous tool is released."""
        if kind is not self.tool_kind:
            self.phase = PointerPhase.IDLE
        self.tool_kind = kind

    def select_by_number(self, num: int) -> bool:
        """Select tool by number key (1-based). Returns True if valid."""
        if 1 <= num <= len(DEFAULT_TOOLS):
            self.select_tool(DEFAULT_TOOLS[num - 1].kind)
            return True
        return False

    def pointer_move(self, uv: UV) -> None:
        self.pointer_uv = (clamp(uv[0], 0.0, 1.0), clamp(uv[1], 0.0, 1.0))

    def pointer_down(self, uv: UV) -> Optional[PlantMarker]:
        """Press at uv. Returns the queued plant when the plant tool fires."""
        self.pointer_move(uv)
        if self.tool_kind.is_continuous:
            self.phase = PointerPhase.ACTIVE
            return None

        marker = PlantMarker(self.pointer_uv, self._rng.choice(list(PlantSpecies)))
        self._pending_plants.append(marker)
        logger.debug("Queued %s at uv=(%.3f, %.3f)", marker.species.value, *marker.position_uv)
        return marker

    def pointer_up(self) -> None:
        self.phase = PointerPhase.IDLE

    def pointer_leave(self) -> None:
        self.phase = PointerPhase.IDLE

    def tool_state(self) -> ToolState:
        """The ToolState for the next frame."""
        return ToolState(
            tool_kind=self.tool_kind,
            pointer_uv=self.pointer_uv,
            pointer_active=self.is_active,
            brush_radius=self.brush_radius,
            brush_strength=self.brush_strength,
        )

    def take_plants(self) -> Tuple[PlantMarker, ...]:
        """Hand over all queued plant placements (each is returned once)."""
        plants = tuple(self._pending_plants)
        self._pending_plants.clear()
        return plants

    def step_input(
        self,
        delta: float,
        slope_degrees: float = 0.0,
        rates: Optional[RateConstants] = None,
    ) -> StepInput:
        """Package the next frame's input, draining queued plants into it."""
        return StepInput(
            delta=delta,
            slope_degrees=slope_degrees,
            tool_state=self.tool_state(),
            rates=rates if rates is not None else RateConstants(),
            plants=self.take_plants(),
        )
