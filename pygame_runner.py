# pygame_runner.py
"""
Pygame-CE viewer for the stream table.

Plays the UI collaborator: samples pointer and keyboard input, feeds one
StepInput per frame into the SimulationClock, and draws the fields top-down.

Architecture:
- Map rect: one grid cell per CELL_PIXELS square, uv.y up (spray bar at top)
- Sidebar: rates, brush, field totals, help
- Toolbar: one slot per tool along the bottom

Controls: see keybindings.CONTROL_DESCRIPTIONS
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Tuple

try:
    import pygame
except ImportError as exc:
    raise SystemExit("pygame-ce is required. Install with: pip install pygame-ce") from exc

from config import DEFAULT_SLOPE_DEGREES
from keybindings import (
    CONTROL_DESCRIPTIONS,
    TOOL_KEYS,
    BRUSH_SMALLER_KEY,
    BRUSH_LARGER_KEY,
    STRENGTH_DOWN_KEY,
    STRENGTH_UP_KEY,
    SLOPE_UP_KEY,
    SLOPE_DOWN_KEY,
    PAUSE_KEY,
    RESET_KEY,
    QUIT_KEY,
    HELP_KEY,
)
from render.colors import compose_frame
from render.config import (
    CELL_PIXELS,
    SIDEBAR_WIDTH,
    TOOLBAR_HEIGHT,
    FONT_SIZE,
    FRAME_RATE,
    COLOR_BG_DARK,
    COLOR_TEXT_GRAY,
    COLOR_SAND,
    COLOR_SAND_LOOSE,
    COLOR_WATER_SHALLOW,
    COLOR_WATER_DEEP,
    COLOR_OBSTACLE,
    PLANT_COLORS,
)
from render.primitives import draw_legend, draw_panel
from render.toolbar import render_toolbar, toolbar_slot_at
from simulation.clock import SimulationClock
from simulation.params import RateConstants, SimulationSettings
from stream_state import StreamState, build_initial_state
from tools import DEFAULT_TOOLS, ToolController
from utils import clamp
from world_state import FieldTotals

logger = logging.getLogger(__name__)

UV = Tuple[float, float]

LEGEND_ENTRIES = [
    (COLOR_SAND, "bed"),
    (COLOR_SAND_LOOSE, "loose sand"),
    (COLOR_WATER_SHALLOW, "shallow water"),
    (COLOR_WATER_DEEP, "deep water"),
    (COLOR_OBSTACLE, "plant block"),
] + [(color, name) for name, color in PLANT_COLORS.items()]


def screen_to_uv(pos: Tuple[int, int], map_rect: pygame.Rect) -> Optional[UV]:
    """Map a screen pixel inside the map rect to UV (v grows upward), else None."""
    if not map_rect.collidepoint(pos):
        return None
    u = (pos[0] - map_rect.x + 0.5) / map_rect.width
    v = 1.0 - (pos[1] - map_rect.y + 0.5) / map_rect.height
    return clamp(u, 0.0, 1.0), clamp(v, 0.0, 1.0)


def uv_to_screen(uv: UV, map_rect: pygame.Rect) -> Tuple[int, int]:
    """Inverse of screen_to_uv (pixel nearest to a UV point)."""
    return (int(map_rect.x + uv[0] * map_rect.width),
            int(map_rect.y + (1.0 - uv[1]) * map_rect.height))


def render_map(surface: pygame.Surface, state: StreamState, controller: ToolController,
               map_rect: pygame.Rect) -> None:
    """Draw the fields, plants and brush outline into the map rect."""
    frame = compose_frame(state.terrain_view(), state.water_view(), state.obstacle_view())
    # surfarray is indexed [x, y] with y down; fields have y up
    field_surface = pygame.surfarray.make_surface(frame[:, ::-1, :])
    surface.blit(pygame.transform.scale(field_surface, map_rect.size), map_rect.topleft)

    for plant in state.plants:
        pygame.draw.circle(surface, PLANT_COLORS[plant.species.value],
                           uv_to_screen(plant.position_uv, map_rect), CELL_PIXELS)

    if controller.tool_kind.is_continuous:
        radius_px = int(controller.brush_radius * map_rect.width)
        pygame.draw.circle(surface, (255, 255, 255), uv_to_screen(controller.pointer_uv, map_rect),
                           max(1, radius_px), 1)


def render_sidebar(surface, font, rect: pygame.Rect, state: StreamState, controller: ToolController,
                   rates: RateConstants, slope: float, paused: bool, show_help: bool) -> None:
    x, y = rect.x + 12, rect.y + 12
    width = rect.width - 24
    y = draw_panel(surface, font, "Simulation", [
        f"t={state.time:.1f}s step={state.step_count}" + ("  PAUSED" if paused else ""),
        f"slope={slope:.1f} deg",
        f"viscosity={rates.viscosity:.3f}",
        f"flow={rates.flow_rate:.2f}",
        f"erosion={rates.erosion_rate:.2f} depo={rates.deposition_rate:.2f}",
        f"brush={controller.brush_radius:.3f} str={controller.brush_strength:.1f}",
    ], (x, y), width)

    totals = FieldTotals.from_state(state)
    y = draw_panel(surface, font, "Totals", totals.summary().split(), (x, y), width, color=COLOR_TEXT_GRAY)

    if show_help:
        draw_panel(surface, font, "Controls", CONTROL_DESCRIPTIONS, (x, y), width, color=COLOR_TEXT_GRAY)
    else:
        draw_legend(surface, font, LEGEND_ENTRIES, (x, y), width)


def run(settings: Optional[SimulationSettings] = None) -> None:
    """Main viewer loop."""
    settings = settings if settings is not None else SimulationSettings()
    pygame.init()

    map_rect = pygame.Rect(0, 0, settings.width * CELL_PIXELS, settings.height * CELL_PIXELS)
    sidebar_rect = pygame.Rect(map_rect.right, 0, SIDEBAR_WIDTH, map_rect.height)
    toolbar_rect = pygame.Rect(0, map_rect.bottom, map_rect.width + SIDEBAR_WIDTH, TOOLBAR_HEIGHT)

    screen = pygame.display.set_mode((toolbar_rect.width, map_rect.height + TOOLBAR_HEIGHT))
    pygame.display.set_caption("Stream Table")
    font = pygame.font.Font(None, FONT_SIZE)
    frame_clock = pygame.time.Clock()

    state = build_initial_state(settings)
    sim_clock = SimulationClock(state)
    controller = ToolController(seed=settings.seed)
    rates = RateConstants()
    slope = DEFAULT_SLOPE_DEGREES
    paused = False
    show_help = True

    running = True
    while running:
        dt = frame_clock.tick(FRAME_RATE) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                slot = toolbar_slot_at(event.pos, toolbar_rect, len(DEFAULT_TOOLS))
                if slot is not None:
                    controller.select_by_number(slot + 1)
                    continue
                uv = screen_to_uv(event.pos, map_rect)
                if uv is not None:
                    controller.pointer_down(uv)

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                controller.pointer_up()

            elif event.type == pygame.MOUSEMOTION:
                uv = screen_to_uv(event.pos, map_rect)
                if uv is None:
                    controller.pointer_leave()
                else:
                    controller.pointer_move(uv)

            elif event.type == pygame.WINDOWLEAVE:
                controller.pointer_leave()

            elif event.type == pygame.KEYDOWN:
                if event.key == QUIT_KEY:
                    running = False
                elif event.key in TOOL_KEYS:
                    controller.select_by_number(TOOL_KEYS[event.key])
                elif event.key == BRUSH_SMALLER_KEY:
                    controller.brush_radius = clamp(controller.brush_radius - 0.01, 0.01, 0.2)
                elif event.key == BRUSH_LARGER_KEY:
                    controller.brush_radius = clamp(controller.brush_radius + 0.01, 0.01, 0.2)
                elif event.key == STRENGTH_DOWN_KEY:
                    controller.brush_strength = clamp(controller.brush_strength - 1.0, 1.0, 10.0)
                elif event.key == STRENGTH_UP_KEY:
                    controller.brush_strength = clamp(controller.brush_strength + 1.0, 1.0, 10.0)
                elif event.key == SLOPE_UP_KEY:
                    slope = clamp(slope + 0.5, 0.0, 15.0)
                elif event.key == SLOPE_DOWN_KEY:
                    slope = clamp(slope - 0.5, 0.0, 15.0)
                elif event.key == PAUSE_KEY:
                    paused = not paused
                elif event.key == RESET_KEY:
                    state = build_initial_state(settings)
                    sim_clock = SimulationClock(state)
                elif event.key == HELP_KEY:
                    show_help = not show_help

        if not paused:
            sim_clock.tick(controller.step_input(dt, slope, rates))

        screen.fill(COLOR_BG_DARK)
        render_map(screen, state, controller, map_rect)
        render_sidebar(screen, font, sidebar_rect, state, controller, rates, slope, paused, show_help)
        render_toolbar(screen, font, DEFAULT_TOOLS, controller, toolbar_rect)
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        run()
    except KeyboardInterrupt:
        sys.exit(0)
