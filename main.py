# main.py
"""
Stream Table - headless runner

Runs the sand/water stream table for a number of fixed-delta steps with one
tool held at a pointer position, then prints grid totals. Use --gui to open
the pygame viewer instead.

Examples:
    python main.py --steps 600
    python main.py --tool dig --uv 0.5 0.5 --strength 8 --steps 120
    python main.py --tool plant --uv 0.5 0.7 --steps 300 --log-level DEBUG
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from config import (
    GRID_WIDTH,
    GRID_HEIGHT,
    DEFAULT_SEED,
    DEFAULT_SLOPE_DEGREES,
    DEFAULT_VISCOSITY,
    DEFAULT_FLOW_RATE,
    DEFAULT_EROSION_RATE,
    DEFAULT_DEPOSITION_RATE,
    DEFAULT_BRUSH_RADIUS,
    DEFAULT_BRUSH_STRENGTH,
    TICK_INTERVAL,
)
from errors import SimulationError
from simulation.clock import SimulationClock
from simulation.params import RateConstants, SimulationSettings, ToolKind
from stream_state import StreamState, build_initial_state
from tools import ToolController
from world_state import FieldTotals

logger = logging.getLogger("stream_table")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sand and water stream table simulation")
    parser.add_argument("--gui", action="store_true", help="open the pygame viewer")
    parser.add_argument("--width", type=int, default=GRID_WIDTH)
    parser.add_argument("--height", type=int, default=GRID_HEIGHT)
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED)
    parser.add_argument("--steps", type=int, default=600, help="number of steps to run")
    parser.add_argument("--delta", type=float, default=TICK_INTERVAL, help="seconds per step")
    parser.add_argument("--slope", type=float, default=DEFAULT_SLOPE_DEGREES, help="table tilt in degrees")

    rates = parser.add_argument_group("rates")
    rates.add_argument("--viscosity", type=float, default=DEFAULT_VISCOSITY)
    rates.add_argument("--flow-rate", type=float, default=DEFAULT_FLOW_RATE)
    rates.add_argument("--erosion-rate", type=float, default=DEFAULT_EROSION_RATE)
    rates.add_argument("--deposition-rate", type=float, default=DEFAULT_DEPOSITION_RATE)

    tool = parser.add_argument_group("tool")
    tool.add_argument("--tool", choices=[k.value for k in ToolKind], default=None,
                      help="tool held (or pressed once, for plant) at --uv")
    tool.add_argument("--uv", type=float, nargs=2, default=(0.5, 0.5), metavar=("U", "V"))
    tool.add_argument("--radius", type=float, default=DEFAULT_BRUSH_RADIUS)
    tool.add_argument("--strength", type=float, default=DEFAULT_BRUSH_STRENGTH)

    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def run_headless(args: argparse.Namespace) -> StreamState:
    """Run args.steps ticks and return the final state."""
    settings = SimulationSettings(width=args.width, height=args.height, seed=args.seed)
    state = build_initial_state(settings)
    clock = SimulationClock(state)
    rates = RateConstants(
        viscosity=args.viscosity,
        flow_rate=args.flow_rate,
        erosion_rate=args.erosion_rate,
        deposition_rate=args.deposition_rate,
    )

    controller = ToolController(brush_radius=args.radius, brush_strength=args.strength, seed=args.seed)
    uv = tuple(args.uv)
    controller.pointer_move(uv)
    if args.tool is not None:
        controller.select_tool(ToolKind(args.tool))
        controller.pointer_down(uv)

    before = FieldTotals.from_state(state)
    for _ in range(args.steps):
        clock.tick(controller.step_input(args.delta, args.slope, rates))
    after = FieldTotals.from_state(state)

    print(f"Ran {state.step_count} steps, t={state.time:.3f}s, plants={len(state.plants)}")
    print(f"  start: {before.summary()}")
    print(f"  end:   {after.summary()}")
    print(f"  delta: {before.delta(after).summary()}")
    return state


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s")

    if args.gui:
        from pygame_runner import run
        run(SimulationSettings(width=args.width, height=args.height, seed=args.seed))
        return 0

    try:
        run_headless(args)
    except SimulationError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
