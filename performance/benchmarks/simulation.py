#!/usr/bin/env python3
"""
Performance benchmark for the stream table simulation.

Runs the simulation headless (no rendering) to measure pure step cost:
- Whole-tick timing against the 60 FPS frame budget
- Water / terrain pass breakdown (sampled on the live frame, not applied)
- Traced memory and cProfile hotspots
"""
from __future__ import annotations

import cProfile
import io
import pstats
import time
import tracemalloc
from collections import defaultdict
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

import numpy as np

from config import TICK_INTERVAL, DEFAULT_SLOPE_DEGREES
from simulation.clock import SimulationClock
from simulation.fields import TerrainChannel
from simulation.params import SimulationSettings, StepInput, ToolKind, ToolState
from simulation.terrain import simulate_terrain
from simulation.water import simulate_water
from stream_state import StreamState, build_initial_state
from world_state import FieldTotals

REPORT_WIDTH = 72
SAMPLE_EVERY = 100  # Ticks between pass samples and memory snapshots


def _row(label: str, value: str) -> None:
    print(f"  {label:<24}{value}")


def _banner(title: str) -> None:
    print("\n" + title)
    print("-" * REPORT_WIDTH)


def _ms(seconds: float) -> str:
    return f"{seconds * 1000:7.2f} ms"


class PerformanceMetrics:
    """Timings collected during one benchmark run, keyed by what was timed."""

    def __init__(self, settings: SimulationSettings):
        self.settings = settings
        self.timings: Dict[str, List[float]] = defaultdict(list)
        self.memory_bytes: List[int] = []
        self.total_time: float = 0.0

    @contextmanager
    def timed(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.timings[name].append(time.perf_counter() - start)

    def record_memory(self) -> None:
        current, _peak = tracemalloc.get_traced_memory()
        self.memory_bytes.append(current)

    @property
    def tick_times(self) -> List[float]:
        return self.timings["tick"]

    def mean_tick(self) -> float:
        return float(np.mean(self.tick_times)) if self.tick_times else 0.0

    def print_report(self, final: FieldTotals) -> None:
        grid = f"{self.settings.width}x{self.settings.height}"
        print("=" * REPORT_WIDTH)
        print(f"STREAM TABLE BENCHMARK  {grid} cells, {len(self.tick_times)} ticks")
        print("=" * REPORT_WIDTH)

        if self.tick_times:
            ticks = np.asarray(self.tick_times)
            _banner("Tick")
            _row("ticks/sec", f"{len(ticks) / self.total_time:7.1f}" if self.total_time else "n/a")
            _row("mean", _ms(ticks.mean()))
            _row("p50 / p95", f"{_ms(np.percentile(ticks, 50))} / {_ms(np.percentile(ticks, 95))}")
            _row("worst", _ms(ticks.max()))
            _row("frame budget used", f"{ticks.mean() / TICK_INTERVAL * 100:6.1f} %")

        _banner("Passes (sampled)")
        mean_tick = self.mean_tick()
        for name in ("water", "terrain"):
            samples = self.timings.get(name)
            if not samples:
                continue
            share = f"  ({np.mean(samples) / mean_tick * 100:4.0f}% of tick)" if mean_tick else ""
            _row(name, _ms(float(np.mean(samples))) + share)

        if self.memory_bytes:
            _banner("Traced memory")
            _row("mean", f"{np.mean(self.memory_bytes) / 2**20:7.1f} MB")
            _row("peak", f"{max(self.memory_bytes) / 2**20:7.1f} MB")

        _banner("Final totals")
        print(f"  {final.summary()}")


def sample_passes(state: StreamState, step: StepInput, metrics: PerformanceMetrics) -> None:
    """Time the water and terrain passes on the current frame without applying them."""
    water = state.water_view()
    terrain = state.terrain_view()
    with metrics.timed("water"):
        simulate_water(water, terrain[TerrainChannel.HEIGHT], state.obstacle_view(),
                       state.u, state.v, step)
    with metrics.timed("terrain"):
        simulate_terrain(terrain, water, state.xs, state.ys, state.u, state.v,
                         step, state.time, state.settings.seed)


def benchmark_step(tool_kind: ToolKind = ToolKind.WATER) -> StepInput:
    """A busy frame: tool held in the middle of the table on a tilted bed."""
    return StepInput(
        delta=TICK_INTERVAL,
        slope_degrees=DEFAULT_SLOPE_DEGREES,
        tool_state=ToolState(tool_kind=tool_kind, pointer_uv=(0.5, 0.5), pointer_active=True),
    )


def print_hotspots(profiler: cProfile.Profile, limit: int = 20) -> None:
    for sort_key in ("cumulative", "tottime"):
        _banner(f"Hotspots by {sort_key}")
        s = io.StringIO()
        pstats.Stats(profiler, stream=s).sort_stats(sort_key).print_stats(limit)
        for line in s.getvalue().splitlines()[:limit + 5]:
            if line.strip():
                print(line)


def run_benchmark(num_ticks: int = 1000, profile_hotspots: bool = True,
                  settings: Optional[SimulationSettings] = None) -> PerformanceMetrics:
    """
    Run a headless simulation benchmark.

    Args:
        num_ticks: Number of simulation ticks to run
        profile_hotspots: If True, run cProfile to identify hot code paths
        settings: Grid settings (defaults to the standard 128x128 table)

    Returns:
        PerformanceMetrics object with collected data
    """
    settings = settings if settings is not None else SimulationSettings()
    state = build_initial_state(settings)
    clock = SimulationClock(state)
    metrics = PerformanceMetrics(settings)
    step = benchmark_step()

    tracemalloc.start()
    profiler = cProfile.Profile() if profile_hotspots else None
    if profiler is not None:
        profiler.enable()

    start = time.perf_counter()
    for i in range(num_ticks):
        with metrics.timed("tick"):
            clock.tick(step)
        if i % SAMPLE_EVERY == 0:
            metrics.record_memory()
            sample_passes(state, step, metrics)
            print(f"    ticks: {i}/{num_ticks}", end="\r")
    metrics.total_time = time.perf_counter() - start

    if profiler is not None:
        profiler.disable()
    tracemalloc.stop()

    metrics.print_report(FieldTotals.from_state(state))
    if profiler is not None:
        print_hotspots(profiler)
    return metrics


def compare_grid_sizes(sizes=(32, 64, 128, 256), num_ticks: int = 200) -> Dict[int, float]:
    """Mean tick time per square grid size."""
    results = {}
    for size in sizes:
        metrics = run_benchmark(num_ticks=num_ticks, profile_hotspots=False,
                                settings=SimulationSettings(width=size, height=size))
        results[size] = metrics.mean_tick()

    _banner("Grid size comparison")
    for size, mean_tick in results.items():
        _row(f"{size}x{size}", _ms(mean_tick))
    return results


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 1 and sys.argv[1] == "compare":
        compare_grid_sizes()
    else:
        run_benchmark(num_ticks=1000, profile_hotspots=True)
