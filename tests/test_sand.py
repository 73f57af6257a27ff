import numpy as np
import pytest

from grid_helpers import cell_index_grid
from simulation.sand import compute_sand_flux, settle_sand


def _bed(width=16, height=16, bed=1.0):
    heights = np.full((width, height), bed, dtype=np.float32)
    sand = np.zeros((width, height), dtype=np.float32)
    water = np.zeros((width, height), dtype=np.float32)
    xs, ys = cell_index_grid(width, height)
    return heights, sand, water, xs, ys


def test_sand_falls_straight_down():
    heights, sand, water, xs, ys = _bed()
    heights[5, 10] = 2.0
    sand[5, 10] = 50.0

    new_h, new_s = settle_sand(heights, sand, water, xs, ys, 0.0, 7, 0.016)

    move = 20.0 * 0.016
    assert new_s[5, 10] == pytest.approx(50.0 - move)
    assert new_s[5, 9] == pytest.approx(move)
    assert new_h[5, 10] == pytest.approx(2.0 - move * 0.02)
    assert new_h[5, 9] == pytest.approx(1.0 + move * 0.02)


def test_blocked_sand_takes_exactly_one_diagonal():
    heights, sand, water, xs, ys = _bed(bed=0.0)
    heights[5, 10] = 2.0
    sand[5, 10] = 50.0
    heights[5, 9] = 2.0  # Straight down is level

    down, left, right = compute_sand_flux(heights, sand, water, xs, ys, 0.0, 7, 0.016)
    assert down[5, 10] == 0.0
    assert (left[5, 10] > 0) != (right[5, 10] > 0)

    new_h, new_s = settle_sand(heights, sand, water, xs, ys, 0.0, 7, 0.016)
    received = new_s[4, 9] + new_s[6, 9]
    assert received == pytest.approx(20.0 * 0.016)


def test_fall_direction_is_deterministic():
    heights, sand, water, xs, ys = _bed(bed=0.0)
    heights[:, 10] = 2.0
    heights[:, 9] = 2.0
    sand[:, 10] = 50.0
    first = compute_sand_flux(heights, sand, water, xs, ys, 1.5, 99, 0.016)
    second = compute_sand_flux(heights, sand, water, xs, ys, 1.5, 99, 0.016)
    for a, b in zip(first, second):
        assert np.array_equal(a, b)


def test_little_sand_does_not_move():
    heights, sand, water, xs, ys = _bed()
    heights[5, 10] = 2.0
    sand[5, 10] = 0.05
    new_h, new_s = settle_sand(heights, sand, water, xs, ys, 0.0, 7, 0.016)
    assert np.array_equal(new_s, sand)
    assert np.array_equal(new_h, heights)


def test_wet_sand_does_not_move():
    heights, sand, water, xs, ys = _bed()
    heights[5, 10] = 2.0
    sand[5, 10] = 50.0
    water[5, 10] = 1.0
    _, new_s = settle_sand(heights, sand, water, xs, ys, 0.0, 7, 0.016)
    assert np.array_equal(new_s, sand)


def test_small_gap_is_stable():
    heights, sand, water, xs, ys = _bed()
    heights[5, 10] = 1.1
    sand[5, 10] = 50.0
    _, new_s = settle_sand(heights, sand, water, xs, ys, 0.0, 7, 0.016)
    assert np.array_equal(new_s, sand)


def test_bottom_row_never_moves():
    heights, sand, water, xs, ys = _bed()
    heights[5, 0] = 3.0
    sand[5, 0] = 50.0
    down, left, right = compute_sand_flux(heights, sand, water, xs, ys, 0.0, 7, 0.016)
    assert not np.any(down) and not np.any(left) and not np.any(right)


def test_sand_never_flows_onto_a_sandier_cell():
    heights, sand, water, xs, ys = _bed()
    heights[5, 10] = 2.0
    sand[5, 10] = 10.0
    sand[4:7, 9] = 20.0
    down, left, right = compute_sand_flux(heights, sand, water, xs, ys, 0.0, 7, 0.016)
    assert down[5, 10] == 0.0 and left[5, 10] == 0.0 and right[5, 10] == 0.0


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_settling_conserves_sand_and_height(seed):
    rng = np.random.default_rng(seed)
    heights = rng.uniform(0.0, 3.0, size=(24, 24)).astype(np.float32)
    sand = rng.uniform(0.0, 60.0, size=(24, 24)).astype(np.float32)
    water = np.zeros((24, 24), dtype=np.float32)
    xs, ys = cell_index_grid(24, 24)

    for i in range(10):
        new_h, new_s = settle_sand(heights, sand, water, xs, ys, i * 0.016, seed, 0.016)
        assert np.sum(new_s, dtype=np.float64) == pytest.approx(np.sum(sand, dtype=np.float64), rel=1e-5)
        assert np.sum(new_h, dtype=np.float64) == pytest.approx(np.sum(heights, dtype=np.float64), rel=1e-5)
        assert np.all(new_s >= 0.0)
        assert np.all(new_h >= 0.0)
        heights, sand = new_h, new_s


def test_no_flux_returns_inputs_unchanged():
    heights, sand, water, xs, ys = _bed()
    new_h, new_s = settle_sand(heights, sand, water, xs, ys, 0.0, 7, 0.016)
    assert new_h is heights and new_s is sand
