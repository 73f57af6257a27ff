import numpy as np
import pytest

from simulation.erosion import exchange_sediment, sediment_capacity


def _cells(n=1, height=1.0, sediment=0.0, sand=0.0, water=1.0, velocity=0.0):
    def full(value):
        return np.full((n, n), value, dtype=np.float32)
    return full(height), full(sediment), full(sand), full(water), full(velocity)


def test_capacity_grows_with_speed_in_either_direction():
    cap = sediment_capacity(np.array([-1.5, 0.0, 2.0], dtype=np.float32))
    assert np.allclose(cap, [3.0, 0.0, 4.0])


def test_fast_water_erodes_the_bed():
    h, s, sand, w, vel = _cells(velocity=1.0)
    new_h, new_s, _ = exchange_sediment(h, s, sand, w, vel, 0.5, 0.5, 0.1)
    # capacity 2, sediment 0: erode (2 - 0) * 0.5 * 0.1
    assert new_h[0, 0] == pytest.approx(0.9)
    assert new_s[0, 0] == pytest.approx(0.1)


def test_slow_loaded_water_deposits():
    h, s, sand, w, vel = _cells(sediment=1.0)
    new_h, new_s, new_sand = exchange_sediment(h, s, sand, w, vel, 0.5, 0.5, 0.1)
    assert new_h[0, 0] == pytest.approx(1.05)
    assert new_s[0, 0] == pytest.approx(0.95)
    # Half the deposited height settles as loose sand
    assert new_sand[0, 0] == pytest.approx(0.05 * 0.5 / 0.02)


def test_dry_cells_do_not_exchange():
    h, s, sand, w, vel = _cells(sediment=1.0, water=0.01, velocity=5.0)
    new_h, new_s, new_sand = exchange_sediment(h, s, sand, w, vel, 0.5, 0.5, 0.1)
    assert np.array_equal(new_h, h)
    assert np.array_equal(new_s, s)
    assert np.array_equal(new_sand, sand)


def test_erosion_is_capped_by_available_bed():
    h, s, sand, w, vel = _cells(height=0.001, velocity=50.0)
    new_h, new_s, _ = exchange_sediment(h, s, sand, w, vel, 10.0, 0.5, 1.0)
    assert new_h[0, 0] == 0.0
    assert new_s[0, 0] == pytest.approx(0.001)


def test_deposit_is_capped_by_height_limit():
    h, s, sand, w, vel = _cells(height=4.99, sediment=3.0)
    new_h, new_s, _ = exchange_sediment(h, s, sand, w, vel, 0.5, 10.0, 1.0)
    assert new_h[0, 0] <= 5.0
    assert new_h[0, 0] + new_s[0, 0] == pytest.approx(7.99)


def test_erosion_dissolves_loose_sand():
    h, s, sand, w, vel = _cells(sand=40.0, velocity=1.0)
    _, _, new_sand = exchange_sediment(h, s, sand, w, vel, 0.5, 0.5, 0.1)
    assert new_sand[0, 0] == pytest.approx(40.0 - 0.1 / 0.02)


def test_sand_is_capped_after_deposit():
    h, s, sand, w, vel = _cells(sand=99.0, sediment=1.0)
    _, _, new_sand = exchange_sediment(h, s, sand, w, vel, 0.5, 1.0, 1.0)
    assert new_sand[0, 0] == pytest.approx(100.0)


def test_bed_plus_sediment_is_conserved(rng):
    shape = (32, 32)
    h = rng.uniform(0.0, 5.0, shape).astype(np.float32)
    s = rng.uniform(0.0, 2.0, shape).astype(np.float32)
    sand = rng.uniform(0.0, 100.0, shape).astype(np.float32)
    w = rng.uniform(0.0, 1.0, shape).astype(np.float32)
    vel = rng.normal(0.0, 2.0, shape).astype(np.float32)

    new_h, new_s, new_sand = exchange_sediment(h, s, sand, w, vel, 0.5, 0.5, 0.05)

    assert np.allclose(new_h + new_s, h + s, atol=1e-5)
    assert np.all((new_h >= 0.0) & (new_h <= 5.0))
    assert np.all(new_s >= 0.0)
    assert np.all((new_sand >= 0.0) & (new_sand <= 100.0))
