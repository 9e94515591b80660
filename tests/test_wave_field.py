import math

import numpy as np
import pytest

from errorwaves.core.noise.base import NoiseParams, get_noise_model
from errorwaves.core.noise import perlin  # noqa: F401
from errorwaves.core.params.base import VisualParameters
from errorwaves.core.waves.field import grid_points, rect_wave_y, wave_offset, wave_offset_grid

NOISE = get_noise_model(NoiseParams(type="perlin", seed=0))
CHAOTIC = VisualParameters(amplitude=60.0, frequency=0.045, chaos_amount=0.9)
CALM = VisualParameters(amplitude=60.0, frequency=0.045, chaos_amount=0.0)


def test_wave_offset_is_deterministic():
    first = wave_offset(37.0, 11.0, 1.25, CHAOTIC, NOISE)
    for _ in range(3):
        assert wave_offset(37.0, 11.0, 1.25, CHAOTIC, NOISE) == first


def test_zero_chaos_is_pure_trig_field():
    x, y, t = 120.0, -45.0, 3.5
    dx, dy = wave_offset(x, y, t, CALM, NOISE)
    assert dx == math.sin(y * 0.045 + t + x * 0.003) * 60.0
    assert dy == math.cos(x * 0.045 + t + y * 0.003) * 60.0


def test_chaos_adds_bounded_noise():
    x, y, t = 37.0, 11.0, 1.25
    calm = wave_offset(x, y, t, CALM, NOISE)
    chaotic = wave_offset(x, y, t, CHAOTIC, NOISE)
    assert calm != chaotic
    # noise term is (n - 0.5) * amplitude * chaos with n in [0, 1]
    limit = 0.5 * CHAOTIC.amplitude * CHAOTIC.chaos_amount
    assert abs(chaotic[0] - calm[0]) <= limit + 1e-9
    assert abs(chaotic[1] - calm[1]) <= limit + 1e-9


def test_grid_form_matches_scalar():
    xs, ys = grid_points(6, 5, 75.0)
    gx, gy = wave_offset_grid(xs, ys, 0.42, CHAOTIC, NOISE)
    assert gx.shape == (5, 6)
    for r in range(5):
        for k in range(6):
            dx, dy = wave_offset(xs[r, k], ys[r, k], 0.42, CHAOTIC, NOISE)
            assert gx[r, k] == pytest.approx(dx, abs=1e-9)
            assert gy[r, k] == pytest.approx(dy, abs=1e-9)


def test_grid_points_start_off_canvas():
    xs, ys = grid_points(4, 3, 75.0)
    assert xs[0, 0] == -225.0
    assert ys[0, 0] == -225.0
    assert xs[0, 3] == 0.0
    xs, ys = grid_points(4, 3, 15.0, row_spacing=25.0)
    assert xs[0, 1] - xs[0, 0] == 15.0
    assert ys[1, 0] - ys[0, 0] == 25.0


def test_rect_wave_stays_within_swing():
    params = VisualParameters(max_amplitude=175.0, rect_width=35.0, rect_height=270.0)
    center = 300.0
    ys = [rect_wave_y(x, 12.0, center, params, NOISE) for x in np.linspace(-40, 840, 60)]
    assert all(abs(y - center) <= 20.0 + 175.0 for y in ys)
    assert rect_wave_y(100.0, 12.0, center, params, NOISE) == rect_wave_y(100.0, 12.0, center, params, NOISE)
    # scrolling shifts the wave position
    assert rect_wave_y(100.0, 12.0, center, params, NOISE) == rect_wave_y(90.0, 22.0, center, params, NOISE)
