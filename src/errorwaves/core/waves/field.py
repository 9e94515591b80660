from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from errorwaves.core import constants as c
from errorwaves.core.noise.base import NoiseModel
from errorwaves.core.params.base import VisualParameters


def wave_offset(
    x: float, y: float, t: float, params: VisualParameters, noise: NoiseModel
) -> Tuple[float, float]:
    """
    Displacement of the grid point (x, y) at time t.

    A sine/cosine field with a small position-dependent phase, plus a
    coherent-noise perturbation scaled by ``chaos_amount``. Pure function of
    its inputs.
    """
    phase_x = x * c.PHASE_K
    phase_y = y * c.PHASE_K

    offset_x = math.sin(y * params.frequency + t + phase_x) * params.amplitude
    offset_y = math.cos(x * params.frequency + t + phase_y) * params.amplitude

    if params.chaos_amount > 0:
        nx = x * c.NOISE_POSITION_SCALE
        ny = y * c.NOISE_POSITION_SCALE
        nt = t * c.NOISE_TIME_SCALE
        noise_x = noise.sample(nx, ny, nt) - 0.5
        noise_y = noise.sample(nx + c.NOISE_AXIS_OFFSET, ny + c.NOISE_AXIS_OFFSET, nt) - 0.5
        offset_x += noise_x * params.amplitude * params.chaos_amount
        offset_y += noise_y * params.amplitude * params.chaos_amount

    return offset_x, offset_y


def wave_offset_grid(
    xs: np.ndarray, ys: np.ndarray, t: float, params: VisualParameters, noise: NoiseModel
) -> Tuple[np.ndarray, np.ndarray]:
    """Vectorised ``wave_offset`` over arrays of matching shape."""
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)

    offset_x = np.sin(ys * params.frequency + t + xs * c.PHASE_K) * params.amplitude
    offset_y = np.cos(xs * params.frequency + t + ys * c.PHASE_K) * params.amplitude

    if params.chaos_amount > 0:
        nx = xs * c.NOISE_POSITION_SCALE
        ny = ys * c.NOISE_POSITION_SCALE
        nt = np.full_like(xs, t * c.NOISE_TIME_SCALE)
        noise_x = noise(nx, ny, nt) - 0.5
        noise_y = noise(nx + c.NOISE_AXIS_OFFSET, ny + c.NOISE_AXIS_OFFSET, nt) - 0.5
        offset_x = offset_x + noise_x * params.amplitude * params.chaos_amount
        offset_y = offset_y + noise_y * params.amplitude * params.chaos_amount

    return offset_x, offset_y


def grid_points(
    cols: int, rows: int, spacing: float, row_spacing: float | None = None
) -> Tuple[np.ndarray, np.ndarray]:
    """Undisplaced grid coordinates, shape (rows, cols), starting three cells off-canvas."""
    if row_spacing is None:
        row_spacing = spacing
    xs = np.arange(cols, dtype=np.float64) * spacing - spacing * c.GRID_ORIGIN_CELLS
    ys = np.arange(rows, dtype=np.float64) * row_spacing - row_spacing * c.GRID_ORIGIN_CELLS
    return np.meshgrid(xs, ys)


def rect_wave_y(
    x: float, offset: float, center_y: float, params: VisualParameters, noise: NoiseModel
) -> float:
    """
    Vertical centre of the rectangle at horizontal position x.

    Frequency and amplitude are each modulated by one noise sample keyed on
    the scrolled wave position.
    """
    wave_position = x + offset

    frequency_noise = noise.sample(wave_position * c.RECT_FREQ_NOISE_SCALE)
    frequency = c.RECT_BASE_FREQUENCY + c.RECT_FREQUENCY_RANGE * frequency_noise

    amplitude_noise = noise.sample(wave_position * c.RECT_AMP_NOISE_SCALE + c.RECT_AMP_NOISE_OFFSET)
    amplitude = c.RECT_MIN_AMPLITUDE + params.max_amplitude * amplitude_noise

    return center_y + amplitude * math.sin(wave_position * frequency)
