from __future__ import annotations

import math

from errorwaves.core import constants as c
from errorwaves.core.reading import ErrorReading

from .base import VisualParameters, register_param_mapper


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def strip_count(error: float) -> int:
    """Error as a whole percentage, never fewer than one strip."""
    return max(1, round_half_up(error * 100))


def _resolved(reading: ErrorReading, variant: str) -> ErrorReading:
    # Callers normally hand in resolved readings; resolving again keeps the mapper total.
    resolved, _ = reading.resolved(variant)
    return resolved


def rectangles(reading: ErrorReading, width: int, height: int) -> VisualParameters:
    """
    Lower error gives wider, taller rectangles on a calmer wave.

    Inputs above the ceiling extrapolate past the nominal range.
    """
    error = _resolved(reading, c.VARIANT_RECTANGLES).error
    diff = (c.RECT_CEILING - error) / (c.RECT_CEILING - 0.0)
    return VisualParameters(
        distortion=c.RECT_BASE_DISTORTION - c.RECT_DISTORTION_RATE * diff,
        max_amplitude=c.RECT_BASE_MAX_AMPLITUDE - c.RECT_AMPLITUDE_RATE * diff,
        rect_width=c.RECT_BASE_WIDTH + c.RECT_WIDTH_RATE * diff,
        rect_height=c.RECT_BASE_HEIGHT + c.RECT_HEIGHT_RATE * diff,
    )


def grid(reading: ErrorReading, width: int, height: int) -> VisualParameters:
    """High error: choppy chaotic waves. Low error: smooth harmonious waves."""
    error = _resolved(reading, c.VARIANT_GRID).error
    n = error / c.GRID_CEILING
    count = strip_count(error)
    return VisualParameters(
        amplitude=c.GRID_BASE_AMPLITUDE + n * c.GRID_AMPLITUDE_RATE,
        frequency=c.GRID_BASE_FREQUENCY + n * c.GRID_FREQUENCY_RATE,
        chaos_amount=n * c.GRID_CHAOS_RATE,
        strip_count=count,
        strip_height=height / count,
    )


def strips(reading: ErrorReading, width: int, height: int) -> VisualParameters:
    resolved = _resolved(reading, c.VARIANT_STRIPS)
    rolling = resolved.rolling_30d
    daily = resolved.daily
    n = rolling / c.STRIPS_CEILING
    m = daily / c.STRIPS_CEILING
    count = strip_count(rolling)
    return VisualParameters(
        amplitude=c.STRIPS_BASE_AMPLITUDE + n * c.STRIPS_AMPLITUDE_RATE,
        frequency=c.STRIPS_BASE_FREQUENCY + n * c.STRIPS_FREQUENCY_RATE,
        chaos_amount=m * c.STRIPS_CHAOS_RATE,
        strip_count=count,
        strip_height=height / count,
    )


# Registry
register_param_mapper(c.VARIANT_RECTANGLES, rectangles, ceiling=c.RECT_CEILING)
register_param_mapper(c.VARIANT_GRID, grid, ceiling=c.GRID_CEILING)
register_param_mapper(c.VARIANT_STRIPS, strips, ceiling=c.STRIPS_CEILING)
