from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from errorwaves.core import constants as c
from errorwaves.core.params.base import VisualParameters


@dataclass(frozen=True)
class Layout:
    """Viewport-dependent entity counts."""

    grid_cols: int = 0
    grid_rows: int = 0
    rect_count: int = 0


@dataclass
class Rectangle:
    x: float


def grid_dimensions(width: int, height: int, spacing: int = c.GRID_SPACING) -> tuple[int, int]:
    """Columns and rows, with a buffer so displaced lines never leave blank edges."""
    cols = int(math.floor(width / spacing)) + c.GRID_BUFFER
    rows = int(math.floor(height / spacing)) + c.GRID_BUFFER
    return cols, rows


def rect_pitch(params: VisualParameters, spacing: float = c.RECT_SPACING) -> float:
    """Distance between rectangle centres, floored at one pixel for extrapolated widths."""
    return max(params.rect_width + spacing, c.MIN_RECT_PITCH)


def rect_count(width: int, params: VisualParameters, spacing: float = c.RECT_SPACING) -> int:
    return int(math.ceil(width / rect_pitch(params, spacing))) + 2


def initial_rectangles(count: int, params: VisualParameters, spacing: float = c.RECT_SPACING) -> List[Rectangle]:
    pitch = rect_pitch(params, spacing)
    return [Rectangle(x=-pitch / 2 + i * pitch) for i in range(count)]


def scroll_rectangles(
    rects: List[Rectangle],
    width: int,
    params: VisualParameters,
    speed: float,
    spacing: float = c.RECT_SPACING,
) -> None:
    """
    Move every rectangle right by ``speed``.

    A rectangle whose left edge passes the right edge is re-inserted left of
    the leftmost one, so the count stays constant.
    """
    pitch = rect_pitch(params, spacing)
    for rect in rects:
        rect.x += speed
        if rect.x - pitch / 2 > width:
            min_x = min(r.x for r in rects)
            rect.x = min_x - pitch


def build_layout(variant: str, width: int, height: int, params: VisualParameters, config) -> Layout:
    if variant == c.VARIANT_RECTANGLES:
        return Layout(rect_count=rect_count(width, params, config.rect_spacing))
    if variant == c.VARIANT_STRIPS:
        cols, _ = grid_dimensions(width, height, config.strip_sample_step)
        _, rows = grid_dimensions(width, height, config.strip_line_spacing)
        return Layout(grid_cols=cols, grid_rows=rows)
    cols, rows = grid_dimensions(width, height, config.grid_spacing)
    return Layout(grid_cols=cols, grid_rows=rows)
