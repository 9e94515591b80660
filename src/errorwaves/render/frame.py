from __future__ import annotations

from typing import List

import numpy as np

from errorwaves.core import constants as c
from errorwaves.core.reading import format_percent
from errorwaves.core.waves.field import grid_points, rect_wave_y, wave_offset_grid
from errorwaves.orchestrator.sketch import SketchState, resize_sketch, scroll, tick_clock
from errorwaves.utils.logging import get_logger

from .canvas import Canvas

logger = get_logger(__name__)


def label_text(state: SketchState) -> str:
    reading = state.reading
    if state.variant == c.VARIANT_STRIPS:
        return f"30d Error {format_percent(reading.rolling_30d)} | Daily Error {format_percent(reading.daily)}"
    return f"Sales Forecasting Error {format_percent(reading.error)}"


def _strip_top(index: int, state: SketchState) -> float:
    return index * state.params.strip_height


def _displaced_grid(state: SketchState, spacing: float, row_spacing: float):
    xs, ys = grid_points(state.layout.grid_cols, state.layout.grid_rows, spacing, row_spacing)
    dx, dy = wave_offset_grid(xs, ys, state.clock, state.params, state.noise)
    return xs + dx, ys + dy


def _rows(px: np.ndarray, py: np.ndarray) -> List[list]:
    return [list(zip(px[r].tolist(), py[r].tolist())) for r in range(px.shape[0])]


def _cols(px: np.ndarray, py: np.ndarray) -> List[list]:
    return [list(zip(px[:, k].tolist(), py[:, k].tolist())) for k in range(px.shape[1])]


def draw_grid(state: SketchState, canvas: Canvas) -> None:
    """Wave grid seen through alternating horizontal strips."""
    tick_clock(state)
    canvas.clear(c.WHITE)

    width = state.width
    strip_h = state.params.strip_height
    for s in range(1, state.params.strip_count, 2):
        canvas.fill_rect(0, _strip_top(s, state), width, strip_h, c.STRIP_GRAY)

    # Every strip shows the same field, so displace once per frame
    px, py = _displaced_grid(state, state.config.grid_spacing, state.config.grid_spacing)
    lines = _rows(px, py) + _cols(px, py)

    for s in range(state.params.strip_count):
        color = c.LINE_BLUE if s % 2 == 0 else c.LINE_DARK
        canvas.set_clip(0, _strip_top(s, state), width, strip_h)
        for line in lines:
            canvas.polyline(line, color, c.LINE_WIDTH)
        canvas.reset_clip()

    draw_label_box(state, canvas)


def draw_strips(state: SketchState, canvas: Canvas) -> None:
    """Dense horizontal wave lines, one colour per strip, strip count from the 30 day rate."""
    tick_clock(state)
    canvas.clear(c.WHITE)

    width = state.width
    strip_h = state.params.strip_height
    for s in range(1, state.params.strip_count, 2):
        canvas.fill_rect(0, _strip_top(s, state), width, strip_h, c.STRIP_GRAY)

    px, py = _displaced_grid(state, state.config.strip_sample_step, state.config.strip_line_spacing)
    lines = _rows(px, py)

    for s in range(state.params.strip_count):
        color = c.LINE_BLUE if s % 2 == 0 else c.LINE_DARK
        canvas.set_clip(0, _strip_top(s, state), width, strip_h)
        for line in lines:
            canvas.polyline(line, color, c.LINE_WIDTH)
        canvas.reset_clip()

    draw_label_box(state, canvas)


def draw_rectangles(state: SketchState, canvas: Canvas) -> None:
    """Outlined rectangles riding a noise-modulated wave, scrolling right."""
    canvas.clear(c.WHITE)
    draw_error_band(state, canvas)

    params = state.params
    center_y = state.height / 2
    for rect in state.rectangles:
        y = rect_wave_y(rect.x, state.clock, center_y, params, state.noise)
        canvas.stroke_rect(
            rect.x - params.rect_width / 2,
            y - params.rect_height / 2,
            params.rect_width,
            params.rect_height,
            c.BLACK,
            c.LINE_WIDTH,
        )

    scroll(state)


def draw_error_band(state: SketchState, canvas: Canvas) -> None:
    """Translucent band covering the full swing of the rectangles, labelled inside."""
    center_y = state.height / 2
    reach = state.params.max_amplitude + state.params.rect_height / 2
    top = center_y - reach
    band_h = reach * 2

    canvas.fill_rect(0, top, state.width, band_h, c.BAND_RGBA)
    canvas.text(
        label_text(state),
        state.width - c.LABEL_PAD,
        top + band_h - c.LABEL_PAD,
        c.LABEL_TEXT_SIZE,
        c.BAND_LABEL_RGBA,
        bold=True,
        align="right",
        baseline="bottom",
    )


def draw_label_box(state: SketchState, canvas: Canvas) -> None:
    """Top-right label on a translucent rounded box sized to the text."""
    label = label_text(state)
    text_w = canvas.text_width(label, c.LABEL_TEXT_SIZE, bold=True)

    box_w = text_w + c.LABEL_INNER_PAD * 2
    box_h = c.LABEL_BOX_HEIGHT
    x = state.width - c.LABEL_PAD - box_w
    y = c.LABEL_PAD

    canvas.fill_rect(x, y, box_w, box_h, c.LABEL_BOX_RGBA, radius=c.LABEL_BOX_RADIUS)
    canvas.stroke_rect(x, y, box_w, box_h, c.LABEL_BORDER_RGBA, 1, radius=c.LABEL_BOX_RADIUS)
    canvas.text(
        label,
        x + c.LABEL_INNER_PAD,
        y + box_h / 2,
        c.LABEL_TEXT_SIZE,
        c.LABEL_RGBA,
        bold=True,
        align="left",
        baseline="center",
    )


_DRAWERS = {
    c.VARIANT_GRID: draw_grid,
    c.VARIANT_STRIPS: draw_strips,
    c.VARIANT_RECTANGLES: draw_rectangles,
}


def render_frame(state: SketchState, canvas: Canvas) -> None:
    """Draw one frame and advance the animation state."""
    width, height = canvas.size
    if (width, height) != (state.width, state.height):
        logger.debug("Canvas size %dx%d differs from state; resizing", width, height)
        resize_sketch(state, width, height)
    _DRAWERS[state.variant](state, canvas)
    state.frame += 1
