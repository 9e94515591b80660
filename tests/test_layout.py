import pytest

from errorwaves.core.layout import (
    Rectangle,
    build_layout,
    grid_dimensions,
    initial_rectangles,
    rect_count,
    rect_pitch,
    scroll_rectangles,
)
from errorwaves.core.params.base import VisualParameters
from errorwaves.io.config import SketchConfig


def test_grid_dimensions_include_buffer():
    assert grid_dimensions(800, 600) == (16, 14)
    assert grid_dimensions(75, 74) == (7, 6)


def test_rect_count_and_positions():
    params = VisualParameters(rect_width=35.0)
    assert rect_count(800, params) == 21
    rects = initial_rectangles(3, params)
    assert [r.x for r in rects] == pytest.approx([-21.5, 21.5, 64.5])


def test_scroll_recycles_to_left_edge():
    params = VisualParameters(rect_width=10.0)
    rects = [Rectangle(x=x) for x in (-9.0, 9.0, 27.0, 45.0)]
    scroll_rectangles(rects, 50, params, speed=15.0)
    assert [r.x for r in rects] == pytest.approx([6.0, 24.0, 42.0, -12.0])
    assert len(rects) == 4


def test_build_layout_per_variant():
    cfg = SketchConfig()
    rect_params = VisualParameters(rect_width=35.0)
    assert build_layout("rectangles", 800, 600, rect_params, cfg).rect_count == 21
    grid = build_layout("grid", 800, 600, VisualParameters(), cfg)
    assert (grid.grid_cols, grid.grid_rows, grid.rect_count) == (16, 14, 0)
    strips = build_layout("strips", 600, 500, VisualParameters(), cfg)
    assert strips.grid_cols == 600 // 15 + 6
    assert strips.grid_rows == 500 // 25 + 6


@pytest.mark.parametrize("rect_width", [-8.0 + 7e-15, -18.125])
def test_rect_pitch_floor_keeps_count_bounded(rect_width):
    params = VisualParameters(rect_width=rect_width)
    assert rect_pitch(params) == 1.0
    assert rect_count(800, params) == 802
