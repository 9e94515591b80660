import pytest

from errorwaves.core.reading import ErrorReading
from errorwaves.io.config import SketchConfig
from errorwaves.orchestrator.sketch import create_sketch, resize_sketch, scroll, tick_clock


def test_absent_reading_uses_fallback():
    state = create_sketch("rectangles", None, SketchConfig(width=800, height=600))
    assert state.used_fallback
    assert state.reading.error == 0.16

    state = create_sketch("strips", ErrorReading(), SketchConfig(width=800, height=600))
    assert state.used_fallback
    assert (state.reading.rolling_30d, state.reading.daily) == (0.273, 0.233)


def test_loaded_reading_is_kept():
    state = create_sketch("grid", ErrorReading(error=0.08), SketchConfig(), width=800, height=600)
    assert not state.used_fallback
    assert state.reading.error == 0.08
    assert (state.width, state.height) == (800, 600)
    assert (state.layout.grid_cols, state.layout.grid_rows) == (16, 14)


def test_resize_only_changes_geometry():
    state = create_sketch("grid", ErrorReading(error=0.12), SketchConfig(width=800, height=600))
    tick_clock(state)
    before = state.params
    before_layout = state.layout

    resize_sketch(state, 1200, 900)

    assert state.params.amplitude == before.amplitude
    assert state.params.frequency == before.frequency
    assert state.params.chaos_amount == before.chaos_amount
    assert state.params.strip_count == before.strip_count
    assert state.params.strip_height == pytest.approx(900 / 12)
    assert state.layout != before_layout
    assert state.clock == pytest.approx(0.01)


def test_resize_rebuilds_rectangles():
    state = create_sketch("rectangles", ErrorReading(error=0.08), SketchConfig(width=800, height=600))
    assert len(state.rectangles) == state.layout.rect_count == 21
    scroll(state)
    resize_sketch(state, 400, 600)
    assert len(state.rectangles) == state.layout.rect_count == 12
    assert state.params.rect_width == pytest.approx(35.0)
    assert state.rectangles[0].x == pytest.approx(-21.5)
    assert state.clock == pytest.approx(0.2)


def test_resize_to_same_size_is_noop():
    state = create_sketch("rectangles", ErrorReading(error=0.08), SketchConfig(width=800, height=600))
    scroll(state)
    positions = [r.x for r in state.rectangles]
    resize_sketch(state, 800, 600)
    assert [r.x for r in state.rectangles] == positions


def test_unknown_variant_raises():
    with pytest.raises(ValueError):
        create_sketch("spirals", None)


def test_unknown_noise_type_raises():
    with pytest.raises(ValueError):
        create_sketch("grid", None, SketchConfig(noise_type="white"))


@pytest.mark.parametrize("error", [0.2176, 0.25, 1.0])
def test_extrapolated_rectangles_stay_bounded(error):
    state = create_sketch("rectangles", ErrorReading(error=error), SketchConfig(width=800, height=600))
    assert 0 < state.layout.rect_count <= 802
    assert len(state.rectangles) == state.layout.rect_count
    scroll(state)
    assert len(state.rectangles) == state.layout.rect_count
