import numpy as np
import pytest

from errorwaves.core.params.base import get_param_mapper, list_param_mappers
from errorwaves.core.params import mappers  # noqa: F401 (registers mappers)
from errorwaves.core.params.mappers import round_half_up, strip_count
from errorwaves.core.reading import ErrorReading


def test_rectangles_reference_values():
    params = get_param_mapper("rectangles").derive(ErrorReading(error=0.08), 800, 600)
    assert params.distortion == pytest.approx(0.625)
    assert params.max_amplitude == pytest.approx(175.0)
    assert params.rect_width == pytest.approx(35.0)
    assert params.rect_height == pytest.approx(270.0)


def test_grid_zero_error():
    params = get_param_mapper("grid").derive(ErrorReading(error=0.0), 800, 600)
    assert params.strip_count == 1
    assert params.amplitude == pytest.approx(20.0)
    assert params.frequency == pytest.approx(0.02)
    assert params.chaos_amount == 0
    assert params.strip_height == pytest.approx(600.0)


def test_grid_at_ceiling():
    params = get_param_mapper("grid").derive(ErrorReading(error=0.17), 800, 680)
    assert params.amplitude == pytest.approx(100.0)
    assert params.frequency == pytest.approx(0.07)
    assert params.chaos_amount == pytest.approx(1.5)
    assert params.strip_count == 17
    assert params.strip_height == pytest.approx(40.0)


def test_strip_count_rounding():
    assert strip_count(0.0) == 1
    assert strip_count(0.004) == 1
    assert strip_count(0.273) == 27
    assert strip_count(0.17) == 17
    assert strip_count(1.0) == 100
    assert round_half_up(2.5) == 3


def test_strips_uses_both_metrics():
    mapper = get_param_mapper("strips")
    params = mapper.derive(ErrorReading(rolling_30d=0.273, daily=0.233), 1000, 540)
    assert params.strip_count == 27
    assert params.strip_height == pytest.approx(20.0)
    assert params.amplitude == pytest.approx(60.0)
    assert params.chaos_amount == pytest.approx(1.5 * 0.233 / 0.273)

    calmer_day = mapper.derive(ErrorReading(rolling_30d=0.273, daily=0.05), 1000, 540)
    assert calmer_day.amplitude == params.amplitude
    assert calmer_day.chaos_amount < params.chaos_amount


@pytest.mark.parametrize("variant", ["rectangles", "grid"])
def test_monotonic_in_error(variant):
    mapper = get_param_mapper(variant)
    errors = np.linspace(0.0, mapper.ceiling, 25)
    series = [mapper.derive(ErrorReading(error=float(e)), 800, 600) for e in errors]

    def increasing(field):
        values = [getattr(p, field) for p in series]
        return all(b > a for a, b in zip(values, values[1:]))

    def non_decreasing(field):
        values = [getattr(p, field) for p in series]
        return all(b >= a for a, b in zip(values, values[1:]))

    if variant == "grid":
        assert increasing("amplitude")
        assert increasing("frequency")
        assert increasing("chaos_amount")
        assert non_decreasing("strip_count")
    else:
        # higher error: bigger swing, smaller rectangles
        assert increasing("max_amplitude")
        assert increasing("distortion")
        values = [p.rect_width for p in series]
        assert all(b < a for a, b in zip(values, values[1:]))
        values = [p.rect_height for p in series]
        assert all(b < a for a, b in zip(values, values[1:]))


def test_strips_monotonic_in_each_metric():
    mapper = get_param_mapper("strips")
    rates = [float(e) for e in np.linspace(0.0, mapper.ceiling, 25)]
    by_rolling = [mapper.derive(ErrorReading(rolling_30d=e, daily=0.1), 800, 600) for e in rates]
    by_daily = [mapper.derive(ErrorReading(rolling_30d=0.1, daily=e), 800, 600) for e in rates]

    for field in ("amplitude", "frequency"):
        values = [getattr(p, field) for p in by_rolling]
        assert all(b > a for a, b in zip(values, values[1:]))
        assert len({getattr(p, field) for p in by_daily}) == 1
    counts = [p.strip_count for p in by_rolling]
    assert all(b >= a for a, b in zip(counts, counts[1:]))
    assert counts[-1] == 27

    chaos = [p.chaos_amount for p in by_daily]
    assert all(b > a for a, b in zip(chaos, chaos[1:]))
    assert len({p.chaos_amount for p in by_rolling}) == 1


def test_error_above_ceiling_extrapolates():
    params = get_param_mapper("grid").derive(ErrorReading(error=0.34), 800, 600)
    assert params.amplitude == pytest.approx(180.0)
    assert params.chaos_amount == pytest.approx(3.0)


def test_absent_reading_maps_to_fallback():
    mapper = get_param_mapper("rectangles")
    assert mapper.derive(ErrorReading(), 800, 600) == mapper.derive(ErrorReading(error=0.16), 800, 600)
    grid = get_param_mapper("grid")
    assert grid.derive(ErrorReading(), 800, 600) == grid.derive(ErrorReading(error=0.17), 800, 600)


def test_registry_lists_variants():
    assert list_param_mappers() == ["grid", "rectangles", "strips"]
    with pytest.raises(ValueError):
        get_param_mapper("spirals")
