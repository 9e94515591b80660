from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from errorwaves.core import constants
from errorwaves.core.layout import Layout, Rectangle, build_layout, initial_rectangles, scroll_rectangles
from errorwaves.core.noise.base import NoiseModel, get_noise_model
from errorwaves.core.noise import opensimplex  # noqa: F401
from errorwaves.core.noise import perlin  # noqa: F401
from errorwaves.core.params.base import VisualParameters, get_param_mapper
from errorwaves.core.params import mappers  # noqa: F401 (registers mappers)
from errorwaves.core.reading import ErrorReading
from errorwaves.io.config import SketchConfig
from errorwaves.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class SketchState:
    """Everything a sketch mutates between frames, owned by the render loop."""

    variant: str
    reading: ErrorReading
    used_fallback: bool
    config: SketchConfig
    noise: NoiseModel
    width: int
    height: int
    params: VisualParameters = field(default_factory=VisualParameters)
    layout: Layout = field(default_factory=Layout)
    rectangles: List[Rectangle] = field(default_factory=list)
    clock: float = 0.0
    frame: int = 0


def derive_params(variant: str, reading: ErrorReading, width: int, height: int) -> VisualParameters:
    params = get_param_mapper(variant).derive(reading, width, height)
    logger.debug("Derived params variant=%s viewport=%dx%d %s", variant, width, height, params)
    return params


def _apply_viewport(state: SketchState, width: int, height: int) -> None:
    state.width = int(width)
    state.height = int(height)
    state.params = derive_params(state.variant, state.reading, state.width, state.height)
    state.layout = build_layout(state.variant, state.width, state.height, state.params, state.config)
    if state.variant == constants.VARIANT_RECTANGLES:
        state.rectangles = initial_rectangles(state.layout.rect_count, state.params, state.config.rect_spacing)
    else:
        state.rectangles = []


def create_sketch(
    variant: str,
    reading: ErrorReading | None,
    config: SketchConfig | None = None,
    width: int | None = None,
    height: int | None = None,
) -> SketchState:
    """
    Build the state for one sketch.

    The reading is resolved here, once: an absent or partial reading takes the
    variant's fallback constants.
    """
    mapper = get_param_mapper(variant)  # fail fast on unknown variants
    config = config or SketchConfig()
    resolved, used_fallback = (reading or ErrorReading.absent()).resolved(mapper.name)
    if used_fallback:
        logger.warning("Error reading unavailable for variant=%s; using fallback %s", variant, resolved)

    state = SketchState(
        variant=variant,
        reading=resolved,
        used_fallback=used_fallback,
        config=config,
        noise=get_noise_model(config.noise_params),
        width=int(width or config.width),
        height=int(height or config.height),
    )
    _apply_viewport(state, state.width, state.height)
    logger.info(
        "Sketch ready variant=%s viewport=%dx%d noise=%s seed=%d",
        variant,
        state.width,
        state.height,
        config.noise_type,
        config.noise_seed,
    )
    return state


def resize_sketch(state: SketchState, width: int, height: int) -> None:
    """Recompute geometry for a new viewport; the clock keeps running."""
    if (int(width), int(height)) == (state.width, state.height):
        return
    logger.debug("Resize %dx%d -> %dx%d", state.width, state.height, width, height)
    _apply_viewport(state, width, height)


def tick_clock(state: SketchState) -> None:
    """Advance the wave clock used by the grid and strip sketches."""
    state.clock += state.config.time_speed


def scroll(state: SketchState) -> None:
    """Move the rectangle ring and advance its scroll offset."""
    scroll_rectangles(
        state.rectangles,
        state.width,
        state.params,
        state.config.wave_speed,
        state.config.rect_spacing,
    )
    state.clock += state.config.wave_speed
