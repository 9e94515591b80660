from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from errorwaves.core import constants
from errorwaves.core.noise import opensimplex  # noqa: F401
from errorwaves.core.noise import perlin  # noqa: F401
from errorwaves.core.noise.base import NoiseParams, list_noise_models


# -------------------------
# Config structures
# -------------------------


@dataclass(frozen=True)
class SketchConfig:
    width: int = constants.DEFAULT_WIDTH
    height: int = constants.DEFAULT_HEIGHT
    fps: int = constants.DEFAULT_FPS
    title: str = constants.WINDOW_TITLE
    noise_type: str = constants.NOISE_TYPE
    noise_seed: int = constants.NOISE_SEED
    grid_spacing: int = constants.GRID_SPACING
    time_speed: float = constants.TIME_SPEED
    wave_speed: float = constants.WAVE_SPEED
    rect_spacing: int = constants.RECT_SPACING
    strip_sample_step: int = constants.STRIP_SAMPLE_STEP
    strip_line_spacing: int = constants.STRIP_LINE_SPACING

    @property
    def noise_params(self) -> NoiseParams:
        return NoiseParams(type=self.noise_type, seed=self.noise_seed)

    def with_viewport(self, width: int | None, height: int | None) -> "SketchConfig":
        return replace(
            self,
            width=self.width if width is None else int(width),
            height=self.height if height is None else int(height),
        )


# -------------------------
# Config parsing/validation
# -------------------------


class ConfigError(Exception):
    """Raised when the sketch config is invalid."""


def _optional(mapping: Dict[str, Any], key: str, expected_type: Tuple[type, ...], default):
    if key not in mapping or mapping[key] is None:
        return default
    val = mapping[key]
    # bool is an int subclass; reject it for numeric keys
    if isinstance(val, bool) and bool not in expected_type:
        raise ConfigError(f"Key '{key}' must be of type {expected_type}, got {type(val)}")
    if not isinstance(val, expected_type):
        raise ConfigError(f"Key '{key}' must be of type {expected_type}, got {type(val)}")
    return val


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{key}' must be a mapping.")
    return section


def _positive(name: str, value):
    if value <= 0:
        raise ConfigError(f"{name} must be > 0, got {value}")
    return value


def config_from_mapping(data: Dict[str, Any]) -> SketchConfig:
    if not isinstance(data, dict):
        raise ConfigError("Top-level YAML must be a mapping.")

    window = _section(data, "window")
    noise = _section(data, "noise")
    animation = _section(data, "animation")
    defaults = SketchConfig()

    cfg = SketchConfig(
        width=_positive("window.width", int(_optional(window, "width", (int,), defaults.width))),
        height=_positive("window.height", int(_optional(window, "height", (int,), defaults.height))),
        fps=_positive("window.fps", int(_optional(window, "fps", (int,), defaults.fps))),
        title=str(_optional(window, "title", (str,), defaults.title)),
        noise_type=str(_optional(noise, "type", (str,), defaults.noise_type)),
        noise_seed=int(_optional(noise, "seed", (int,), defaults.noise_seed)),
        grid_spacing=_positive(
            "animation.grid_spacing", int(_optional(animation, "grid_spacing", (int,), defaults.grid_spacing))
        ),
        time_speed=float(_optional(animation, "time_speed", (int, float), defaults.time_speed)),
        wave_speed=float(_optional(animation, "wave_speed", (int, float), defaults.wave_speed)),
        rect_spacing=int(_optional(animation, "rect_spacing", (int,), defaults.rect_spacing)),
        strip_sample_step=_positive(
            "animation.strip_sample_step",
            int(_optional(animation, "strip_sample_step", (int,), defaults.strip_sample_step)),
        ),
        strip_line_spacing=_positive(
            "animation.strip_line_spacing",
            int(_optional(animation, "strip_line_spacing", (int,), defaults.strip_line_spacing)),
        ),
    )

    if cfg.noise_type not in list_noise_models():
        raise ConfigError(f"Unknown noise type '{cfg.noise_type}'. Available: {list_noise_models()}")
    if cfg.rect_spacing < 0:
        raise ConfigError(f"animation.rect_spacing must be >= 0, got {cfg.rect_spacing}")

    return cfg


def parse_config(path: Path | None) -> SketchConfig:
    if path is None:
        return SketchConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding=constants.ENCODING))
    except Exception as exc:  # noqa: BLE001
        raise ConfigError(f"Failed to read YAML: {exc}") from exc
    if data is None:
        return SketchConfig()
    return config_from_mapping(data)
