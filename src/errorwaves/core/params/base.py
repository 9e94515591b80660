from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List

from errorwaves.core.reading import ErrorReading


@dataclass(frozen=True)
class VisualParameters:
    """Visual configuration derived from an error reading and the viewport."""

    amplitude: float = 0.0
    frequency: float = 0.0
    chaos_amount: float = 0.0
    strip_count: int = 0
    strip_height: float = 0.0
    rect_width: float = 0.0
    rect_height: float = 0.0
    distortion: float = 0.0
    max_amplitude: float = 0.0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


MapperFunc = Callable[[ErrorReading, int, int], VisualParameters]


class ParamMapper:
    """Callable parameter mapper wrapper."""

    def __init__(self, name: str, func: MapperFunc, ceiling: float):
        self.name = name
        self.func = func
        self.ceiling = ceiling

    def derive(self, reading: ErrorReading, width: int, height: int) -> VisualParameters:
        return self.func(reading, width, height)


MAPPER_REGISTRY: Dict[str, ParamMapper] = {}


def register_param_mapper(name: str, func: MapperFunc, ceiling: float):
    MAPPER_REGISTRY[name] = ParamMapper(name=name, func=func, ceiling=ceiling)


def get_param_mapper(name: str) -> ParamMapper:
    if name not in MAPPER_REGISTRY:
        raise ValueError(f"Unknown variant '{name}'. Available: {list_param_mappers()}")
    return MAPPER_REGISTRY[name]


def list_param_mappers() -> List[str]:
    return sorted(MAPPER_REGISTRY.keys())
