from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from errorwaves.core import constants


@dataclass(frozen=True)
class ErrorReading:
    """
    Error rates loaded from the input payload.

    ``None`` marks a value that is absent or has not been loaded yet; the
    sketches substitute their documented fallback in that case.
    """

    error: Optional[float] = None
    rolling_30d: Optional[float] = None
    daily: Optional[float] = None

    @classmethod
    def absent(cls) -> "ErrorReading":
        return cls()

    def is_absent(self) -> bool:
        return self.error is None and self.rolling_30d is None and self.daily is None

    def resolved(self, variant: str) -> Tuple["ErrorReading", bool]:
        """Return a copy with the variant's fallbacks filled in, and whether any were used."""
        defaults = fallback_for(variant)
        values: Dict[str, float] = {}
        used_fallback = False
        for key, default in defaults.items():
            value = getattr(self, key)
            if value is None:
                value = default
                used_fallback = True
            values[key] = float(value)
        return ErrorReading(**values), used_fallback


_FALLBACKS: Dict[str, Dict[str, float]] = {
    constants.VARIANT_RECTANGLES: {"error": constants.RECT_FALLBACK_ERROR},
    constants.VARIANT_GRID: {"error": constants.GRID_FALLBACK_ERROR},
    constants.VARIANT_STRIPS: {
        "rolling_30d": constants.STRIPS_FALLBACK_ROLLING,
        "daily": constants.STRIPS_FALLBACK_DAILY,
    },
}


def fallback_for(variant: str) -> Dict[str, float]:
    if variant not in _FALLBACKS:
        raise ValueError(f"Unknown variant '{variant}'. Available: {sorted(_FALLBACKS)}")
    return dict(_FALLBACKS[variant])


def format_percent(value: float) -> str:
    return f"{value * 100:.1f}%"
