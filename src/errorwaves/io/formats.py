from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict, Optional

from errorwaves.core.reading import ErrorReading
from errorwaves.utils.logging import get_logger

logger = get_logger(__name__)

READING_KEYS = ("error", "rolling_30d", "daily")


def read_json(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _rate(payload: Dict[str, Any], key: str) -> Optional[float]:
    if key not in payload:
        return None
    val = payload[key]
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        logger.warning("Ignoring non-numeric '%s' value in error reading: %r", key, val)
        return None
    try:
        rate = float(val)
    except OverflowError:
        logger.warning("Ignoring out-of-range '%s' value in error reading", key)
        return None
    if not math.isfinite(rate):
        logger.warning("Ignoring non-finite '%s' value in error reading: %r", key, val)
        return None
    return rate


def reading_from_payload(payload: Any) -> ErrorReading:
    if not isinstance(payload, dict):
        logger.warning("Error reading must be a JSON object, got %s", type(payload).__name__)
        return ErrorReading.absent()
    return ErrorReading(**{key: _rate(payload, key) for key in READING_KEYS})


def load_error_reading(path: Path | None) -> ErrorReading:
    """
    Load the error payload once.

    Any failure yields an absent reading so the sketch falls back to its
    documented constant instead of stopping.
    """
    if path is None:
        return ErrorReading.absent()
    try:
        payload = read_json(path)
    except FileNotFoundError:
        logger.warning("Error reading %s not found", path)
        return ErrorReading.absent()
    except (OSError, ValueError) as exc:
        logger.warning("Could not load error reading %s: %s", path, exc)
        return ErrorReading.absent()
    reading = reading_from_payload(payload)
    logger.debug("Loaded error reading %s from %s", reading, path)
    return reading
