from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Optional

_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

_FORMAT = "[%(command)s] %(levelname)s: %(message)s"

# Third-party loggers that flood DEBUG output while plotting or saving images
_QUIET_LOGGERS = ("matplotlib", "PIL")

# Active CLI command and sketch variant, read by every record emitted below them
_command: ContextVar[str] = ContextVar("errorwaves_command", default="cli")
_variant: ContextVar[Optional[str]] = ContextVar("errorwaves_variant", default=None)


class _CommandFilter(logging.Filter):
    """Stamp records with ``command`` or ``command:variant`` for the prefix."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        if not getattr(record, "command", None):
            variant = _variant.get()
            record.command = f"{_command.get()}:{variant}" if variant else _command.get()
        return True


def _numeric_level(level) -> int:
    if isinstance(level, str):
        return _LEVELS.get(level.lower(), logging.WARNING)
    return int(level)


def _our_handlers(root: logging.Logger):
    return [
        h
        for h in root.handlers
        if isinstance(h, logging.StreamHandler) and any(isinstance(f, _CommandFilter) for f in h.filters)
    ]


def setup_logging(level: str = "WARNING") -> None:
    """
    Install the stderr handler on the root logger, or re-point an existing one.

    Called once per CLI invocation; repeated calls only update the level and
    the stream, so test runners that swap ``sys.stderr`` still see output.
    """
    numeric_level = _numeric_level(level)
    root = logging.getLogger()
    handlers = _our_handlers(root)
    if handlers:
        for handler in handlers:
            handler.setStream(sys.stderr)
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler.addFilter(_CommandFilter())
        root.addHandler(handler)
    root.setLevel(numeric_level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))
    logging.captureWarnings(True)


def set_command_context(command: str, variant: Optional[str] = None) -> None:
    """Label subsequent records with the command and, once known, the sketch variant."""
    _command.set(command)
    _variant.set(variant)


def resolve_log_level(verbose: bool, debug: bool) -> str:
    if debug:
        return "DEBUG"
    return "INFO" if verbose else "WARNING"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name if name is not None else __name__)
