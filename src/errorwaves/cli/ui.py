from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

import typer

from errorwaves.core.reading import format_percent
from errorwaves.orchestrator.sketch import SketchState


def _timestamp_utc() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _abs_path(path: Path | None) -> str:
    if path is None:
        return "n/a"
    try:
        return str(path.resolve())
    except Exception:  # noqa: BLE001
        return str(path)


def _fmt(value: float) -> str:
    return f"{value:.6g}"


def print_run_header(
    command: str,
    *,
    variant: str,
    input_path: Path | None,
    config_path: Path | None,
) -> None:
    typer.echo(f"[run] command={command} variant={variant} ts_utc={_timestamp_utc()}")
    typer.echo(f"[io] input={_abs_path(input_path)} config={_abs_path(config_path)}")


def print_reading(state: SketchState) -> None:
    reading = state.reading
    source = "fallback" if state.used_fallback else "input"
    if reading.error is not None:
        typer.echo(f"[reading] error={format_percent(reading.error)} source={source}")
    else:
        typer.echo(
            f"[reading] rolling_30d={format_percent(reading.rolling_30d)} "
            f"daily={format_percent(reading.daily)} source={source}"
        )


def print_params(state: SketchState) -> None:
    p = state.params
    layout = state.layout
    typer.echo(f"[viewport] width={state.width} height={state.height}")
    typer.echo(
        "[params] "
        f"amplitude={_fmt(p.amplitude)} frequency={_fmt(p.frequency)} chaos_amount={_fmt(p.chaos_amount)} "
        f"strip_count={p.strip_count} strip_height={_fmt(p.strip_height)}"
    )
    typer.echo(
        "[params] "
        f"rect_width={_fmt(p.rect_width)} rect_height={_fmt(p.rect_height)} "
        f"distortion={_fmt(p.distortion)} max_amplitude={_fmt(p.max_amplitude)}"
    )
    typer.echo(
        f"[layout] grid_cols={layout.grid_cols} grid_rows={layout.grid_rows} rect_count={layout.rect_count}"
    )


def print_noise(state: SketchState) -> None:
    cfg = state.config
    typer.echo(f"[noise] type={cfg.noise_type} seed={cfg.noise_seed}")


def print_list(tag: str, lines: Iterable[str]) -> None:
    for line in lines:
        typer.echo(f"[{tag}] {line}")


def print_done(summary: str) -> None:
    typer.echo(f"[done] {summary}")
