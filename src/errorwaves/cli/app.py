from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer

from errorwaves.cli import ui
from errorwaves.core import constants
from errorwaves.core.noise.base import list_noise_models
from errorwaves.core.params.base import get_param_mapper, list_param_mappers
from errorwaves.core.reading import ErrorReading
from errorwaves.io.config import ConfigError, SketchConfig, parse_config
from errorwaves.io.formats import load_error_reading
from errorwaves.orchestrator.sketch import SketchState, create_sketch
from errorwaves.utils.logging import get_logger, resolve_log_level, set_command_context, setup_logging

app = typer.Typer(help="Animated sketches of the sales forecasting error rate")

logger = get_logger(__name__)


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress (INFO)"),
    debug: bool = typer.Option(False, "--debug", help="Log everything (DEBUG)"),
):
    setup_logging(resolve_log_level(verbose, debug))


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _check_variant(variant: str) -> str:
    try:
        return get_param_mapper(variant).name
    except ValueError as exc:
        _fail(str(exc))


def _load_config(config: Optional[Path], width: Optional[int], height: Optional[int]) -> SketchConfig:
    try:
        cfg = parse_config(config)
    except ConfigError as exc:
        _fail(f"Config error: {exc}")
    if (width is not None and width <= 0) or (height is not None and height <= 0):
        _fail("width and height must be > 0")
    return cfg.with_viewport(width, height)


def _build_state(
    command: str,
    variant: str,
    input_path: Optional[Path],
    config: Optional[Path],
    width: Optional[int],
    height: Optional[int],
    reading: ErrorReading | None = None,
    quiet: bool = False,
) -> SketchState:
    set_command_context(command)
    variant = _check_variant(variant)
    set_command_context(command, variant)
    cfg = _load_config(config, width, height)
    if not quiet:
        ui.print_run_header(command, variant=variant, input_path=input_path, config_path=config)
    if reading is None:
        reading = load_error_reading(input_path)
    return create_sketch(variant, reading, cfg)


VARIANT_OPTION = typer.Option(constants.DEFAULT_VARIANT, "--variant", "-s", help="Sketch variant")
INPUT_OPTION = typer.Option(Path(constants.DEFAULT_INPUT), "--input", "-i", help="Error rate JSON")
CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, readable=True, help="YAML sketch config")
WIDTH_OPTION = typer.Option(None, "--width", help="Viewport width (overrides config)")
HEIGHT_OPTION = typer.Option(None, "--height", help="Viewport height (overrides config)")


@app.command()
def run(
    variant: str = VARIANT_OPTION,
    input_path: Path = INPUT_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    width: Optional[int] = WIDTH_OPTION,
    height: Optional[int] = HEIGHT_OPTION,
    frames: Optional[int] = typer.Option(None, "--frames", "-n", help="Stop after N frames"),
):
    """Open a resizable window and animate the sketch."""
    from errorwaves.render.pygame_host import run_window

    state = _build_state("run", variant, input_path, config, width, height)
    ui.print_reading(state)
    ui.print_noise(state)
    drawn = run_window(state, max_frames=frames)
    ui.print_done(f"frames={drawn}")


@app.command()
def snapshot(
    out: Path = typer.Option(..., "--out", "-o", help="PNG output path"),
    variant: str = VARIANT_OPTION,
    input_path: Path = INPUT_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    width: Optional[int] = WIDTH_OPTION,
    height: Optional[int] = HEIGHT_OPTION,
    frames: int = typer.Option(1, "--frames", "-n", help="Frames to advance before saving"),
):
    """Render frames off-screen and save the last one."""
    from errorwaves.render.pygame_host import render_snapshot

    if frames < 1:
        _fail("frames must be >= 1")
    state = _build_state("snapshot", variant, input_path, config, width, height)
    ui.print_reading(state)
    ui.print_noise(state)
    render_snapshot(state, out, frames=frames)
    typer.secho(f"Snapshot → {out}", fg=typer.colors.GREEN)


@app.command()
def params(
    variant: str = VARIANT_OPTION,
    input_path: Path = INPUT_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    width: Optional[int] = WIDTH_OPTION,
    height: Optional[int] = HEIGHT_OPTION,
    error: Optional[float] = typer.Option(None, "--error", "-e", help="Error rate (overrides input)"),
    rolling: Optional[float] = typer.Option(None, "--rolling", help="30 day error rate (overrides input)"),
    daily: Optional[float] = typer.Option(None, "--daily", help="Daily error rate (overrides input)"),
    json_out: bool = typer.Option(False, "--json", help="Print JSON instead of text"),
):
    """Print the visual parameters derived for an error reading and viewport."""
    reading = None
    if any(v is not None for v in (error, rolling, daily)):
        reading = ErrorReading(error=error, rolling_30d=rolling, daily=daily)
    state = _build_state("params", variant, input_path, config, width, height, reading=reading, quiet=json_out)

    if json_out:
        payload = {
            "variant": state.variant,
            "reading": {k: v for k, v in vars(state.reading).items() if v is not None},
            "used_fallback": state.used_fallback,
            "viewport": {"width": state.width, "height": state.height},
            "params": state.params.as_dict(),
            "layout": vars(state.layout),
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    ui.print_reading(state)
    ui.print_params(state)


@app.command()
def report(
    out_dir: Path = typer.Option(..., "--out-dir", "-o", help="Directory for report.md and plots"),
    variant: Optional[List[str]] = typer.Option(None, "--variant", "-s", help="Variant(s); default all"),
    samples: int = typer.Option(50, "--samples", help="Error rates sampled per variant"),
    no_timestamp: bool = typer.Option(False, "--no-timestamp", help="Omit the generation timestamp"),
    json_summary: Optional[Path] = typer.Option(None, "--json-summary", help="Write a JSON summary"),
):
    """Plot every visual parameter across each variant's error range."""
    from errorwaves.report.runner import generate_report

    set_command_context("report")
    variants = [_check_variant(v) for v in variant] if variant else None
    if samples < 2:
        _fail("samples must be >= 2")
    try:
        summary = generate_report(
            out_dir,
            variants=variants,
            samples=samples,
            include_timestamp=not no_timestamp,
            json_summary=json_summary,
        )
    except OSError as exc:
        _fail(f"Failed to write report: {exc}")
    typer.secho(f"Report → {summary['report']}", fg=typer.colors.GREEN)
    ui.print_list("plot", summary["plots"])


@app.command()
def variants():
    """List the available sketch variants."""
    for name in list_param_mappers():
        typer.echo(f"{name} (ceiling={get_param_mapper(name).ceiling})")


@app.command("noise-models")
def noise_models():
    """List the available coherent-noise models."""
    for name in list_noise_models():
        typer.echo(name)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
