from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from errorwaves.core import constants  # noqa: E402
from errorwaves.core.params.base import VisualParameters, get_param_mapper, list_param_mappers  # noqa: E402
from errorwaves.core.params import mappers  # noqa: E402,F401
from errorwaves.core.reading import ErrorReading  # noqa: E402
from errorwaves.utils.logging import get_logger  # noqa: E402

logger = get_logger(__name__)

PARAM_FIELDS = (
    "amplitude",
    "frequency",
    "chaos_amount",
    "strip_count",
    "strip_height",
    "rect_width",
    "rect_height",
    "distortion",
    "max_amplitude",
)


@dataclass
class Sweep:
    variant: str
    ceiling: float
    errors: List[float]
    params: List[VisualParameters]

    def series(self, field: str) -> List[float]:
        return [float(getattr(p, field)) for p in self.params]

    def active_fields(self) -> List[str]:
        return [f for f in PARAM_FIELDS if any(v != 0 for v in self.series(f))]


def _reading_for(variant: str, error: float) -> ErrorReading:
    if variant == constants.VARIANT_STRIPS:
        return ErrorReading(rolling_30d=error, daily=error)
    return ErrorReading(error=error)


def sweep_variant(
    variant: str,
    samples: int = 50,
    width: int = constants.DEFAULT_WIDTH,
    height: int = constants.DEFAULT_HEIGHT,
) -> Sweep:
    """Evaluate the mapper on evenly spaced error rates from 0 to the variant's ceiling."""
    mapper = get_param_mapper(variant)
    errors = [float(e) for e in np.linspace(0.0, mapper.ceiling, max(2, samples))]
    params = [mapper.derive(_reading_for(variant, e), width, height) for e in errors]
    return Sweep(variant=variant, ceiling=mapper.ceiling, errors=errors, params=params)


def _plot_sweep(sweep: Sweep, out_path: Path) -> Path:
    fields = sweep.active_fields()
    fig, axes = plt.subplots(len(fields), 1, figsize=(6, 2.2 * len(fields)), sharex=True, squeeze=False)
    xs = [e * 100 for e in sweep.errors]
    for ax, field in zip(axes[:, 0], fields):
        ax.plot(xs, sweep.series(field), color="#208AAE")
        ax.set_ylabel(field)
        ax.grid(True, alpha=0.3)
    axes[-1, 0].set_xlabel("error rate (%)")
    fig.suptitle(f"{sweep.variant} (ceiling={sweep.ceiling * 100:.1f}%)")
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_path


def _render_markdown(sweeps: Sequence[Sweep], timestamp: str | None, plot_refs: Dict[str, str]) -> str:
    lines: List[str] = ["# Error-rate parameter report", ""]
    if timestamp:
        lines += [f"Generated: {timestamp}", ""]
    for sweep in sweeps:
        fields = sweep.active_fields()
        lines += [f"## {sweep.variant}", "", f"Ceiling: {sweep.ceiling}", ""]
        lines.append("| field | at 0% | at ceiling |")
        lines.append("|---|---|---|")
        for field in fields:
            series = sweep.series(field)
            lines.append(f"| {field} | {series[0]:.4g} | {series[-1]:.4g} |")
        lines.append("")
        if sweep.variant in plot_refs:
            lines += [f"![{sweep.variant}]({Path(plot_refs[sweep.variant]).name})", ""]
    return "\n".join(lines)


def generate_report(
    out_dir: Path,
    variants: Sequence[str] | None = None,
    samples: int = 50,
    include_timestamp: bool = True,
    json_summary: Path | None = None,
) -> Dict[str, Any]:
    variants = list(variants) if variants else list_param_mappers()
    out_dir.mkdir(parents=True, exist_ok=True)
    sweeps = [sweep_variant(v, samples=samples) for v in variants]

    plot_refs: Dict[str, str] = {}
    for sweep in sweeps:
        out_file = _plot_sweep(sweep, out_dir / f"{sweep.variant}_params.png")
        plot_refs[sweep.variant] = str(out_file)
        logger.info("Wrote %s", out_file)

    timestamp = datetime.now(timezone.utc).isoformat() if include_timestamp else None
    md_path = out_dir / "report.md"
    md_path.write_text(_render_markdown(sweeps, timestamp, plot_refs), encoding="utf-8")

    summary = {
        "variants": variants,
        "samples": samples,
        "report": str(md_path),
        "timestamp": timestamp,
        "plots": [plot_refs[v] for v in variants],
    }
    if json_summary:
        json_summary.parent.mkdir(parents=True, exist_ok=True)
        json_summary.write_text(json.dumps(summary, indent=2), encoding="utf-8")
    return summary
