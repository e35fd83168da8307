# cloudpack/core/reporting.py
"""
Create reports/<run_name>/ and write layout.json and run_metadata.json.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from cloudpack.core.config import (
    DEFAULT_FONT_FAMILY,
    INNER_MARGIN,
    REPORTS_DIR,
    SPIRAL_RADIUS_STEP,
    SPIRAL_START_RADIUS,
    TEXT_HEIGHT_RATIO,
)
from cloudpack.core.error_codes import NO_LABELS, NO_LABELS_PLACED
from cloudpack.core.io import labels_to_records
from cloudpack.core.types import LayoutConfig, LayoutResult, PlacedLabel, SurfaceBounds
from cloudpack.core.validate import check_layout

SCHEMA_VERSION = "1.0"


def placed_to_dict(p: PlacedLabel) -> dict:
    """One placed label as the host surface consumes it."""
    return {
        "text": p.text,
        "weight": p.weight,
        "magnitude": p.magnitude,
        "font_size": p.font_size,
        "x": p.x,
        "y": p.y,
        "width": p.width,
        "height": p.height,
        "color": p.color.css(),
        "color_hex": p.color.to_hex(),
        "ordinal_index": p.ordinal_index,
        "animation_delay_ms": p.animation_delay_ms,
        "title": p.title(),
    }


def layout_summary(result: LayoutResult, n_input: int, bounds: SurfaceBounds, config: LayoutConfig) -> dict:
    """Counts plus an error key when nothing could be shown."""
    error = None
    if n_input == 0:
        error = NO_LABELS
    elif not result.placed:
        error = NO_LABELS_PLACED
    return {
        "n_input": n_input,
        "n_considered": result.placed_count + result.dropped_count,
        "placed_count": result.placed_count,
        "dropped_count": result.dropped_count,
        "excluded_count": max(0, n_input - result.placed_count - result.dropped_count),
        "problems": check_layout(result, bounds, config),
        "error": error,
    }


def layout_to_dict(
    result: LayoutResult,
    bounds: SurfaceBounds,
    config: LayoutConfig,
    n_input: int | None = None,
) -> dict:
    """Exact structure for layout.json."""
    if n_input is None:
        n_input = result.placed_count + result.dropped_count
    return {
        "schema_version": SCHEMA_VERSION,
        "surface": {"width": bounds.width, "height": bounds.height, "inner_margin": INNER_MARGIN},
        "config": asdict(config),
        "placed": [placed_to_dict(p) for p in result.placed],
        "dropped": labels_to_records(result.dropped),
        "summary": layout_summary(result, n_input, bounds, config),
    }


def run_metadata_dict(
    run_name: str,
    labels_source: str,
    bounds: SurfaceBounds,
    config: LayoutConfig,
    font_family: str,
    metrics_name: str,
) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "labels_source": labels_source,
        "surface": {"width": bounds.width, "height": bounds.height},
        "layout_config": asdict(config),
        "font_family": font_family,
        "metrics": metrics_name,
        "config": {
            "INNER_MARGIN": INNER_MARGIN,
            "SPIRAL_START_RADIUS": SPIRAL_START_RADIUS,
            "SPIRAL_RADIUS_STEP": SPIRAL_RADIUS_STEP,
            "TEXT_HEIGHT_RATIO": TEXT_HEIGHT_RATIO,
            "DEFAULT_FONT_FAMILY": DEFAULT_FONT_FAMILY,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_layout_json(
    report_dir: Path,
    result: LayoutResult,
    bounds: SurfaceBounds,
    config: LayoutConfig,
    n_input: int | None = None,
) -> Path:
    """Write layout.json to report_dir. Returns path to file."""
    path = report_dir / "layout.json"
    data = layout_to_dict(result, bounds, config, n_input=n_input)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    labels_source: str,
    bounds: SurfaceBounds,
    config: LayoutConfig,
    font_family: str = DEFAULT_FONT_FAMILY,
    metrics_name: str = "pillow",
) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    data = run_metadata_dict(run_name, labels_source, bounds, config, font_family, metrics_name)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
