# cloudpack/core/smoke.py
"""
Single entrypoint to verify layout end-to-end: sample keywords -> layout ->
layout.json, cloud.svg, cloud.png, debug.png under reports/smoke/.
Does not run on import.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cloudpack.core.config import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_SURFACE_HEIGHT,
    DEFAULT_SURFACE_WIDTH,
    LOG_LEVEL,
)
from cloudpack.core.io import records_to_labels
from cloudpack.core.layout import compute_layout
from cloudpack.core.render import render_cloud, render_debug
from cloudpack.core.render_svg import export_svg
from cloudpack.core.reporting import ensure_report_dir, write_layout_json, write_run_metadata_json
from cloudpack.core.types import LayoutConfig, SurfaceBounds

SAMPLE_KEYWORDS: list[dict] = [
    {"keyword": "teamwork", "count": 42, "percentage": 21.0},
    {"keyword": "leadership", "count": 30, "percentage": 15.0},
    {"keyword": "innovation", "count": 24, "percentage": 12.0},
    {"keyword": "support", "count": 20, "percentage": 10.0},
    {"keyword": "mentoring", "count": 16, "percentage": 8.0},
    {"keyword": "ownership", "count": 14, "percentage": 7.0},
    {"keyword": "creativity", "count": 12, "percentage": 6.0},
    {"keyword": "kindness", "count": 10, "percentage": 5.0},
    {"keyword": "delivery", "count": 8, "percentage": 4.0},
    {"keyword": "quality", "count": 8, "percentage": 4.0},
    {"keyword": "focus", "count": 6, "percentage": 3.0},
    {"keyword": "help", "count": 5, "percentage": 2.5},
]


def main() -> None:
    """Run the sample layout with default config and run_name='smoke'."""
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    repo_root = Path.cwd().resolve()
    labels = records_to_labels(SAMPLE_KEYWORDS)
    bounds = SurfaceBounds(width=DEFAULT_SURFACE_WIDTH, height=DEFAULT_SURFACE_HEIGHT)
    config = LayoutConfig()
    result = compute_layout(labels, bounds, config)

    report_dir = ensure_report_dir(repo_root, "smoke")
    write_layout_json(report_dir, result, bounds, config, n_input=len(labels))
    write_run_metadata_json(report_dir, "smoke", "SAMPLE_KEYWORDS", bounds, config)
    export_svg(result, bounds, report_dir / "cloud.svg")
    render_cloud(result, bounds, report_dir / "cloud.png", font_family=DEFAULT_FONT_FAMILY)
    render_debug(result, bounds, config, report_dir / "debug.png", font_family=DEFAULT_FONT_FAMILY)


if __name__ == "__main__":
    main()
