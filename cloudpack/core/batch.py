# cloudpack/core/batch.py
"""
Batch mode: lay out one or more keyword files on one or more surface sizes
(e.g. the sizes a dashboard card takes across breakpoints).
Output: reports/batch_<run_name>/index.csv and cases/<case_id>/ with layout.json, cloud.svg.
"""

from __future__ import annotations

import csv
import logging
import time
from pathlib import Path

from cloudpack.core.config import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_SURFACE_HEIGHT,
    DEFAULT_SURFACE_WIDTH,
    REPORTS_DIR,
)
from cloudpack.core.error_codes import LayoutInputError
from cloudpack.core.io import load_labels
from cloudpack.core.layout import compute_layout
from cloudpack.core.render_svg import export_svg
from cloudpack.core.reporting import ensure_report_dir, write_layout_json
from cloudpack.core.text_metrics import MetricsAdapter
from cloudpack.core.types import LayoutConfig, SurfaceBounds
from cloudpack.core.validate import check_layout

logger = logging.getLogger(__name__)

DEFAULT_SIZES: tuple[tuple[float, float], ...] = ((DEFAULT_SURFACE_WIDTH, DEFAULT_SURFACE_HEIGHT),)


def parse_sizes(s: str) -> list[tuple[float, float]]:
    """Parse comma-separated WxH sizes, e.g. '400x400,800x350'. Malformed parts are skipped."""
    if not (s or "").strip():
        return list(DEFAULT_SIZES)
    out: list[tuple[float, float]] = []
    for part in s.strip().split(","):
        part = part.strip().lower()
        if not part:
            continue
        w, sep, h = part.partition("x")
        if not sep:
            continue
        try:
            out.append((float(w), float(h)))
        except ValueError:
            continue
    return out if out else list(DEFAULT_SIZES)


def _collect_label_files(source: Path, limit: int | None = None) -> list[Path]:
    if source.is_dir():
        files = sorted(p for p in source.iterdir() if p.suffix.lower() in (".json", ".csv"))
    else:
        files = [source]
    return files[:limit] if limit else files


def run_batch(
    run_name: str,
    source: Path,
    sizes: list[tuple[float, float]] | None = None,
    config: LayoutConfig | None = None,
    metrics: MetricsAdapter | None = None,
    repo_root: Path | None = None,
    font_family: str = DEFAULT_FONT_FAMILY,
    limit: int | None = None,
) -> Path:
    """
    Run compute_layout for every (keyword file, size) pair.
    Returns report directory containing index.csv and cases/<case_id>/.
    Files that fail to load or validate are recorded with status 'error' and skipped.
    """
    root = repo_root or Path.cwd().resolve()
    if not source.is_absolute():
        source = root / source
    if not source.exists():
        raise FileNotFoundError(f"Keyword source not found: {source}")
    config = config or LayoutConfig()
    sizes = sizes or list(DEFAULT_SIZES)

    batch_dir = ensure_report_dir(root, f"batch_{run_name}", output_dir=REPORTS_DIR)
    cases_dir = batch_dir / "cases"
    cases_dir.mkdir(parents=True, exist_ok=True)

    rows: list[dict] = []
    for i, path in enumerate(_collect_label_files(source, limit)):
        try:
            labels = load_labels(path)
        except (LayoutInputError, OSError) as e:
            logger.warning("Skipping %s: %s", path, e)
            rows.append({
                "case_id": f"case_{i:04d}_{path.stem}", "labels_source": path.name, "width": "", "height": "",
                "status": "error", "n_input": 0, "placed_count": 0, "dropped_count": 0,
                "problems": 0, "duration_ms": 0,
            })
            continue
        for w, h in sizes:
            case_id = f"case_{i:04d}_{path.stem}_{w:g}x{h:g}"
            case_dir = cases_dir / case_id
            case_dir.mkdir(parents=True, exist_ok=True)
            bounds = SurfaceBounds(width=w, height=h)
            t0 = time.perf_counter()
            try:
                result = compute_layout(labels, bounds, config, metrics)
            except LayoutInputError as e:
                logger.warning("Skipping %s at %gx%g: %s", path, w, h, e)
                rows.append({
                    "case_id": case_id, "labels_source": path.name, "width": w, "height": h,
                    "status": "error", "n_input": len(labels), "placed_count": 0, "dropped_count": 0,
                    "problems": 0, "duration_ms": int((time.perf_counter() - t0) * 1000),
                })
                continue
            duration_ms = int((time.perf_counter() - t0) * 1000)
            write_layout_json(case_dir, result, bounds, config, n_input=len(labels))
            export_svg(result, bounds, case_dir / "cloud.svg", font_family=font_family)
            rows.append({
                "case_id": case_id, "labels_source": path.name, "width": w, "height": h,
                "status": "ok" if result.placed or not labels else "none_placed",
                "n_input": len(labels), "placed_count": result.placed_count,
                "dropped_count": result.dropped_count,
                "problems": len(check_layout(result, bounds, config)),
                "duration_ms": duration_ms,
            })

    index_path = batch_dir / "index.csv"
    if rows:
        with open(index_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)
    return batch_dir
