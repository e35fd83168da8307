# cloudpack/core/runner.py
"""
CLI entrypoint: load keyword records, compute the word-cloud layout, export
layout.json, cloud.svg and (unless --no-render) cloud.png / debug.png.
Batch mode (--sizes with several sizes or a directory of keyword files) writes index.csv.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from cloudpack.core.config import (
    DEFAULT_COLLISION_BUFFER,
    DEFAULT_FONT_FAMILY,
    DEFAULT_MAX_FONT_SIZE,
    DEFAULT_MAX_LABELS,
    DEFAULT_MAX_PLACEMENT_ATTEMPTS,
    DEFAULT_MIN_FONT_SIZE,
    DEFAULT_SURFACE_HEIGHT,
    DEFAULT_SURFACE_WIDTH,
    LOG_LEVEL,
    REPORTS_DIR,
    SEED,
)
from cloudpack.core.error_codes import NO_LABELS, NO_LABELS_PLACED, LayoutInputError, user_message
from cloudpack.core.io import load_labels
from cloudpack.core.layout import compute_layout
from cloudpack.core.render_svg import export_svg
from cloudpack.core.reporting import ensure_report_dir, write_layout_json, write_run_metadata_json
from cloudpack.core.text_metrics import ApproximateMetrics, MetricsAdapter, PillowMetrics
from cloudpack.core.types import LayoutConfig, SurfaceBounds

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Word-cloud layout: place weighted keywords on a surface.")
    p.add_argument("--labels-file", type=str, required=True, dest="labels_file", help="Keyword records (.json/.csv) or a directory of them")
    p.add_argument("--width", type=float, default=DEFAULT_SURFACE_WIDTH, help="Surface width")
    p.add_argument("--height", type=float, default=DEFAULT_SURFACE_HEIGHT, help="Surface height")
    p.add_argument("--sizes", type=str, default="", help="Batch mode: surface sizes e.g. '400x400,800x350'")
    p.add_argument("--max-labels", type=int, default=DEFAULT_MAX_LABELS, dest="max_labels", help="Labels considered (heaviest first)")
    p.add_argument("--min-font-size", type=float, default=DEFAULT_MIN_FONT_SIZE, dest="min_font_size")
    p.add_argument("--max-font-size", type=float, default=DEFAULT_MAX_FONT_SIZE, dest="max_font_size")
    p.add_argument("--max-attempts", type=int, default=DEFAULT_MAX_PLACEMENT_ATTEMPTS, dest="max_attempts", help="Spiral steps per label")
    p.add_argument("--buffer", type=float, default=DEFAULT_COLLISION_BUFFER, help="Gap around each label")
    p.add_argument("--seed", type=int, default=SEED, help="Start-angle seed")
    p.add_argument("--golden-angle", action="store_true", dest="golden_angle", help="Ignore --seed; use golden-angle start offsets")
    p.add_argument("--font-family", type=str, default=DEFAULT_FONT_FAMILY, dest="font_family")
    p.add_argument("--approximate-metrics", action="store_true", dest="approximate_metrics", help="Estimate text size without font files")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--batch-limit", type=int, default=None, dest="batch_limit", help="Max keyword files in batch")
    p.add_argument("--no-render", action="store_true", dest="no_render", help="Skip PNG rendering")
    return p.parse_args(argv)


def _resolve_path(repo_root: Path, path_arg: str) -> Path:
    """Resolve path: if relative, from repo root; else as-is then resolve."""
    p = Path(path_arg)
    if not p.is_absolute():
        p = repo_root / p
    return p.resolve()


def _config_from_args(args: argparse.Namespace) -> LayoutConfig:
    return LayoutConfig(
        max_labels=args.max_labels,
        min_font_size=args.min_font_size,
        max_font_size=args.max_font_size,
        max_placement_attempts=args.max_attempts,
        collision_buffer=args.buffer,
        seed=None if args.golden_angle else args.seed,
    )


def _metrics_from_args(args: argparse.Namespace) -> MetricsAdapter:
    if args.approximate_metrics:
        return ApproximateMetrics()
    return PillowMetrics(args.font_family)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    args = _parse_args(argv)
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()
    config = _config_from_args(args)
    metrics = _metrics_from_args(args)
    source = _resolve_path(repo_root, args.labels_file)

    try:
        if source.is_dir() or "," in args.sizes:
            from cloudpack.core.batch import parse_sizes, run_batch
            sizes = parse_sizes(args.sizes) if args.sizes else [(args.width, args.height)]
            out = run_batch(
                run_name=args.run_name,
                source=source,
                sizes=sizes,
                config=config,
                metrics=metrics,
                repo_root=repo_root,
                font_family=args.font_family,
                limit=args.batch_limit,
            )
            print(out / "index.csv")
            return 0

        if args.sizes:
            from cloudpack.core.batch import parse_sizes
            args.width, args.height = parse_sizes(args.sizes)[0]
        labels = load_labels(source)
        bounds = SurfaceBounds(width=args.width, height=args.height)
        result = compute_layout(labels, bounds, config, metrics)
    except LayoutInputError as e:
        logger.error("%s", e)
        print(user_message(e.error_code), file=sys.stderr)
        return 2

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    layout_path = write_layout_json(report_dir, result, bounds, config, n_input=len(labels))
    svg_path = export_svg(result, bounds, report_dir / "cloud.svg", font_family=args.font_family)
    write_run_metadata_json(
        report_dir,
        args.run_name,
        args.labels_file,
        bounds,
        config,
        font_family=args.font_family,
        metrics_name="approximate" if args.approximate_metrics else "pillow",
    )
    outputs = [layout_path, svg_path]
    if not args.no_render:
        from cloudpack.core.render import render_cloud, render_debug
        cloud_path = report_dir / "cloud.png"
        debug_path = report_dir / "debug.png"
        render_cloud(result, bounds, cloud_path, font_family=args.font_family)
        render_debug(result, bounds, config, debug_path, font_family=args.font_family)
        outputs += [cloud_path, debug_path]

    for p in outputs:
        print(p)
    print(f"Placed {result.placed_count}, dropped {result.dropped_count}")
    if not labels:
        print(user_message(NO_LABELS))
    elif not result.placed:
        print(user_message(NO_LABELS_PLACED))
    return 0


if __name__ == "__main__":
    sys.exit(main())
