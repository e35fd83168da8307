# cloudpack/core/validate.py
"""
Boundary validation of layout inputs (raise LayoutInputError) and
post-hoc invariant checks on a LayoutResult (return list of problems).
"""

from __future__ import annotations

import math
from typing import Iterable

from cloudpack.core.config import INNER_MARGIN
from cloudpack.core.error_codes import (
    INVALID_BOUNDS,
    INVALID_CONFIG,
    INVALID_LABEL,
    LayoutInputError,
)
from cloudpack.core.geometry import boxes_overlap, contains_box, usable_bounds
from cloudpack.core.types import LayoutConfig, LayoutResult, SurfaceBounds, WeightedLabel


def _finite(v: float) -> bool:
    try:
        return math.isfinite(float(v))
    except (TypeError, ValueError):
        return False


def validate_label(label: WeightedLabel) -> None:
    if not isinstance(label.text, str) or not label.text.strip():
        raise LayoutInputError(INVALID_LABEL, "label text must be a non-empty string")
    if not _finite(label.weight) or label.weight < 0:
        raise LayoutInputError(INVALID_LABEL, f"weight must be >= 0 for {label.text!r}, got {label.weight!r}")
    if not _finite(label.magnitude) or not 0 <= label.magnitude <= 100:
        raise LayoutInputError(
            INVALID_LABEL, f"magnitude must be in [0, 100] for {label.text!r}, got {label.magnitude!r}"
        )


def validate_labels(labels: Iterable[WeightedLabel]) -> None:
    for label in labels:
        validate_label(label)


def validate_bounds(bounds: SurfaceBounds) -> None:
    """Negative or non-finite sizes are rejected; zero is a degenerate but valid surface."""
    for name in ("width", "height"):
        v = getattr(bounds, name)
        if not _finite(v) or v < 0:
            raise LayoutInputError(INVALID_BOUNDS, f"surface {name} must be a finite number >= 0, got {v!r}")


def _non_negative_int(v: object) -> bool:
    return isinstance(v, int) and not isinstance(v, bool) and v >= 0


def validate_config(config: LayoutConfig) -> None:
    if not _non_negative_int(config.max_labels):
        raise LayoutInputError(INVALID_CONFIG, f"max_labels must be an integer >= 0, got {config.max_labels!r}")
    if not _non_negative_int(config.max_placement_attempts):
        raise LayoutInputError(
            INVALID_CONFIG,
            f"max_placement_attempts must be an integer >= 0, got {config.max_placement_attempts!r}",
        )
    if not _finite(config.min_font_size) or config.min_font_size <= 0:
        raise LayoutInputError(INVALID_CONFIG, f"min_font_size must be > 0, got {config.min_font_size!r}")
    if not _finite(config.max_font_size) or config.max_font_size < config.min_font_size:
        raise LayoutInputError(
            INVALID_CONFIG,
            f"max_font_size ({config.max_font_size!r}) must be >= min_font_size ({config.min_font_size!r})",
        )
    if not _finite(config.collision_buffer) or config.collision_buffer < 0:
        raise LayoutInputError(INVALID_CONFIG, f"collision_buffer must be >= 0, got {config.collision_buffer!r}")
    if config.seed is not None and not _non_negative_int(config.seed):
        raise LayoutInputError(INVALID_CONFIG, f"seed must be None or an integer >= 0, got {config.seed!r}")


def check_layout(
    result: LayoutResult,
    bounds: SurfaceBounds,
    config: LayoutConfig,
) -> list[str]:
    """
    Return human-readable violations of the no-overlap, containment and font-bounds
    invariants; empty list means the layout is consistent.
    """
    problems: list[str] = []
    area = usable_bounds(bounds.width, bounds.height, INNER_MARGIN)
    buf = config.collision_buffer
    for p in result.placed:
        if not contains_box(area, p.bounds()):
            problems.append(f"{p.text!r} lies outside the usable area")
        if not config.min_font_size <= p.font_size <= config.max_font_size:
            problems.append(f"{p.text!r} font size {p.font_size:.2f} outside configured range")
    for i, a in enumerate(result.placed):
        for b in result.placed[i + 1:]:
            if boxes_overlap(a.bounds(buf), b.bounds(buf)):
                problems.append(f"{a.text!r} overlaps {b.text!r}")
    return problems
