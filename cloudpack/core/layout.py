# cloudpack/core/layout.py
"""
Word-cloud layout orchestration with collision avoidance.
Orders labels by weight (heaviest first), truncates to max_labels, maintains
occupied boxes and places one label at a time; misses go to dropped.
"""

from __future__ import annotations

import logging
from typing import Sequence

from cloudpack.core.geometry import OccupancyIndex
from cloudpack.core.scaling import color_for, font_size_for
from cloudpack.core.spiral import start_angle_for, try_place
from cloudpack.core.text_metrics import MetricsAdapter, default_metrics
from cloudpack.core.types import (
    LayoutConfig,
    LayoutResult,
    PlacedLabel,
    SurfaceBounds,
    WeightedLabel,
)
from cloudpack.core.validate import validate_bounds, validate_config, validate_labels

logger = logging.getLogger(__name__)


def _order_labels_by_weight(labels: Sequence[WeightedLabel]) -> list[WeightedLabel]:
    """Heaviest first; sorted() is stable so ties keep input order."""
    return sorted(labels, key=lambda lab: -lab.weight)


def select_labels(labels: Sequence[WeightedLabel], config: LayoutConfig) -> list[WeightedLabel]:
    """Labels that will be attempted, in priority order. The rest are never considered."""
    return _order_labels_by_weight(labels)[: config.max_labels]


def compute_layout(
    labels: Sequence[WeightedLabel],
    bounds: SurfaceBounds,
    config: LayoutConfig | None = None,
    metrics: MetricsAdapter | None = None,
) -> LayoutResult:
    """
    Place labels on the surface. Returns LayoutResult(placed, dropped) where
    placed + dropped covers exactly the top max_labels labels by weight.
    Raises LayoutInputError for contract violations; metrics errors propagate.
    """
    config = config or LayoutConfig()
    validate_config(config)
    validate_bounds(bounds)
    validate_labels(labels)

    if not labels:
        return LayoutResult(placed=[], dropped=[])

    selected = select_labels(labels, config)
    if not selected:
        return LayoutResult(placed=[], dropped=[])
    if bounds.area == 0:
        logger.info("Zero-area surface %sx%s; dropping %d labels", bounds.width, bounds.height, len(selected))
        return LayoutResult(placed=[], dropped=list(selected))

    if metrics is None:
        metrics = default_metrics()

    max_weight = max(lab.weight for lab in selected)
    if max_weight <= 0:
        max_weight = 1.0

    center = bounds.center
    occupied = OccupancyIndex()
    placed: list[PlacedLabel] = []
    dropped: list[WeightedLabel] = []

    for index, label in enumerate(selected):
        font_size = font_size_for(label.weight, max_weight, config)
        width, height = metrics.measure(label.text, font_size)
        pos = try_place(
            (width, height),
            center,
            occupied,
            bounds,
            config,
            start_angle_for(index, config),
        )
        if pos is None:
            logger.debug("Dropped %r (weight=%s, font=%.1f, box=%.1fx%.1f)", label.text, label.weight, font_size, width, height)
            dropped.append(label)
            continue
        x, y = pos
        placed_label = PlacedLabel(
            text=label.text,
            weight=label.weight,
            magnitude=label.magnitude,
            font_size=font_size,
            x=x,
            y=y,
            width=width,
            height=height,
            color=color_for(label.magnitude, index),
            ordinal_index=index,
        )
        occupied.add(placed_label.bounds(config.collision_buffer))
        placed.append(placed_label)

    logger.info(
        "Layout on %gx%g: placed %d, dropped %d of %d labels (%d beyond max_labels)",
        bounds.width,
        bounds.height,
        len(placed),
        len(dropped),
        len(labels),
        len(labels) - len(selected),
    )
    return LayoutResult(placed=placed, dropped=dropped)
