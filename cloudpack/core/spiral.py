# cloudpack/core/spiral.py
"""
Archimedean spiral search: walk outward from the surface center and return
the first candidate whose buffered box fits the usable area and clears every
placed box. Greedy first-fit, no scoring.
"""

from __future__ import annotations

import math
from typing import Iterator, Sequence

import numpy as np

from cloudpack.core.config import (
    GOLDEN_ANGLE_RAD,
    INNER_MARGIN,
    SPIRAL_ANGLE_SCALE,
    SPIRAL_RADIUS_STEP,
    SPIRAL_START_RADIUS,
)
from cloudpack.core.geometry import OccupancyIndex, buffered_box, contains_box, usable_bounds
from cloudpack.core.types import LayoutConfig, PlacedLabel, SurfaceBounds


def start_angle_for(ordinal_index: int, config: LayoutConfig) -> float:
    """
    Spiral start angle in [0, 2*pi) for the label at ordinal_index.
    Seeded: drawn from a generator keyed on (seed, index). Unseeded: golden-angle offsets.
    """
    if config.seed is None:
        return (ordinal_index * GOLDEN_ANGLE_RAD) % (2.0 * math.pi)
    rng = np.random.default_rng([config.seed, ordinal_index])
    return float(rng.uniform(0.0, 2.0 * math.pi))


def spiral_candidates(
    center: tuple[float, float],
    start_angle: float,
    max_steps: int,
) -> Iterator[tuple[float, float]]:
    """Yield up to max_steps candidate centers; angular step shrinks as the radius grows."""
    cx, cy = center
    angle = start_angle
    radius = SPIRAL_START_RADIUS
    for _ in range(max_steps):
        angle += 1.0 / (radius / SPIRAL_ANGLE_SCALE)
        radius += SPIRAL_RADIUS_STEP
        yield (cx + radius * math.cos(angle), cy + radius * math.sin(angle))


def try_place(
    box: tuple[float, float],
    center: tuple[float, float],
    already_placed: Sequence[PlacedLabel] | OccupancyIndex,
    bounds: SurfaceBounds,
    config: LayoutConfig,
    start_angle: float,
) -> tuple[float, float] | None:
    """
    Return the top-left (x, y) for a (width, height) box, or None when the
    attempt budget runs out. The box grown by collision_buffer must lie inside
    the surface minus INNER_MARGIN and must not overlap any placed box grown
    the same way.
    """
    width, height = box
    buf = config.collision_buffer
    area = usable_bounds(bounds.width, bounds.height, INNER_MARGIN)
    if width + 2 * buf > area[2] - area[0] or height + 2 * buf > area[3] - area[1]:
        # Cannot fit anywhere; walking the spiral would only exhaust the budget.
        return None

    if isinstance(already_placed, OccupancyIndex):
        occupied = already_placed
    else:
        occupied = OccupancyIndex()
        for p in already_placed:
            occupied.add(p.bounds(buf))

    for px, py in spiral_candidates(center, start_angle, config.max_placement_attempts):
        x = px - width / 2.0
        y = py - height / 2.0
        candidate = buffered_box(x, y, width, height, buf)
        if not contains_box(area, candidate):
            continue
        if occupied.overlaps(candidate):
            continue
        return (x, y)
    return None
