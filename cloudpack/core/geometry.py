# cloudpack/core/geometry.py
"""
Geometry helpers: usable area, buffered label boxes, containment,
and a numpy-backed occupancy index for axis-aligned overlap tests.
"""

from __future__ import annotations

import numpy as np
from shapely.geometry import Polygon, box

from cloudpack.core.config import INNER_MARGIN

Bounds = tuple[float, float, float, float]


def usable_bounds(width: float, height: float, margin: float = INNER_MARGIN) -> Bounds:
    """(minx, miny, maxx, maxy) of the surface minus the inner margin. May be inverted when tiny."""
    return (margin, margin, width - margin, height - margin)


def usable_area(width: float, height: float, margin: float = INNER_MARGIN) -> Polygon:
    """Usable area as a shapely polygon; empty when the margin leaves no room."""
    minx, miny, maxx, maxy = usable_bounds(width, height, margin)
    if maxx <= minx or maxy <= miny:
        return Polygon()
    return box(minx, miny, maxx, maxy)


def buffered_box(x: float, y: float, width: float, height: float, buffer: float = 0.0) -> Bounds:
    """Box with top-left (x, y), grown by buffer on every side."""
    return (x - buffer, y - buffer, x + width + buffer, y + height + buffer)


def bounds_to_polygon(b: Bounds) -> Polygon:
    """Bounds as a shapely polygon, for rendering and reporting."""
    minx, miny, maxx, maxy = b
    if maxx <= minx or maxy <= miny:
        return Polygon()
    return box(minx, miny, maxx, maxy)


def contains_box(outer: Bounds, inner: Bounds) -> bool:
    """True if inner lies fully within outer (edges may touch)."""
    return (
        inner[0] >= outer[0]
        and inner[1] >= outer[1]
        and inner[2] <= outer[2]
        and inner[3] <= outer[3]
    )


def boxes_overlap(a: Bounds, b: Bounds) -> bool:
    """Strict axis-aligned overlap test; touching edges do not overlap."""
    return a[0] < b[2] and a[2] > b[0] and a[1] < b[3] and a[3] > b[1]


class OccupancyIndex:
    """
    Buffered boxes of labels placed so far, kept as an (N, 4) array so each
    candidate is tested against all of them in one vectorized comparison.
    Linear in N; swap for a grid or STRtree if label counts grow.
    """

    def __init__(self) -> None:
        self._boxes = np.zeros((0, 4), dtype=float)

    def __len__(self) -> int:
        return int(self._boxes.shape[0])

    def add(self, b: Bounds) -> None:
        self._boxes = np.vstack([self._boxes, np.asarray(b, dtype=float).reshape(1, 4)])

    def overlaps(self, b: Bounds) -> bool:
        if self._boxes.shape[0] == 0:
            return False
        occ = self._boxes
        hit = (
            (b[0] < occ[:, 2])
            & (b[2] > occ[:, 0])
            & (b[1] < occ[:, 3])
            & (b[3] > occ[:, 1])
        )
        return bool(hit.any())

    def union(self) -> Polygon:
        """Union of occupied boxes (for debug rendering)."""
        from shapely.ops import unary_union

        polys = [bounds_to_polygon(tuple(row)) for row in self._boxes]
        polys = [p for p in polys if not p.is_empty]
        if not polys:
            return Polygon()
        return unary_union(polys)
