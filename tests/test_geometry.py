"""
Deterministic tests for geometry: usable area, buffered boxes, containment,
strict overlap and the occupancy index.
"""

from __future__ import annotations

import pytest

from cloudpack.core.geometry import (
    OccupancyIndex,
    boxes_overlap,
    buffered_box,
    contains_box,
    usable_area,
    usable_bounds,
)


def test_usable_bounds_reserves_margin() -> None:
    assert usable_bounds(400, 300, 10) == (10, 10, 390, 290)


def test_usable_area_polygon() -> None:
    area = usable_area(100, 60, 10)
    assert area.geom_type == "Polygon"
    assert area.area == pytest.approx(80 * 40)


def test_usable_area_empty_when_margin_fills_surface() -> None:
    assert usable_area(15, 100, 10).is_empty
    assert usable_area(0, 0, 10).is_empty


def test_buffered_box() -> None:
    assert buffered_box(10, 20, 30, 5, 2) == (8, 18, 42, 27)
    assert buffered_box(10, 20, 30, 5) == (10, 20, 40, 25)


def test_contains_box() -> None:
    outer = (0, 0, 10, 10)
    assert contains_box(outer, (2, 2, 4, 4)) is True
    assert contains_box(outer, (0, 0, 10, 10)) is True
    assert contains_box(outer, (8, 8, 12, 12)) is False


def test_boxes_overlap_strict() -> None:
    a = (0, 0, 10, 10)
    assert boxes_overlap(a, (5, 5, 15, 15)) is True
    # Touching edges do not count as overlap
    assert boxes_overlap(a, (10, 0, 20, 10)) is False
    assert boxes_overlap(a, (0, 10, 10, 20)) is False
    assert boxes_overlap(a, (20, 20, 30, 30)) is False


def test_occupancy_index_overlaps() -> None:
    occ = OccupancyIndex()
    assert len(occ) == 0
    assert occ.overlaps((0, 0, 5, 5)) is False
    occ.add((0, 0, 10, 10))
    occ.add((50, 50, 60, 60))
    assert len(occ) == 2
    assert occ.overlaps((55, 55, 70, 70)) is True
    assert occ.overlaps((10, 10, 20, 20)) is False
    assert occ.overlaps((20, 20, 40, 40)) is False


def test_occupancy_index_agrees_with_pairwise_test() -> None:
    boxes = [(0, 0, 10, 10), (30, 0, 40, 10), (0, 30, 10, 40)]
    occ = OccupancyIndex()
    for b in boxes:
        occ.add(b)
    probes = [(5, 5, 35, 8), (12, 12, 28, 28), (9, 39, 11, 41), (40, 10, 50, 20)]
    for p in probes:
        assert occ.overlaps(p) == any(boxes_overlap(p, b) for b in boxes)


def test_occupancy_union_area() -> None:
    occ = OccupancyIndex()
    assert occ.union().is_empty
    occ.add((0, 0, 10, 10))
    occ.add((5, 0, 15, 10))
    assert occ.union().area == pytest.approx(150)
