"""
Spiral search: candidate generation, deterministic start angles, first-fit
placement that respects the usable area and already-placed labels.
"""

from __future__ import annotations

import math

import pytest

from cloudpack.core.geometry import boxes_overlap, contains_box, usable_bounds
from cloudpack.core.scaling import color_for
from cloudpack.core.spiral import spiral_candidates, start_angle_for, try_place
from cloudpack.core.types import LayoutConfig, PlacedLabel, SurfaceBounds


def _placed_at(x: float, y: float, w: float, h: float) -> PlacedLabel:
    return PlacedLabel(
        text="taken", weight=1.0, magnitude=0.0, font_size=16.0,
        x=x, y=y, width=w, height=h, color=color_for(0, 0),
    )


def test_spiral_candidates_count_and_radius() -> None:
    pts = list(spiral_candidates((100.0, 100.0), 0.0, 20))
    assert len(pts) == 20
    radii = [math.hypot(x - 100.0, y - 100.0) for x, y in pts]
    # radius starts at 5 and grows by 0.75 before each candidate
    assert radii[0] == pytest.approx(5.75)
    assert radii[-1] == pytest.approx(5.0 + 0.75 * 20)
    assert radii == sorted(radii)


def test_spiral_first_angle_step() -> None:
    (x, y), = list(spiral_candidates((0.0, 0.0), 0.0, 1))
    # angle += 1 / (5 / 10) = 2 rad on the first step
    assert math.atan2(y, x) == pytest.approx(2.0)


def test_start_angle_deterministic_with_seed() -> None:
    cfg = LayoutConfig(seed=7)
    a = [start_angle_for(i, cfg) for i in range(10)]
    b = [start_angle_for(i, cfg) for i in range(10)]
    assert a == b
    assert all(0.0 <= v < 2 * math.pi for v in a)
    assert len(set(a)) == len(a)


def test_start_angle_depends_on_seed() -> None:
    assert start_angle_for(3, LayoutConfig(seed=1)) != start_angle_for(3, LayoutConfig(seed=2))


def test_start_angle_golden_offsets_without_seed() -> None:
    cfg = LayoutConfig(seed=None)
    assert start_angle_for(0, cfg) == 0.0
    assert start_angle_for(1, cfg) == pytest.approx(2.399963229728653)
    assert all(0.0 <= start_angle_for(i, cfg) < 2 * math.pi for i in range(50))


def test_try_place_near_center_on_empty_surface() -> None:
    bounds = SurfaceBounds(400, 400)
    cfg = LayoutConfig()
    pos = try_place((100.0, 30.0), bounds.center, [], bounds, cfg, 0.0)
    assert pos is not None
    x, y = pos
    cx, cy = x + 50.0, y + 15.0
    assert math.hypot(cx - 200.0, cy - 200.0) == pytest.approx(5.75)


def test_try_place_avoids_existing_label() -> None:
    bounds = SurfaceBounds(400, 400)
    cfg = LayoutConfig(collision_buffer=10)
    taken = _placed_at(150, 185, 100, 30)
    pos = try_place((100.0, 30.0), bounds.center, [taken], bounds, cfg, 0.0)
    assert pos is not None
    x, y = pos
    mine = (x - 10, y - 10, x + 110, y + 40)
    assert not boxes_overlap(mine, taken.bounds(10))
    assert contains_box(usable_bounds(400, 400), mine)


def test_try_place_oversized_box_not_found() -> None:
    bounds = SurfaceBounds(200, 100)
    cfg = LayoutConfig()
    assert try_place((500.0, 20.0), bounds.center, [], bounds, cfg, 0.0) is None
    # Fits the surface but not the surface minus margin and buffer
    assert try_place((170.0, 20.0), bounds.center, [], bounds, cfg, 0.0) is None


def test_try_place_exhausts_budget_when_full() -> None:
    bounds = SurfaceBounds(120, 80)
    cfg = LayoutConfig(collision_buffer=10, max_placement_attempts=500)
    taken = _placed_at(36, 28, 48, 24)
    assert try_place((48.0, 24.0), bounds.center, [taken], bounds, cfg, 1.0) is None


def test_try_place_single_step_budget() -> None:
    bounds = SurfaceBounds(400, 400)
    cfg = LayoutConfig(max_placement_attempts=1)
    # One step is enough on an empty surface
    assert try_place((10.0, 10.0), bounds.center, [], bounds, cfg, 0.0) is not None
