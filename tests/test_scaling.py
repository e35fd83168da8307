"""
Deterministic tests for font_size_for (sqrt scaling, bounds) and color_for (HSL from magnitude/index).
"""

from __future__ import annotations

import pytest

from cloudpack.core.scaling import color_for, font_size_for
from cloudpack.core.types import Color, LayoutConfig


def test_font_size_max_weight_gets_max_font() -> None:
    cfg = LayoutConfig(min_font_size=16, max_font_size=48)
    assert font_size_for(10, 10, cfg) == pytest.approx(48.0)


def test_font_size_zero_weight_gets_min_font() -> None:
    cfg = LayoutConfig(min_font_size=16, max_font_size=48)
    assert font_size_for(0, 10, cfg) == pytest.approx(16.0)


def test_font_size_is_sqrt_of_ratio() -> None:
    cfg = LayoutConfig(min_font_size=16, max_font_size=48)
    # sqrt(0.25) = 0.5 -> halfway between 16 and 48
    assert font_size_for(2.5, 10, cfg) == pytest.approx(32.0)


def test_font_size_all_zero_weights_gives_min() -> None:
    cfg = LayoutConfig(min_font_size=12, max_font_size=40)
    assert font_size_for(0, 0, cfg) == 12


def test_font_size_stays_in_range() -> None:
    cfg = LayoutConfig(min_font_size=10, max_font_size=20)
    for w in (0, 0.1, 1, 3, 7, 9.99, 10, 25):
        size = font_size_for(w, 10, cfg)
        assert 10 <= size <= 20


def test_font_size_monotonic_in_weight() -> None:
    cfg = LayoutConfig()
    sizes = [font_size_for(w, 100, cfg) for w in (1, 5, 20, 50, 100)]
    assert sizes == sorted(sizes)


def test_color_hue_from_magnitude() -> None:
    c = color_for(50, 0)
    assert c == Color(hue=180, saturation=85, lightness=45)
    assert c.css() == "hsl(180, 85%, 45%)"


def test_color_hue_wraps_at_100() -> None:
    assert color_for(100, 0).hue == 0
    assert color_for(0, 0).hue == 0
    assert color_for(12.5, 0).hue == 45


def test_color_index_perturbs_saturation_and_lightness() -> None:
    assert color_for(50, 1) == Color(hue=180, saturation=90, lightness=48)
    assert color_for(50, 5) == Color(hue=180, saturation=95, lightness=48)
    assert color_for(50, 12) == Color(hue=180, saturation=85, lightness=45)


def test_color_deterministic() -> None:
    assert color_for(33.3, 7) == color_for(33.3, 7)


def test_color_hex_and_rgb() -> None:
    c = Color(hue=0, saturation=100, lightness=50)
    assert c.to_hex() == "#ff0000"
    r, g, b = c.rgb()
    assert r == pytest.approx(1.0) and g == pytest.approx(0.0) and b == pytest.approx(0.0)
