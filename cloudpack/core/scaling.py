# cloudpack/core/scaling.py
"""
Weight -> font size (square-root mapping) and magnitude/index -> HSL color.
"""

from __future__ import annotations

import math

from cloudpack.core.config import (
    HUE_PER_MAGNITUDE,
    LIGHTNESS_BASE,
    LIGHTNESS_CYCLE,
    LIGHTNESS_STEP,
    SATURATION_BASE,
    SATURATION_CYCLE,
    SATURATION_STEP,
)
from cloudpack.core.types import Color, LayoutConfig


def font_size_for(weight: float, max_weight_in_set: float, config: LayoutConfig) -> float:
    """
    min_font_size + sqrt(weight / max_weight_in_set) * (max_font_size - min_font_size),
    clamped to [min_font_size, max_font_size]. sqrt keeps heavy labels from dominating.
    A zero max weight gives every label min_font_size.
    """
    lo, hi = config.min_font_size, config.max_font_size
    if max_weight_in_set <= 0 or weight <= 0:
        return lo
    ratio = math.sqrt(min(1.0, weight / max_weight_in_set))
    return max(lo, min(hi, lo + ratio * (hi - lo)))


def color_for(magnitude: float, ordinal_index: int) -> Color:
    """Hue from magnitude; ordinal index nudges saturation/lightness so neighbours differ."""
    hue = int(math.floor(magnitude * HUE_PER_MAGNITUDE)) % 360
    saturation = SATURATION_BASE + (ordinal_index % SATURATION_CYCLE) * SATURATION_STEP
    lightness = LIGHTNESS_BASE + (ordinal_index % LIGHTNESS_CYCLE) * LIGHTNESS_STEP
    return Color(hue=hue, saturation=saturation, lightness=lightness)
