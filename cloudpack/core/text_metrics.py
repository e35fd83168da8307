# cloudpack/core/text_metrics.py
"""
Measure label boxes (width, height) in surface units.
MetricsAdapter is the injected capability; PillowMetrics measures with Pillow,
ApproximateMetrics is a pure estimate for headless runs and tests.
"""

from __future__ import annotations

import warnings
from typing import Protocol

from cloudpack.core.config import (
    APPROX_CHAR_WIDTH_RATIO,
    DEFAULT_FONT_FAMILY,
    TEXT_HEIGHT_RATIO,
)

_font_warning_emitted: set[str] = set()
_font_cache: dict[tuple[str, int], object] = {}


class MetricsAdapter(Protocol):
    """Same text and size must always yield the same box."""

    def measure(self, text: str, font_size: float) -> tuple[float, float]:
        ...


def _load_font(font_family: str, font_size: float):
    """Load PIL ImageFont once per (family, size); fallback with warning if font not found."""
    size = max(1, int(round(font_size)))
    key = (font_family, size)
    font = _font_cache.get(key)
    if font is None:
        font = _font_cache[key] = _open_font(font_family, size)
    return font


def _open_font(font_family: str, size: int):
    global _font_warning_emitted
    from PIL import ImageFont

    candidates = [
        font_family + ".ttf",
        font_family.replace(" ", "") + ".ttf",
        font_family.replace(" ", "") + "-Bold.ttf",
        "DejaVuSans-Bold.ttf",
        "DejaVuSans.ttf",
        "arialbd.ttf",
        "arial.ttf",
        "Arial.ttf",
    ]
    for name in candidates:
        try:
            return ImageFont.truetype(name, size=size)
        except (OSError, IOError):
            continue
    if font_family not in _font_warning_emitted:
        _font_warning_emitted.add(font_family)
        warnings.warn(f"Font not found: {font_family!r}; using default.", UserWarning)
    return ImageFont.load_default(size=size)


class PillowMetrics:
    """
    Width from Pillow's text advance at font_size; height = font_size * TEXT_HEIGHT_RATIO
    so boxes stack the same way regardless of glyph ascent/descent.
    """

    def __init__(self, font_family: str = DEFAULT_FONT_FAMILY) -> None:
        self.font_family = font_family
        self._cache: dict[tuple[str, float], tuple[float, float]] = {}

    def measure(self, text: str, font_size: float) -> tuple[float, float]:
        key = (text, float(font_size))
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        font = _load_font(self.font_family, font_size)
        width = float(font.getlength(text))
        # Loaded size is rounded to int.
        size_used = float(getattr(font, "size", font_size) or font_size)
        scale = font_size / max(1.0, size_used)
        box = (width * scale, font_size * TEXT_HEIGHT_RATIO)
        self._cache[key] = box
        return box


class ApproximateMetrics:
    """Average glyph advance estimate; no font files needed."""

    def __init__(self, char_width_ratio: float = APPROX_CHAR_WIDTH_RATIO) -> None:
        self.char_width_ratio = char_width_ratio

    def measure(self, text: str, font_size: float) -> tuple[float, float]:
        return (len(text) * font_size * self.char_width_ratio, font_size * TEXT_HEIGHT_RATIO)


def default_metrics(font_family: str = DEFAULT_FONT_FAMILY) -> MetricsAdapter:
    """Metrics adapter used when the caller injects none."""
    return PillowMetrics(font_family)
