# cloudpack/core/types.py
"""
Dataclasses for layout inputs (labels, surface, config) and outputs
(placed labels, layout result, color).
"""

from __future__ import annotations

import colorsys
from dataclasses import dataclass, field

from cloudpack.core.config import (
    ANIMATION_DELAY_STEP_MS,
    DEFAULT_COLLISION_BUFFER,
    DEFAULT_MAX_FONT_SIZE,
    DEFAULT_MAX_LABELS,
    DEFAULT_MAX_PLACEMENT_ATTEMPTS,
    DEFAULT_MIN_FONT_SIZE,
    SEED,
)


@dataclass(frozen=True)
class WeightedLabel:
    """Label text with priority weight and magnitude (0..100, drives color)."""
    text: str
    weight: float
    magnitude: float = 0.0


@dataclass(frozen=True)
class SurfaceBounds:
    """Placement area in surface units. Zero width or height is a degenerate surface."""
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.width / 2.0, self.height / 2.0)

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class LayoutConfig:
    """Recognized layout options; defaults match the dashboard word cloud."""
    max_labels: int = DEFAULT_MAX_LABELS
    min_font_size: float = DEFAULT_MIN_FONT_SIZE
    max_font_size: float = DEFAULT_MAX_FONT_SIZE
    max_placement_attempts: int = DEFAULT_MAX_PLACEMENT_ATTEMPTS
    collision_buffer: float = DEFAULT_COLLISION_BUFFER
    seed: int | None = SEED


@dataclass(frozen=True)
class Color:
    """HSL color: hue in degrees, saturation and lightness in percent."""
    hue: int
    saturation: int
    lightness: int

    def css(self) -> str:
        return f"hsl({self.hue}, {self.saturation}%, {self.lightness}%)"

    def rgb(self) -> tuple[float, float, float]:
        """(r, g, b) floats in [0, 1]."""
        return colorsys.hls_to_rgb(self.hue / 360.0, self.lightness / 100.0, self.saturation / 100.0)

    def to_hex(self) -> str:
        r, g, b = self.rgb()
        return "#{:02x}{:02x}{:02x}".format(*(int(round(c * 255)) for c in (r, g, b)))


@dataclass
class PlacedLabel:
    """
    A label with its computed box. (x, y) is the top-left corner;
    width/height are the measured box at font_size.
    """
    text: str
    weight: float
    magnitude: float
    font_size: float
    x: float
    y: float
    width: float
    height: float
    color: Color
    ordinal_index: int = 0

    @property
    def animation_delay_ms(self) -> int:
        return self.ordinal_index * ANIMATION_DELAY_STEP_MS

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    def bounds(self, buffer: float = 0.0) -> tuple[float, float, float, float]:
        """(minx, miny, maxx, maxy), optionally grown by buffer on every side."""
        return (
            self.x - buffer,
            self.y - buffer,
            self.x + self.width + buffer,
            self.y + self.height + buffer,
        )

    def title(self) -> str:
        """Tooltip text, e.g. 'teamwork: 12 (8.5%)'."""
        return f"{self.text}: {self.weight:g} ({self.magnitude:.1f}%)"


@dataclass
class LayoutResult:
    """Placed labels in priority order, plus labels that found no free slot."""
    placed: list[PlacedLabel] = field(default_factory=list)
    dropped: list[WeightedLabel] = field(default_factory=list)

    @property
    def placed_count(self) -> int:
        return len(self.placed)

    @property
    def dropped_count(self) -> int:
        return len(self.dropped)

    @property
    def is_empty(self) -> bool:
        return not self.placed and not self.dropped
