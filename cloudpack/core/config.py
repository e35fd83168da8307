# cloudpack/core/config.py
"""
Central configuration for word-cloud layout.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"

# ----- Surface -----
INNER_MARGIN: float = 10.0
"""Margin (units) reserved from every surface edge before placement."""

DEFAULT_SURFACE_WIDTH: float = 800.0
DEFAULT_SURFACE_HEIGHT: float = 350.0
"""Default surface; 350 matches the dashboard card height."""

# ----- Layout defaults (LayoutConfig) -----
DEFAULT_MAX_LABELS: int = 50
DEFAULT_MIN_FONT_SIZE: float = 16.0
DEFAULT_MAX_FONT_SIZE: float = 48.0
DEFAULT_MAX_PLACEMENT_ATTEMPTS: int = 500
DEFAULT_COLLISION_BUFFER: float = 10.0
"""Gap added on every side of a box before overlap and containment tests."""

# ----- Spiral search -----
SPIRAL_START_RADIUS: float = 5.0
"""Initial radius so the first candidate is not the exact center."""

SPIRAL_RADIUS_STEP: float = 0.75
"""Radius growth per step."""

SPIRAL_ANGLE_SCALE: float = 10.0
"""Angular step per attempt is 1 / (radius / SPIRAL_ANGLE_SCALE)."""

# ----- Determinism -----
SEED: int | None = 42
"""Seed for per-label spiral start angles; None selects golden-angle offsets."""

GOLDEN_ANGLE_RAD: float = 2.399963229728653
"""pi * (3 - sqrt(5)); start angle step per ordinal when SEED is None."""

# ----- Text metrics -----
DEFAULT_FONT_FAMILY: str = "DejaVu Sans"

TEXT_HEIGHT_RATIO: float = 1.2
"""Label box height = font_size * TEXT_HEIGHT_RATIO."""

APPROX_CHAR_WIDTH_RATIO: float = 0.6
"""Average glyph advance as a fraction of font size (ApproximateMetrics)."""

# ----- Color -----
HUE_PER_MAGNITUDE: float = 3.6
"""Magnitude 0..100 maps to hue 0..360."""

SATURATION_BASE: int = 85
SATURATION_STEP: int = 5
SATURATION_CYCLE: int = 3

LIGHTNESS_BASE: int = 45
LIGHTNESS_STEP: int = 3
LIGHTNESS_CYCLE: int = 4

# ----- Presentation -----
ANIMATION_DELAY_STEP_MS: int = 40
"""Fade-in stagger per ordinal index."""

RENDER_DPI: int = 100
SVG_FONT_WEIGHT: str = "bold"

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("CLOUDPACK_LOG_LEVEL", "INFO").upper()
"""Level used by CLI/UI logging.basicConfig. Set env CLOUDPACK_LOG_LEVEL=DEBUG for per-label drops."""
