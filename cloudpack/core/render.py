# cloudpack/core/render.py
"""
Matplotlib PNG rendering: cloud.png (labels only) and debug.png
(usable area, buffered boxes, spiral center). Surface units are pixels, y down.
"""

from __future__ import annotations

import warnings
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle
from shapely.geometry.base import BaseGeometry

from cloudpack.core.config import DEFAULT_FONT_FAMILY, INNER_MARGIN, RENDER_DPI
from cloudpack.core.geometry import OccupancyIndex, usable_area
from cloudpack.core.types import LayoutConfig, LayoutResult, SurfaceBounds


def _new_fig(bounds: SurfaceBounds, dpi: int = RENDER_DPI, scale: int = 1) -> tuple[plt.Figure, plt.Axes]:
    # Full-canvas axes in surface coordinates, so 1 unit = 1 px at scale 1
    w = max(1.0, bounds.width)
    h = max(1.0, bounds.height)
    fig = plt.figure(figsize=(w * scale / dpi, h * scale / dpi), dpi=dpi, constrained_layout=False)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, w)
    ax.set_ylim(h, 0)
    ax.axis("off")
    return fig, ax


def _px_to_pt(px: float, dpi: int, scale: int) -> float:
    return px * scale * 72.0 / dpi


def _draw_labels(ax: plt.Axes, result: LayoutResult, font_family: str, dpi: int, scale: int) -> None:
    for p in result.placed:
        cx, cy = p.center
        ax.text(
            cx, cy, p.text,
            fontsize=_px_to_pt(p.font_size, dpi, scale),
            fontfamily=font_family,
            fontweight="bold",
            ha="center", va="center",
            color=p.color.rgb(),
            zorder=6,
        )


def _draw_geom_outline(ax: plt.Axes, geom: BaseGeometry, **kwargs) -> None:
    if geom is None or geom.is_empty:
        return
    parts = [geom] if geom.geom_type == "Polygon" else list(getattr(geom, "geoms", []))
    for g in parts:
        xy = np.array(g.exterior.coords)
        ax.plot(xy[:, 0], xy[:, 1], **kwargs)


def _save(fig: plt.Figure, output_path: str | Path, dpi: int, **kwargs) -> None:
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*constrained_layout.*", category=UserWarning)
        warnings.filterwarnings("ignore", message=".*findfont.*", category=UserWarning)
        fig.savefig(output_path, dpi=dpi, facecolor="white", **kwargs)
    plt.close(fig)


def render_cloud(
    result: LayoutResult,
    bounds: SurfaceBounds,
    output_path: str | Path,
    font_family: str = DEFAULT_FONT_FAMILY,
    dpi: int = RENDER_DPI,
    scale: int = 1,
) -> None:
    """Render placed labels only. scale multiplies output resolution (1x, 2x, 4x)."""
    fig, ax = _new_fig(bounds, dpi=dpi, scale=scale)
    _draw_labels(ax, result, font_family, dpi, scale)
    _save(fig, output_path, dpi)


def render_debug(
    result: LayoutResult,
    bounds: SurfaceBounds,
    config: LayoutConfig,
    output_path: str | Path,
    font_family: str = DEFAULT_FONT_FAMILY,
    dpi: int = RENDER_DPI,
    scale: int = 1,
) -> None:
    """Render labels with usable area, measured boxes, buffered occupancy and spiral center."""
    fig, ax = _new_fig(bounds, dpi=dpi, scale=scale)

    occupied = OccupancyIndex()
    for p in result.placed:
        occupied.add(p.bounds(config.collision_buffer))
    union = occupied.union()
    if not union.is_empty:
        parts = [union] if union.geom_type == "Polygon" else list(getattr(union, "geoms", []))
        for g in parts:
            xy = np.array(g.exterior.coords)
            ax.fill(xy[:, 0], xy[:, 1], facecolor="none", edgecolor="orange", linewidth=1, hatch="//", alpha=0.5)

    _draw_geom_outline(
        ax, usable_area(bounds.width, bounds.height, INNER_MARGIN),
        linestyle="--", linewidth=1, color="gray", label="usable",
    )
    for p in result.placed:
        ax.add_patch(Rectangle((p.x, p.y), p.width, p.height, fill=False, edgecolor=p.color.rgb(), linewidth=1))
    cx, cy = bounds.center
    ax.scatter([cx], [cy], s=12, color="black", marker="+", zorder=7)

    _draw_labels(ax, result, font_family, dpi, scale)
    if result.dropped:
        ax.text(
            INNER_MARGIN, max(1.0, bounds.height) - 2,
            f"{len(result.dropped)} more not shown",
            fontsize=_px_to_pt(10, dpi, scale), color="gray", ha="left", va="bottom", zorder=8,
        )
    _save(fig, output_path, dpi)
