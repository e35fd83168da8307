# cloudpack/core/render_svg.py
"""
Export a layout as self-contained SVG: one <text> per placed label with its
color, a <title> tooltip and a staggered fade-in.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from cloudpack.core.config import DEFAULT_FONT_FAMILY, SVG_FONT_WEIGHT
from cloudpack.core.types import LayoutResult, SurfaceBounds

SVG_NS = "http://www.w3.org/2000/svg"

_FADE_IN_CSS = (
    "@keyframes fadeIn { from { opacity: 0; } to { opacity: 1; } } "
    "text { opacity: 0; animation: fadeIn 0.6s cubic-bezier(0.22, 1, 0.36, 1) forwards; }"
)


def layout_to_svg(
    result: LayoutResult,
    bounds: SurfaceBounds,
    font_family: str = DEFAULT_FONT_FAMILY,
    animate: bool = True,
) -> str:
    """SVG document text. Text is anchored at the middle of each box."""
    width = max(1.0, bounds.width)
    height = max(1.0, bounds.height)
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": f"{width:g}",
            "height": f"{height:g}",
            "viewBox": f"0 0 {width:g} {height:g}",
        },
    )
    if animate:
        style = ET.SubElement(root, "style")
        style.text = _FADE_IN_CSS

    g = ET.SubElement(root, "g", {"id": "labels", "font-family": font_family, "font-weight": SVG_FONT_WEIGHT})
    for p in result.placed:
        cx, cy = p.center
        attrs = {
            "x": f"{cx:.2f}",
            "y": f"{cy:.2f}",
            "font-size": f"{p.font_size:.2f}",
            "fill": p.color.css(),
            "text-anchor": "middle",
            "dominant-baseline": "central",
        }
        if animate:
            attrs["style"] = f"animation-delay: {p.animation_delay_ms}ms"
        text = ET.SubElement(g, "text", attrs)
        text.text = p.text
        title = ET.SubElement(text, "title")
        title.text = p.title()

    out = ET.tostring(root, encoding="unicode", method="xml")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + out


def export_svg(
    result: LayoutResult,
    bounds: SurfaceBounds,
    out_path: str | Path,
    font_family: str = DEFAULT_FONT_FAMILY,
    animate: bool = True,
) -> Path:
    """Write layout_to_svg output to out_path and return it."""
    path = Path(out_path)
    path.write_text(layout_to_svg(result, bounds, font_family=font_family, animate=animate), encoding="utf-8")
    return path
