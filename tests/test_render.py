"""
SVG export structure and PNG rendering smoke tests (matplotlib, headless).
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from cloudpack.core.layout import compute_layout
from cloudpack.core.render import render_cloud, render_debug
from cloudpack.core.render_svg import export_svg, layout_to_svg
from cloudpack.core.text_metrics import ApproximateMetrics
from cloudpack.core.types import LayoutConfig, LayoutResult, SurfaceBounds, WeightedLabel

SVG = "{http://www.w3.org/2000/svg}"
BOUNDS = SurfaceBounds(400, 300)
CONFIG = LayoutConfig()


def _result() -> LayoutResult:
    labels = [WeightedLabel("alpha", 10, 50), WeightedLabel("beta", 5, 25), WeightedLabel("x" * 100, 1, 1)]
    return compute_layout(labels, BOUNDS, CONFIG, ApproximateMetrics())


def test_svg_has_one_text_per_placed_label() -> None:
    result = _result()
    root = ET.fromstring(layout_to_svg(result, BOUNDS).split("\n", 1)[1])
    assert root.get("viewBox") == "0 0 400 300"
    texts = root.findall(f".//{SVG}text")
    assert len(texts) == result.placed_count
    first = texts[0]
    assert first.text == "alpha"
    assert first.get("fill") == result.placed[0].color.css()
    assert first.get("style") == "animation-delay: 0ms"
    assert first.find(f"{SVG}title").text == "alpha: 10 (50.0%)"


def test_svg_without_animation() -> None:
    svg = layout_to_svg(_result(), BOUNDS, animate=False)
    assert "@keyframes" not in svg
    assert "animation-delay" not in svg


def test_export_svg_writes_file(tmp_path) -> None:
    out = export_svg(_result(), BOUNDS, tmp_path / "cloud.svg")
    assert out.exists()
    assert out.read_text(encoding="utf-8").startswith("<?xml")


def test_render_png_files(tmp_path) -> None:
    result = _result()
    cloud = tmp_path / "cloud.png"
    debug = tmp_path / "debug.png"
    render_cloud(result, BOUNDS, cloud)
    render_debug(result, BOUNDS, CONFIG, debug)
    assert cloud.exists() and cloud.stat().st_size > 0
    assert debug.exists() and debug.stat().st_size > 0


def test_render_empty_result(tmp_path) -> None:
    out = tmp_path / "empty.png"
    render_debug(LayoutResult(), SurfaceBounds(0, 0), CONFIG, out)
    assert out.exists()
