"""
Validate layout.json shape: required keys exist, summary counts and error keys,
JSON round trip, and files written under a report dir.
"""

from __future__ import annotations

import json

import pytest

from cloudpack.core.error_codes import NO_LABELS, NO_LABELS_PLACED
from cloudpack.core.layout import compute_layout
from cloudpack.core.reporting import (
    ensure_report_dir,
    layout_to_dict,
    write_layout_json,
    write_run_metadata_json,
)
from cloudpack.core.text_metrics import ApproximateMetrics
from cloudpack.core.types import LayoutConfig, LayoutResult, SurfaceBounds, WeightedLabel

BOUNDS = SurfaceBounds(400, 300)
CONFIG = LayoutConfig(max_labels=3)
LABELS = [
    WeightedLabel("alpha", 10, 50),
    WeightedLabel("beta", 5, 25),
    WeightedLabel("x" * 120, 4, 5),
    WeightedLabel("delta", 1, 1),
]

REQUIRED_KEYS = [
    "schema_version",
    ("surface", "width"),
    ("surface", "height"),
    ("surface", "inner_margin"),
    ("config", "max_labels"),
    ("config", "collision_buffer"),
    "placed",
    "dropped",
    ("summary", "placed_count"),
    ("summary", "dropped_count"),
    ("summary", "excluded_count"),
    ("summary", "problems"),
    ("summary", "error"),
]

PLACED_KEYS = {
    "text", "weight", "magnitude", "font_size", "x", "y", "width", "height",
    "color", "color_hex", "ordinal_index", "animation_delay_ms", "title",
}


def _layout_dict() -> dict:
    result = compute_layout(LABELS, BOUNDS, CONFIG, ApproximateMetrics())
    return layout_to_dict(result, BOUNDS, CONFIG, n_input=len(LABELS))


def test_layout_required_keys_exist() -> None:
    data = _layout_dict()
    for key in REQUIRED_KEYS:
        if isinstance(key, tuple):
            obj = data
            for k in key:
                assert k in obj, f"Missing key: {key}"
                obj = obj[k]
        else:
            assert key in data, f"Missing key: {key}"


def test_layout_summary_counts() -> None:
    data = _layout_dict()
    s = data["summary"]
    assert s["n_input"] == 4
    assert s["placed_count"] == 2
    assert s["dropped_count"] == 1
    assert s["excluded_count"] == 1
    assert s["problems"] == []
    assert s["error"] is None
    assert data["dropped"] == [{"keyword": "x" * 120, "count": 4, "percentage": 5}]


def test_placed_entry_shape() -> None:
    entry = _layout_dict()["placed"][0]
    assert set(entry) == PLACED_KEYS
    assert entry["text"] == "alpha"
    assert entry["color"].startswith("hsl(")
    assert entry["color_hex"].startswith("#")
    assert entry["title"] == "alpha: 10 (50.0%)"


def test_layout_json_roundtrip() -> None:
    data = _layout_dict()
    loaded = json.loads(json.dumps(data))
    assert loaded["placed"][0]["font_size"] == data["placed"][0]["font_size"]
    assert loaded["summary"] == data["summary"]


def test_summary_error_keys() -> None:
    empty = layout_to_dict(LayoutResult(), BOUNDS, CONFIG, n_input=0)
    assert empty["summary"]["error"] == NO_LABELS
    none_placed = layout_to_dict(LayoutResult(dropped=[WeightedLabel("a", 1, 0)]), BOUNDS, CONFIG, n_input=1)
    assert none_placed["summary"]["error"] == NO_LABELS_PLACED


def test_write_report_files(tmp_path) -> None:
    report_dir = ensure_report_dir(tmp_path, "unit", output_dir="out")
    assert report_dir == (tmp_path / "out").resolve() / "unit"
    result = compute_layout(LABELS, BOUNDS, CONFIG, ApproximateMetrics())
    layout_path = write_layout_json(report_dir, result, BOUNDS, CONFIG, n_input=len(LABELS))
    meta_path = write_run_metadata_json(report_dir, "unit", "inline", BOUNDS, CONFIG, metrics_name="approximate")
    layout = json.loads(layout_path.read_text(encoding="utf-8"))
    meta = json.loads(meta_path.read_text(encoding="utf-8"))
    assert layout["summary"]["placed_count"] == result.placed_count
    assert meta["run_name"] == "unit"
    assert meta["metrics"] == "approximate"
    assert meta["layout_config"]["max_labels"] == 3
    assert meta["config"]["INNER_MARGIN"] == pytest.approx(10.0)
