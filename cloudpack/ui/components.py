# cloudpack/ui/components.py
"""
Shared UI blocks: cloud preview, placed/dropped tables, summary metrics, downloads.
"""

from __future__ import annotations

import json

import streamlit as st
import streamlit.components.v1 as st_components

from cloudpack.core.io import labels_to_records
from cloudpack.core.reporting import placed_to_dict
from cloudpack.core.types import LayoutResult


def _centered_download(label: str, data: bytes, file_name: str, mime: str, key: str) -> None:
    """Render a download button centered in a 3-column layout."""
    _c1, _c2, _c3 = st.columns([1, 1, 1])
    with _c2:
        st.download_button(label, data=data, file_name=file_name, mime=mime, key=key)


def render_cloud_svg(svg_text: str, height: int) -> None:
    """Inline SVG; html component keeps the fade-in animation and tooltips."""
    st_components.html(svg_text, height=height + 10, scrolling=False)


def render_summary(summary: dict) -> None:
    """Placed / dropped / excluded counts as st.metric columns."""
    c1, c2, c3 = st.columns(3)
    c1.metric("Placed", summary.get("placed_count", 0))
    c2.metric("Dropped", summary.get("dropped_count", 0))
    c3.metric("Beyond max labels", summary.get("excluded_count", 0))
    for problem in summary.get("problems", []):
        st.warning(problem)


def render_tables(result: LayoutResult) -> None:
    """Placed and dropped labels as DataFrames. Values as string for Arrow compatibility."""
    import pandas as pd

    placed_rows = [placed_to_dict(p) for p in result.placed]
    if placed_rows:
        st.caption("Placed")
        st.dataframe(pd.DataFrame(placed_rows).astype(str), width="stretch", hide_index=True)
    if result.dropped:
        st.caption(f"{len(result.dropped)} more not shown")
        st.dataframe(pd.DataFrame(labels_to_records(result.dropped)).astype(str), width="stretch", hide_index=True)


def render_downloads(layout_dict: dict, svg_text: str, key_prefix: str = "dl") -> None:
    _centered_download(
        "Download layout.json",
        json.dumps(layout_dict, indent=2).encode("utf-8"),
        "layout.json",
        "application/json",
        f"{key_prefix}_layout_json",
    )
    _centered_download("Download cloud.svg", svg_text.encode("utf-8"), "cloud.svg", "image/svg+xml", f"{key_prefix}_cloud_svg")
