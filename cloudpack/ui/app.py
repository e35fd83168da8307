# cloudpack/ui/app.py
"""
Streamlit UI: sidebar (keyword source, surface size, layout options), main area
with the cloud preview, summary, placed/dropped tables and downloads.
Run: streamlit run cloudpack/ui/app.py
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

# Configure logging from env (e.g. CLOUDPACK_LOG_LEVEL=DEBUG for development)
_log_level_name = os.environ.get("CLOUDPACK_LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, _log_level_name, logging.INFO))

# Ensure repo root is on path when Streamlit loads this file
_repo_root = Path(__file__).resolve().parent.parent.parent
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

import streamlit as st

from cloudpack.core.config import (
    DEFAULT_COLLISION_BUFFER,
    DEFAULT_FONT_FAMILY,
    DEFAULT_MAX_FONT_SIZE,
    DEFAULT_MAX_LABELS,
    DEFAULT_MAX_PLACEMENT_ATTEMPTS,
    DEFAULT_MIN_FONT_SIZE,
    DEFAULT_SURFACE_HEIGHT,
    DEFAULT_SURFACE_WIDTH,
    SEED,
)
from cloudpack.core.error_codes import NO_LABELS, NO_LABELS_PLACED, LayoutInputError, user_message
from cloudpack.core.io import decode_records, parse_records, records_to_labels
from cloudpack.core.layout import compute_layout
from cloudpack.core.render_svg import layout_to_svg
from cloudpack.core.reporting import layout_to_dict
from cloudpack.core.smoke import SAMPLE_KEYWORDS
from cloudpack.core.text_metrics import ApproximateMetrics, PillowMetrics
from cloudpack.core.types import LayoutConfig, SurfaceBounds
from cloudpack.ui import components as ui_components

logger = logging.getLogger(__name__)

st.set_page_config(page_title="cloudpack", layout="wide")
st.title("Keyword cloud layout")

with st.sidebar:
    st.header("Keywords")
    source_type = st.radio("Source", ["Sample", "Upload", "Paste"], horizontal=True)
    uploaded_file = None
    pasted = ""
    if source_type == "Upload":
        uploaded_file = st.file_uploader("Upload keyword records", type=["json", "csv"])
    elif source_type == "Paste":
        pasted = st.text_area("keyword,count,percentage (CSV) or JSON", height=160)

    st.header("Surface")
    width = st.number_input("Width", min_value=0.0, value=float(DEFAULT_SURFACE_WIDTH), step=10.0)
    height = st.number_input("Height", min_value=0.0, value=float(DEFAULT_SURFACE_HEIGHT), step=10.0)

    st.header("Layout")
    max_labels = st.number_input("Max labels", min_value=1, value=int(DEFAULT_MAX_LABELS), step=1)
    min_font, max_font = st.slider(
        "Font size range",
        min_value=4.0,
        max_value=120.0,
        value=(float(DEFAULT_MIN_FONT_SIZE), float(DEFAULT_MAX_FONT_SIZE)),
        step=1.0,
    )
    with st.expander("Advanced"):
        attempts = st.number_input("Spiral steps per label", min_value=1, value=int(DEFAULT_MAX_PLACEMENT_ATTEMPTS), step=50)
        buffer = st.number_input("Gap between labels", min_value=0.0, value=float(DEFAULT_COLLISION_BUFFER), step=1.0)
        seed_val = st.number_input("Seed", min_value=0, value=int(SEED or 0), step=1, help="Same seed = same layout.")
        font_family = st.text_input("Font family", value=DEFAULT_FONT_FAMILY)
        approximate = st.checkbox("Approximate text metrics", value=False, help="Estimate widths without font files.")


def _load_labels():
    """Returns (labels, error_message)."""
    try:
        if source_type == "Upload":
            if uploaded_file is None:
                return [], ""
            suffix = Path(uploaded_file.name).suffix
            return parse_records(decode_records(uploaded_file.read()), suffix), ""
        if source_type == "Paste":
            if not pasted.strip():
                return [], ""
            return parse_records(pasted), ""
        return records_to_labels(SAMPLE_KEYWORDS), ""
    except LayoutInputError as e:
        logger.warning("Invalid keyword records: %s", e)
        return [], f"{user_message(e.error_code)} ({e.detail})"


labels, load_error = _load_labels()
if load_error:
    st.error(load_error)
    st.stop()

config = LayoutConfig(
    max_labels=int(max_labels),
    min_font_size=float(min_font),
    max_font_size=float(max_font),
    max_placement_attempts=int(attempts),
    collision_buffer=float(buffer),
    seed=int(seed_val),
)
bounds = SurfaceBounds(width=float(width), height=float(height))
metrics = ApproximateMetrics() if approximate else PillowMetrics(font_family)

try:
    result = compute_layout(labels, bounds, config, metrics)
except LayoutInputError as e:
    st.error(f"{user_message(e.error_code)} ({e.detail})")
    st.stop()

if not labels:
    st.info(user_message(NO_LABELS))
    st.stop()

layout_dict = layout_to_dict(result, bounds, config, n_input=len(labels))
svg_text = layout_to_svg(result, bounds, font_family=font_family)

if not result.placed:
    st.warning(user_message(NO_LABELS_PLACED))
else:
    ui_components.render_cloud_svg(svg_text, height=int(max(1.0, bounds.height)))

ui_components.render_summary(layout_dict["summary"])
ui_components.render_tables(result)
ui_components.render_downloads(layout_dict, svg_text)
