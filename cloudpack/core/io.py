# cloudpack/core/io.py
"""
Load keyword records (keyword, count, percentage) from JSON or CSV and turn
them into validated WeightedLabel lists.
JSON: a list of records, or an API envelope {"data": [...]}.
CSV: header keyword,count,percentage (text,weight,magnitude also accepted).
"""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path
from typing import Any, Iterable, Mapping

from cloudpack.core.error_codes import INVALID_RECORDS, LayoutInputError
from cloudpack.core.types import WeightedLabel
from cloudpack.core.validate import validate_labels

_TEXT_KEYS = ("keyword", "text", "label")
_WEIGHT_KEYS = ("count", "weight")
_MAGNITUDE_KEYS = ("percentage", "magnitude")


def _resolve_path(path: str | Path, repo_root: Path | None) -> Path:
    """Resolve path; if relative, against repo_root (or cwd if repo_root is None)."""
    p = Path(path)
    if not p.is_absolute() and repo_root is not None:
        p = repo_root / p
    return p.resolve()


def _first(record: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for k in keys:
        if k in record and record[k] not in (None, ""):
            return record[k]
    return None


def _to_number(value: Any, field: str, text: str) -> float:
    """Missing values count as 0, the way the dashboard formatted API rows."""
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        raise LayoutInputError(INVALID_RECORDS, f"{field} for {text!r} is not a number: {value!r}") from None


def record_to_label(record: Mapping[str, Any]) -> WeightedLabel:
    """One keyword record -> WeightedLabel. Not validated; see records_to_labels."""
    if not isinstance(record, Mapping):
        raise LayoutInputError(INVALID_RECORDS, f"expected an object per keyword, got {type(record).__name__}")
    raw_text = _first(record, _TEXT_KEYS)
    text = str(raw_text).strip() if raw_text is not None else ""
    return WeightedLabel(
        text=text,
        weight=_to_number(_first(record, _WEIGHT_KEYS), "count", text),
        magnitude=_to_number(_first(record, _MAGNITUDE_KEYS), "percentage", text),
    )


def records_to_labels(records: Iterable[Mapping[str, Any]]) -> list[WeightedLabel]:
    """Convert and validate; raises LayoutInputError on the first bad record."""
    labels = [record_to_label(r) for r in records]
    validate_labels(labels)
    return labels


def parse_json_records(text: str) -> list[WeightedLabel]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LayoutInputError(INVALID_RECORDS, f"invalid JSON: {e}") from e
    if isinstance(data, Mapping):
        data = data.get("data")
    if not isinstance(data, list):
        raise LayoutInputError(INVALID_RECORDS, "expected a list of keyword records or an object with 'data'")
    return records_to_labels(data)


def parse_csv_records(text: str) -> list[WeightedLabel]:
    reader = csv.DictReader(io.StringIO(text))
    fields = {f.strip().lower() for f in (reader.fieldnames or [])}
    if not fields.intersection(_TEXT_KEYS):
        raise LayoutInputError(INVALID_RECORDS, f"CSV needs a keyword column, got {sorted(fields)}")
    rows = [{(k or "").strip().lower(): v for k, v in row.items()} for row in reader]
    return records_to_labels(rows)


def decode_records(data: bytes) -> str:
    """UTF-8 text of an uploaded or on-disk keyword file; a leading BOM is dropped."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise LayoutInputError(INVALID_RECORDS, f"keyword file is not valid UTF-8: {e}") from e


def parse_records(text: str, fmt: str | None = None) -> list[WeightedLabel]:
    """Parse JSON or CSV text; fmt 'json'/'csv', or None to sniff from the first character."""
    text = text.lstrip("\ufeff")
    fmt = (fmt or "").lower().lstrip(".")
    if not fmt:
        fmt = "json" if text.lstrip()[:1] in ("[", "{") else "csv"
    if fmt == "json":
        return parse_json_records(text)
    if fmt == "csv":
        return parse_csv_records(text)
    raise LayoutInputError(INVALID_RECORDS, f"unsupported format: {fmt!r}")


def load_labels(path: str | Path, repo_root: Path | None = None) -> list[WeightedLabel]:
    """
    Load keyword records from a .json or .csv file.
    Raises FileNotFoundError if path is missing, LayoutInputError if records are invalid.
    """
    resolved = _resolve_path(path, repo_root)
    if not resolved.exists():
        raise FileNotFoundError(f"Keyword file not found: {resolved}")
    text = decode_records(resolved.read_bytes())
    fmt = resolved.suffix if resolved.suffix.lower() in (".json", ".csv") else None
    return parse_records(text, fmt)


def labels_to_records(labels: Iterable[WeightedLabel]) -> list[dict[str, Any]]:
    """Inverse of records_to_labels, using the dashboard field names."""
    return [{"keyword": lab.text, "count": lab.weight, "percentage": lab.magnitude} for lab in labels]
