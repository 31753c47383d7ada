"""CSV loading and export.

Loading uses a header row, skips blank lines and applies dynamic typing to
cells: integers and floats become numbers, true/false become booleans, and
empty cells become None. Export writes headers in order and renders None
as an empty cell.
"""

from __future__ import annotations

import csv
import io
import re
from pathlib import Path
from typing import Any

from .dataset import Dataset
from .logging import get_logger

logger = get_logger(__name__)

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")


def convert_cell(text: str) -> Any:
    if text == "":
        return None
    lowered = text.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _INT_RE.match(text):
        return int(text)
    if _FLOAT_RE.match(text):
        return float(text)
    return text


def _unique_headers(raw: list[str]) -> list[str]:
    headers: list[str] = []
    seen: set[str] = set()
    for index, name in enumerate(raw):
        base = name.strip() or f"column_{index + 1}"
        candidate = base
        suffix = 1
        while candidate in seen:
            candidate = f"{base}_{suffix}"
            suffix += 1
        seen.add(candidate)
        headers.append(candidate)
    return headers


def parse_csv(text: str, *, delimiter: str = ",", dynamic_typing: bool = True) -> Dataset:
    """Parse CSV text with a header row into a Dataset."""
    reader = csv.reader(io.StringIO(text), delimiter=delimiter)
    raw_headers = next(reader, None)
    if raw_headers is None:
        return Dataset.empty()

    headers = _unique_headers(raw_headers)
    rows: list[dict[str, Any]] = []
    for record in reader:
        if not record or all(cell.strip() == "" for cell in record):
            continue
        row: dict[str, Any] = {}
        for name, cell in zip(headers, record):
            row[name] = convert_cell(cell) if dynamic_typing else cell
        rows.append(row)

    return Dataset.from_records(headers, rows)


def load_csv(path: str | Path, *, delimiter: str = ",", encoding: str = "utf-8") -> Dataset:
    """Load a CSV file into a Dataset."""
    resolved = Path(path)
    # utf-8-sig drops a byte order mark if one is present
    text = resolved.read_text(encoding="utf-8-sig" if encoding == "utf-8" else encoding)
    dataset = parse_csv(text, delimiter=delimiter)
    logger.info(f"loaded {resolved.name}: {len(dataset)} rows, {len(dataset.headers)} columns")
    return dataset


def export_csv(dataset: Dataset) -> bytes:
    """Render the dataset as UTF-8 CSV bytes."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(dataset.headers)
    for row in dataset.rows:
        writer.writerow(["" if row.get(h) is None else _format_cell(row.get(h)) for h in dataset.headers])
    return buffer.getvalue().encode("utf-8")


def _format_cell(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def modified_filename(name: str, suffix: str = "_modified") -> str:
    """``sales.csv`` -> ``sales_modified.csv``."""
    stem = Path(name).stem or "data"
    return f"{stem}{suffix}.csv"
