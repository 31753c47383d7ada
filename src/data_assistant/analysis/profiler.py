"""Dataset profiling report.

The report holds one ColumnProfile per header, in header order. It is
cheap to rebuild, so callers recompute it wholesale after every change to
the dataset instead of patching it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..dataset import Dataset, is_missing
from .stats import top_values, unique_key

PROFILE_TOP_VALUES = 5


@dataclass
class ColumnProfile:
    name: str
    total_rows: int
    missing: int
    unique: int
    top_values: list[tuple[str, int]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "totalRows": self.total_rows,
            "missing": self.missing,
            "unique": self.unique,
            "topValues": [[value, count] for value, count in self.top_values],
        }


def profile_column(dataset: Dataset, header: str) -> ColumnProfile:
    values = dataset.column_values(header)
    present = [v for v in values if not is_missing(v)]
    return ColumnProfile(
        name=header,
        total_rows=len(values),
        missing=len(values) - len(present),
        unique=len({unique_key(v) for v in present}),
        top_values=top_values(present, PROFILE_TOP_VALUES),
    )


def profile_dataset(dataset: Dataset) -> list[ColumnProfile]:
    """Profile every column of the dataset, in header order."""
    return [profile_column(dataset, header) for header in dataset.headers]


def render_report(report: list[ColumnProfile], max_value_width: int = 24) -> str:
    """Render the report as a plain-text table."""
    if not report:
        return "(no columns)"

    def clip(text: str) -> str:
        if len(text) <= max_value_width:
            return text
        return text[: max_value_width - 1] + "…"

    lines = []
    name_width = max(len("column"), *(len(p.name) for p in report))
    lines.append(f"{'column':<{name_width}}  {'rows':>6}  {'missing':>7}  {'unique':>6}  top values")
    lines.append("-" * (name_width + 36))
    for p in report:
        tops = ", ".join(f"{clip(v)} ({c})" for v, c in p.top_values)
        lines.append(
            f"{p.name:<{name_width}}  {p.total_rows:>6}  {p.missing:>7}  {p.unique:>6}  {tops}"
        )
    return "\n".join(lines)
