"""Column statistics.

Pure functions over a single column of a Dataset. A column is numeric when
every present value coerces to a finite number; anything else is treated as
categorical and summarized by its most frequent values.
"""

from __future__ import annotations

import math
import statistics
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable

from ..dataset import Dataset, is_missing
from ..exceptions import ColumnNotFoundError

SUMMARY_TOP_VALUES = 10


def coerce_number(value: Any) -> float | None:
    """Coerce a scalar to a finite float, or None if it is not numeric.

    Booleans are not numbers here, and numeric strings are accepted after
    stripping surrounding whitespace.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def unique_key(value: Any) -> tuple[str, Any]:
    # 1, 1.0 and True hash alike; keep them distinct like the raw cell values
    return (type(value).__name__, value)


def top_values(values: Iterable[Any], limit: int) -> list[tuple[str, int]]:
    """Most frequent stringified values, count-descending.

    Ties keep the order in which values were first encountered.
    """
    counts = Counter(str(v) for v in values)
    return counts.most_common(limit)


@dataclass
class ColumnSummary:
    name: str
    total_rows: int
    missing: int
    unique: int
    is_numeric: bool
    mean: float | None = None
    sum: float | None = None
    min: float | None = None
    max: float | None = None
    median: float | None = None
    q1: float | None = None
    q3: float | None = None
    std_dev: float | None = None
    top_values: list[tuple[str, int]] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """JSON payload handed back to the model as a tool result."""
        payload: dict[str, Any] = {
            "columnName": self.name,
            "totalRows": self.total_rows,
            "missing": self.missing,
            "unique": self.unique,
            "isNumeric": self.is_numeric,
        }
        if self.is_numeric:
            payload.update({
                "mean": self.mean,
                "sum": self.sum,
                "min": self.min,
                "max": self.max,
                "median": self.median,
                "q1": self.q1,
                "q3": self.q3,
                "stdDev": self.std_dev,
            })
        else:
            payload["topValues"] = [[value, count] for value, count in self.top_values]
        return payload


def summarize_values(name: str, values: list[Any]) -> ColumnSummary:
    """Summarize an already-extracted column."""
    present = [v for v in values if not is_missing(v)]
    unique = len({unique_key(v) for v in present})

    numbers = [coerce_number(v) for v in present]
    if present and all(n is not None for n in numbers):
        ordered = sorted(numbers)
        n = len(ordered)
        mid = n // 2
        if n % 2 == 0:
            median = (ordered[mid - 1] + ordered[mid]) / 2
        else:
            median = ordered[mid]
        total = math.fsum(ordered)
        return ColumnSummary(
            name=name,
            total_rows=len(values),
            missing=len(values) - len(present),
            unique=unique,
            is_numeric=True,
            mean=total / n,
            sum=total,
            min=ordered[0],
            max=ordered[-1],
            median=median,
            # nearest-rank, biased low; not interpolated
            q1=ordered[n // 4],
            q3=ordered[(3 * n) // 4],
            std_dev=statistics.pstdev(ordered),
        )

    return ColumnSummary(
        name=name,
        total_rows=len(values),
        missing=len(values) - len(present),
        unique=unique,
        is_numeric=False,
        top_values=top_values(present, SUMMARY_TOP_VALUES),
    )


def get_column_summary(dataset: Dataset, column_name: str) -> ColumnSummary:
    """Summarize one column of the dataset.

    Raises:
        ColumnNotFoundError: If the column is not one of the headers.
    """
    if not dataset.has_column(column_name):
        raise ColumnNotFoundError(column_name)
    return summarize_values(column_name, dataset.column_values(column_name))
