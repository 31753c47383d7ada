"""In-memory tabular dataset.

A Dataset is an ordered list of headers plus a sequence of row records.
It is treated as an immutable value: every transformation returns a new
Dataset with new row dicts, so a reference held elsewhere (the load-time
snapshot, a profiling report) never observes a half-applied change.
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from .exceptions import ColumnNotFoundError, DuplicateColumnError


def is_missing(value: Any) -> bool:
    """Return True for values counted as missing (None, "" and NaN)."""
    if value is None:
        return True
    if isinstance(value, str) and value == "":
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


@dataclass(frozen=True)
class Dataset:
    headers: tuple[str, ...]
    rows: tuple[dict[str, Any], ...]

    def __post_init__(self) -> None:
        if len(set(self.headers)) != len(self.headers):
            raise ValueError(f"Duplicate column names in headers: {list(self.headers)}")
        known = set(self.headers)
        for index, row in enumerate(self.rows):
            extra = set(row) - known
            if extra:
                raise ValueError(f"Row {index} has keys not in headers: {sorted(extra)}")

    @classmethod
    def from_records(
        cls,
        headers: Iterable[str],
        rows: Iterable[Mapping[str, Any]],
    ) -> Dataset:
        """Build a dataset, copying each record into a fresh dict."""
        return cls(tuple(headers), tuple(dict(row) for row in rows))

    @classmethod
    def empty(cls) -> Dataset:
        return cls((), ())

    def __len__(self) -> int:
        return len(self.rows)

    def has_column(self, name: str) -> bool:
        return name in self.headers

    def column_values(self, name: str) -> list[Any]:
        """Values of one column in row order; absent keys read as None."""
        if name not in self.headers:
            raise ColumnNotFoundError(name)
        return [row.get(name) for row in self.rows]

    def with_columns(self, columns: Mapping[str, Sequence[Any]]) -> Dataset:
        """Return a new dataset with the given columns appended.

        Values are paired with rows by position, so each sequence must have
        exactly one value per row.
        """
        for name, values in columns.items():
            if name in self.headers:
                raise DuplicateColumnError(name)
            if len(values) != len(self.rows):
                raise ValueError(
                    f"Column '{name}' has {len(values)} values for {len(self.rows)} rows"
                )

        new_rows = []
        for index, row in enumerate(self.rows):
            new_row = dict(row)
            for name, values in columns.items():
                new_row[name] = values[index]
            new_rows.append(new_row)

        return Dataset(self.headers + tuple(columns), tuple(new_rows))

    def copy(self) -> Dataset:
        """Deep copy, detached from any row dict shared with the caller."""
        return Dataset(self.headers, tuple(copy.deepcopy(row) for row in self.rows))

    def to_dict(self) -> dict[str, Any]:
        return {"headers": list(self.headers), "rows": [dict(r) for r in self.rows]}
