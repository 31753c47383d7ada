"""Column statistics and dataset profiling."""

from .profiler import ColumnProfile, profile_column, profile_dataset, render_report
from .stats import ColumnSummary, coerce_number, get_column_summary, summarize_values

__all__ = [
    "ColumnProfile",
    "ColumnSummary",
    "coerce_number",
    "get_column_summary",
    "profile_column",
    "profile_dataset",
    "render_report",
    "summarize_values",
]
