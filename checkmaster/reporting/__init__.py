"""Reporting over the submission history."""
from checkmaster.reporting.history import (
    HistorySummary,
    format_currency,
    submissions_to_rows,
    summarize_history,
)
from checkmaster.reporting.sinks import write_csv, write_excel

__all__ = [
    "HistorySummary",
    "format_currency",
    "submissions_to_rows",
    "summarize_history",
    "write_csv",
    "write_excel",
]
