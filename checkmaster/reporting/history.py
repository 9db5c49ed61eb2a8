"""Revenue figures and display rows for the submission history."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from checkmaster.core.models import THUMBNAIL_KEY, Submission

RECENT_LIMIT = 3


@dataclass
class HistorySummary:
    total_revenue: float
    month_count: int
    recent: List[Submission]


def _as_datetime(timestamp_ms: int) -> datetime:
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)


def format_currency(value: float) -> str:
    """Format an amount the way the app shows it, e.g. ``R$ 1.234,50``."""

    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {grouped}"


def format_date(timestamp_ms: int) -> str:
    return _as_datetime(timestamp_ms).strftime("%Y-%m-%d %H:%M")


def summarize_history(submissions: Iterable[Submission], now: Optional[datetime] = None) -> HistorySummary:
    """Total revenue, submissions in the current month and the latest three."""

    history = list(submissions)
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)

    month_count = 0
    for submission in history:
        stamp = _as_datetime(submission.date)
        if (stamp.year, stamp.month) == (current.year, current.month):
            month_count += 1

    return HistorySummary(
        total_revenue=sum(submission.total_value for submission in history),
        month_count=month_count,
        recent=list(reversed(history[-RECENT_LIMIT:])),
    )


def submissions_to_rows(submissions: Iterable[Submission]) -> List[Dict[str, Any]]:
    """Flatten submissions into rows with one column per answer key."""

    history = list(submissions)
    answer_keys: List[str] = []
    for submission in history:
        for key in submission.data:
            if key != THUMBNAIL_KEY and key not in answer_keys:
                answer_keys.append(key)

    rows = []
    for submission in history:
        row: Dict[str, Any] = {
            "Id": submission.id,
            "Template": submission.template_name,
            "Date": format_date(submission.date),
            "Total": f"{submission.total_value:.2f}",
            "Thumbnail": "yes" if submission.thumbnail else "",
        }
        for key in answer_keys:
            row[key] = _cell(submission.data.get(key))
        rows.append(row)
    return rows


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return " ".join(str(value).split())
