"""
Daily activity histogram: bucket transaction timestamps by UTC day over a fixed trailing window.
"""

from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Any, Iterable, Sequence

from ensgraph.activity.models import DailyCount
from ensgraph.ensgraph_logging import get_logger

logger = get_logger(__name__)

WINDOW_DAYS = 180


def window_dates(today: date, window_days: int = WINDOW_DAYS) -> list[date]:
    """Return [today - window_days + 1, ..., today] in chronological order."""
    start = today - timedelta(days=window_days - 1)
    return [start + timedelta(days=i) for i in range(window_days)]


def parse_timestamps(records: Iterable[dict[str, Any]]) -> list[int]:
    """Extract Unix timestamps (timeStamp field) from explorer records, skipping malformed ones."""
    out: list[int] = []
    skipped = 0
    for rec in records:
        try:
            out.append(int(rec["timeStamp"]))
        except (KeyError, TypeError, ValueError):
            skipped += 1
    if skipped:
        logger.debug("activity_timestamps_skipped", skipped=skipped)
    return out


def build_daily_series(
    timestamps: Iterable[int],
    today: date,
    window_days: int = WINDOW_DAYS,
) -> tuple[DailyCount, ...]:
    """
    Count timestamps per UTC calendar day and return a zero-filled series of exactly
    window_days entries ending at today. Timestamps outside the window are ignored.
    """
    days = window_dates(today, window_days)
    first, last = days[0], days[-1]
    counts: Counter[date] = Counter()
    for ts in timestamps:
        day = datetime.fromtimestamp(ts, tz=timezone.utc).date()
        if first <= day <= last:
            counts[day] += 1
    return tuple(DailyCount(date=d, count=counts.get(d, 0)) for d in days)


def empty_series(today: date, window_days: int = WINDOW_DAYS) -> tuple[DailyCount, ...]:
    """All-zero series of window_days entries ending at today."""
    return tuple(DailyCount(date=d, count=0) for d in window_dates(today, window_days))


def compute_max_count(series: Sequence[DailyCount]) -> int:
    """Largest single-day count, with a floor of 1 for intensity scaling."""
    return max([d.count for d in series] + [1])
