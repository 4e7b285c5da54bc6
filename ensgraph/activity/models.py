"""
Data models for address activity.

DailyCount and ActivityRecord are the typed form of a cached series; the
JSON blob form exists only at the persistence edge (series_to_json / series_from_json).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Sequence


@dataclass(frozen=True)
class DailyCount:
    """Number of transactions touching an address on one UTC calendar day."""

    date: date
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date.isoformat(), "count": self.count}


@dataclass(frozen=True)
class ActivityRecord:
    """Cached activity for one address. daily_counts is chronological, one entry per day, no gaps."""

    address: str
    daily_counts: tuple[DailyCount, ...]
    max_count: int
    updated_at: int
    """Unix timestamp (seconds) of the last successful recomputation."""


@dataclass
class ActivityResult:
    """Activity returned to callers, with cache metadata and degradation flags."""

    activities: tuple[DailyCount, ...]
    max_count: int
    cached: bool = False
    cache_age: Optional[int] = None  # minutes
    stale: bool = False
    demo: bool = False
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "activities": [a.to_dict() for a in self.activities],
            "maxCount": self.max_count,
            "cached": self.cached,
        }
        if self.cache_age is not None:
            body["cacheAge"] = self.cache_age
        if self.stale:
            body["stale"] = True
        if self.demo:
            body["demo"] = True
        if self.error:
            body["error"] = self.error
        return body


def series_to_json(series: Sequence[DailyCount]) -> str:
    """Serialize a daily series as [{"date": "YYYY-MM-DD", "count": n}, ...]."""
    return json.dumps([d.to_dict() for d in series])


def series_from_json(raw: str) -> tuple[DailyCount, ...]:
    """Parse a serialized daily series. Raises ValueError on malformed input."""
    try:
        items = json.loads(raw)
        return tuple(
            DailyCount(date=date.fromisoformat(item["date"]), count=int(item["count"]))
            for item in items
        )
    except (TypeError, KeyError, json.JSONDecodeError) as e:
        raise ValueError(f"Malformed activity series: {e}") from e
