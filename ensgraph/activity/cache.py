"""
Async adapter over the activity_cache table.

Runs the synchronous repository calls off the event loop and converts between
ActivityRecord and the stored JSON blob.
"""

from __future__ import annotations

import asyncio

from ensgraph.activity.models import ActivityRecord, series_from_json, series_to_json
from ensgraph.database import repositories


class ActivityCache:
    """Persistent activity cache keyed by lowercase address."""

    async def get(self, address: str) -> ActivityRecord | None:
        """Return the cached record or None. Raises on store errors or a malformed row."""
        row = await asyncio.to_thread(repositories.get_activity_cache, address)
        if row is None:
            return None
        return ActivityRecord(
            address=row["address"],
            daily_counts=series_from_json(row["activities_json"]),
            max_count=max(int(row["max_count"]), 1),
            updated_at=int(row["updated_at"]),
        )

    async def put(self, record: ActivityRecord) -> None:
        """Insert or replace the record for record.address."""
        await asyncio.to_thread(
            repositories.upsert_activity_cache,
            record.address,
            series_to_json(record.daily_counts),
            record.max_count,
            record.updated_at,
        )

    async def delete(self, address: str) -> int:
        return await asyncio.to_thread(repositories.delete_activity_cache, address)
