"""
ActivityStore: fixed-window daily activity for an address, cached with a TTL.

Flow for get_activity(address):
  1. fresh cache entry (age < TTL)      -> cached=True, cacheAge in minutes, no explorer call
  2. otherwise refresh from explorer    -> recompute, upsert cache, cached=False
  3. explorer failure + any cache entry -> that entry, stale=True
  4. explorer failure + no cache entry  -> all-zero series, demo=True, error set

Cache read/write failures (unreachable or unconfigured DB, bad stored data) are logged
and treated as "no cache". get_activity never raises.
"""

from __future__ import annotations

import time
from datetime import date, datetime, timezone
from typing import Callable, Optional

from ensgraph.activity.cache import ActivityCache
from ensgraph.activity.etherscan import EtherscanClient
from ensgraph.activity.histogram import (
    WINDOW_DAYS,
    build_daily_series,
    compute_max_count,
    empty_series,
    parse_timestamps,
)
from ensgraph.activity.models import ActivityRecord, ActivityResult
from ensgraph.ensgraph_logging import bind_address, get_logger

logger = get_logger(__name__)

CACHE_TTL_SEC = 24 * 60 * 60
EXPLORER_ERROR_MESSAGE = "Failed to fetch from Etherscan API"


class ActivityStore:
    """Activity histogram per address over a slow, rate-limited explorer, with a persistent cache."""

    def __init__(
        self,
        explorer: EtherscanClient,
        cache: Optional[ActivityCache] = None,
        *,
        ttl_sec: int = CACHE_TTL_SEC,
        window_days: int = WINDOW_DAYS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.explorer = explorer
        self.cache = cache
        self.ttl_sec = ttl_sec
        self.window_days = window_days
        self._clock = clock

    async def get_activity(self, address: str) -> ActivityResult:
        address = (address or "").strip().lower()
        log = bind_address(logger, address)
        now = self._clock()

        cached = await self._read_cache(address)
        if cached is not None:
            age_sec = now - cached.updated_at
            if age_sec < self.ttl_sec:
                log.info("activity_cache_hit", age_minutes=int(age_sec // 60))
                return ActivityResult(
                    activities=cached.daily_counts,
                    max_count=cached.max_count,
                    cached=True,
                    cache_age=int(age_sec // 60),
                )
            log.info("activity_cache_expired", age_minutes=int(age_sec // 60))

        today = datetime.fromtimestamp(now, tz=timezone.utc).date()
        try:
            records = await self.explorer.fetch_history(address)
        except Exception as e:
            log.warning("activity_fetch_failed", error=str(e))
            return await self._fallback(address, cached, today)

        series = build_daily_series(parse_timestamps(records), today, self.window_days)
        record = ActivityRecord(
            address=address,
            daily_counts=series,
            max_count=compute_max_count(series),
            updated_at=int(now),
        )
        await self._write_cache(record)
        log.info(
            "activity_refreshed",
            records=len(records),
            max_count=record.max_count,
        )
        return ActivityResult(activities=record.daily_counts, max_count=record.max_count, cached=False)

    async def _fallback(
        self,
        address: str,
        cached: Optional[ActivityRecord],
        today: date,
    ) -> ActivityResult:
        # The entry read before the refresh attempt is reused; re-read only if there was none
        entry = cached if cached is not None else await self._read_cache(address)
        if entry is not None:
            logger.warning("activity_stale_cache_served", address=address, updated_at=entry.updated_at)
            return ActivityResult(
                activities=entry.daily_counts,
                max_count=entry.max_count,
                cached=True,
                stale=True,
            )
        logger.warning("activity_demo_served", address=address)
        return ActivityResult(
            activities=empty_series(today, self.window_days),
            max_count=1,
            demo=True,
            error=EXPLORER_ERROR_MESSAGE,
        )

    async def _read_cache(self, address: str) -> Optional[ActivityRecord]:
        if self.cache is None:
            return None
        try:
            record = await self.cache.get(address)
        except Exception as e:
            logger.warning("activity_cache_read_failed", address=address, error=str(e))
            return None
        if record is not None and len(record.daily_counts) != self.window_days:
            logger.warning(
                "activity_cache_wrong_window",
                address=address,
                entries=len(record.daily_counts),
            )
            return None
        return record

    async def _write_cache(self, record: ActivityRecord) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.put(record)
        except Exception as e:
            logger.warning("activity_cache_write_failed", address=record.address, error=str(e))
