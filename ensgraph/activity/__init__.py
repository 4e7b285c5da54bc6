"""
Activity: Etherscan transaction history aggregated into a daily histogram,
cached per address with a TTL and a stale-on-error fallback.
"""

from ensgraph.activity.models import ActivityRecord, ActivityResult, DailyCount
from ensgraph.activity.store import ActivityStore

__all__ = ["ActivityRecord", "ActivityResult", "ActivityStore", "DailyCount"]
