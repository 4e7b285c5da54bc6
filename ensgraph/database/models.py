"""
SQLAlchemy models: relationship edges and the per-address activity cache.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class EdgeRow(Base):
    """One directed relationship between two identity labels (ENS names). No uniqueness on the pair."""

    __tablename__ = "edges"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source = Column(String(255), nullable=False)
    target = Column(String(255), nullable=False)
    created_at = Column(Integer, nullable=True)  # Unix timestamp

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "created_at": self.created_at,
        }


class ActivityCacheRow(Base):
    """
    Cached daily activity series for one address (lowercase). Replaced wholesale on refresh.
    activities_json holds the serialized [{"date": "YYYY-MM-DD", "count": n}, ...] series.
    """

    __tablename__ = "activity_cache"

    id = Column(Integer, primary_key=True, autoincrement=True)
    address = Column(String(42), unique=True, nullable=False, index=True)
    activities_json = Column(Text, nullable=False)
    max_count = Column(Integer, nullable=False, default=0)
    created_at = Column(Integer, nullable=True)
    updated_at = Column(Integer, nullable=False, index=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "activities_json": self.activities_json,
            "max_count": self.max_count,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
