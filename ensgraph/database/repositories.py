"""
Repository functions over the edges and activity_cache tables.

Synchronous SQLAlchemy calls; async callers run them with asyncio.to_thread.
Every write is a single statement, atomic at the row level.
"""

from __future__ import annotations

import time
from typing import Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from ensgraph.core.exceptions import DatabaseNotConfiguredError
from ensgraph.database.connection import dialect_name, session_scope
from ensgraph.database.models import ActivityCacheRow, EdgeRow
from ensgraph.ensgraph_logging import get_logger

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Edges
# -----------------------------------------------------------------------------


def list_edges() -> list[dict[str, Any]]:
    """Return all edges as dicts (id, source, target, created_at) ordered by id."""
    try:
        with session_scope() as session:
            rows = session.query(EdgeRow).order_by(EdgeRow.id).all()
            return [r.to_dict() for r in rows]
    except DatabaseNotConfiguredError:
        raise
    except Exception as e:
        logger.exception("edges_list_failed", error=str(e))
        raise


def insert_edge(source: str, target: str) -> dict[str, Any]:
    """
    Insert one edge. source and target must be non-empty. Returns the stored row
    with its assigned id and created_at.
    """
    source = (source or "").strip()
    target = (target or "").strip()
    if not source or not target:
        raise ValueError("Source and target are required")
    try:
        with session_scope() as session:
            row = EdgeRow(source=source, target=target, created_at=int(time.time()))
            session.add(row)
            session.flush()
            stored = row.to_dict()
        logger.info("edge_inserted", edge_id=stored["id"], source=source, target=target)
        return stored
    except DatabaseNotConfiguredError:
        raise
    except Exception as e:
        logger.exception("edge_insert_failed", source=source, target=target, error=str(e))
        raise


def delete_edge(edge_id: int) -> bool:
    """Delete edge by id. Returns True if a row was removed."""
    try:
        with session_scope() as session:
            deleted = session.query(EdgeRow).filter(EdgeRow.id == edge_id).delete()
        logger.info("edge_deleted", edge_id=edge_id, deleted=bool(deleted))
        return bool(deleted)
    except DatabaseNotConfiguredError:
        raise
    except Exception as e:
        logger.exception("edge_delete_failed", edge_id=edge_id, error=str(e))
        raise


# -----------------------------------------------------------------------------
# Activity cache
# -----------------------------------------------------------------------------


def get_activity_cache(address: str) -> dict[str, Any] | None:
    """Return the cache row for a lowercase address, or None."""
    with session_scope() as session:
        row = (
            session.query(ActivityCacheRow)
            .filter(ActivityCacheRow.address == address)
            .first()
        )
        return row.to_dict() if row else None


def upsert_activity_cache(
    address: str,
    activities_json: str,
    max_count: int,
    updated_at: int | None = None,
) -> None:
    """Insert or replace the cache row for address (INSERT ... ON CONFLICT (address) DO UPDATE)."""
    now = int(updated_at if updated_at is not None else time.time())
    values = {
        "address": address,
        "activities_json": activities_json,
        "max_count": max_count,
        "created_at": now,
        "updated_at": now,
    }
    insert = pg_insert if dialect_name() == "postgresql" else sqlite_insert
    stmt = insert(ActivityCacheRow).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=["address"],
        set_={
            "activities_json": stmt.excluded.activities_json,
            "max_count": stmt.excluded.max_count,
            "updated_at": stmt.excluded.updated_at,
        },
    )
    with session_scope() as session:
        session.execute(stmt)
    logger.debug("activity_cache_written", address=address, max_count=max_count)


def delete_activity_cache(address: str) -> int:
    """Delete the cache row for address. Returns number of rows removed."""
    with session_scope() as session:
        deleted = (
            session.query(ActivityCacheRow)
            .filter(ActivityCacheRow.address == address)
            .delete()
        )
    logger.info("activity_cache_deleted", address=address, deleted=deleted)
    return int(deleted)
