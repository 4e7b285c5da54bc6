"""
Database layer: edges and activity cache tables over SQLAlchemy.

PostgreSQL when a URL is configured, SQLite when only DATABASE_PATH is set,
no database otherwise (DatabaseNotConfiguredError).
"""

from ensgraph.database.connection import init_db, reset_engine_for_test, session_scope
from ensgraph.database.models import ActivityCacheRow, Base, EdgeRow

__all__ = [
    "ActivityCacheRow",
    "Base",
    "EdgeRow",
    "init_db",
    "reset_engine_for_test",
    "session_scope",
]
