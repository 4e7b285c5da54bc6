"""
Database engine and session management.

Uses ENSGRAPH_DB_URL / DATABASE_URL / POSTGRES_URL for PostgreSQL when set; otherwise
SQLite at DATABASE_PATH. With neither set there is no database: every session request
raises DatabaseNotConfiguredError and callers degrade (local edge fallback, no-op cache).
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from ensgraph.config import get_settings
from ensgraph.config.env import mask_url
from ensgraph.core.exceptions import DatabaseNotConfiguredError
from ensgraph.database.models import Base
from ensgraph.ensgraph_logging import get_logger

logger = get_logger(__name__)

_engine = None
_SessionLocal: sessionmaker | None = None


def _get_engine():
    """Create or return cached engine. Raises DatabaseNotConfiguredError when nothing is configured."""
    global _engine
    if _engine is None:
        settings = get_settings()
        url = settings.database_url
        if url is None:
            raise DatabaseNotConfiguredError()
        if url.startswith("sqlite"):
            _engine = create_engine(
                url,
                connect_args={"check_same_thread": False},
                pool_pre_ping=True,
            )
        else:
            # Many short request handlers, at most one connection each
            _engine = create_engine(
                url,
                pool_size=settings.db_pool_size,
                max_overflow=0,
                pool_pre_ping=True,
            )
        logger.info("db_engine_created", url=mask_url(url))
    return _engine


def _get_session_factory() -> sessionmaker:
    """Return session factory bound to engine."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_get_engine())
    return _SessionLocal


@contextmanager
def session_scope() -> Iterator[Session]:
    """Context manager for a single session. Commits on success, rolls back on error."""
    factory = _get_session_factory()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def dialect_name() -> str:
    """Return the engine dialect name ("postgresql" or "sqlite")."""
    return _get_engine().dialect.name


def init_db() -> None:
    """
    Create edges and activity_cache tables if they do not exist.
    Safe to call on every startup.
    """
    try:
        engine = _get_engine()
        Base.metadata.create_all(bind=engine)
        logger.info("db_init", url=mask_url(str(engine.url)))
    except DatabaseNotConfiguredError:
        raise
    except Exception as e:
        logger.exception("db_init_failed", error=str(e))
        raise


def reset_engine_for_test() -> None:
    """
    Dispose and clear the cached engine and session factory. For tests; use with a new DATABASE_PATH.
    """
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None


def __getattr__(name: str) -> Any:
    """Lazy engine: expose 'engine' without creating at import time until first access."""
    if name == "engine":
        return _get_engine()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
