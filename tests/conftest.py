"""
Pytest fixtures for ENS Graph tests. Uses a temporary SQLite DB via DATABASE_PATH.
"""

from __future__ import annotations

import pytest

DB_ENV_VARS = ("ENSGRAPH_DB_URL", "DATABASE_URL", "POSTGRES_URL", "DATABASE_PATH")


def _reset_db_state() -> None:
    from ensgraph.config import reset_settings_for_test
    from ensgraph.database.connection import reset_engine_for_test

    reset_engine_for_test()
    reset_settings_for_test()


@pytest.fixture
def db(tmp_path, monkeypatch):
    """
    Point the database at a temporary SQLite file and create tables.
    Unset DATABASE_URL and friends so SQLite is used. Yields the repositories module.
    """
    for var in DB_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "ensgraph.db"))
    _reset_db_state()

    from ensgraph.database import init_db, repositories

    init_db()
    yield repositories
    _reset_db_state()


@pytest.fixture
def no_db(monkeypatch):
    """No database configured at all."""
    for var in DB_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    _reset_db_state()
    yield
    _reset_db_state()


@pytest.fixture
def app():
    """The FastAPI app; dependency overrides and app.state stores are cleared after the test."""
    from ensgraph.api_server.server import app as fastapi_app

    yield fastapi_app
    fastapi_app.dependency_overrides.clear()
    for attr in ("activity_store", "ens_resolver", "ens_search"):
        if hasattr(fastapi_app.state, attr):
            delattr(fastapi_app.state, attr)


@pytest.fixture
def client(db, app):
    """FastAPI TestClient. Depends on db so the temp DB is set before requests run."""
    from fastapi.testclient import TestClient

    return TestClient(app)


@pytest.fixture
def no_db_client(no_db, app):
    """FastAPI TestClient with no database configured."""
    from fastapi.testclient import TestClient

    return TestClient(app)
