"""
Tests for GET /api/activity with the ActivityStore dependency overridden.
"""

from __future__ import annotations

from ensgraph.activity.store import ActivityStore
from ensgraph.api_server.dependencies import get_activity_store
from fakes import ADDRESS, NOW, FakeActivityCache, FakeExplorer, tx


def _override(app, explorer, cache=None):
    store = ActivityStore(explorer, cache or FakeActivityCache(), clock=lambda: NOW)
    app.dependency_overrides[get_activity_store] = lambda: store
    return store


def test_activity_requires_address(client):
    r = client.get("/api/activity")
    assert r.status_code == 400
    assert r.json() == {"detail": "Address is required"}
    r = client.get("/api/activity", params={"address": "  "})
    assert r.status_code == 400


def test_activity_fresh_then_cached(client, app):
    explorer = FakeExplorer([tx(NOW), tx(NOW)])
    _override(app, explorer)

    first = client.get("/api/activity", params={"address": ADDRESS.upper().replace("0X", "0x")}).json()
    assert first["cached"] is False
    assert len(first["activities"]) == 180
    assert first["activities"][-1] == {"date": "2026-03-15", "count": 2}
    assert first["maxCount"] == 2
    assert "demo" not in first

    second = client.get("/api/activity", params={"address": ADDRESS}).json()
    assert second["cached"] is True
    assert second["cacheAge"] == 0
    assert len(explorer.calls) == 1


def test_activity_demo_is_200(client, app):
    _override(app, FakeExplorer(fail=True))
    r = client.get("/api/activity", params={"address": ADDRESS})
    assert r.status_code == 200
    body = r.json()
    assert body["demo"] is True
    assert body["error"] == "Failed to fetch from Etherscan API"
    assert body["maxCount"] == 1
    assert len(body["activities"]) == 180
