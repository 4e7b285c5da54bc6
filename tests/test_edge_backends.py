"""
Tests for edge backends (database, HTTP) and local JSON storage.
"""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from ensgraph.core.exceptions import BackendUnavailableError, DatabaseNotConfiguredError
from ensgraph.graph import (
    DEMO_EDGES,
    DatabaseEdgeBackend,
    Edge,
    EdgeStore,
    HttpEdgeBackend,
    LocalEdgeStorage,
    StoreMode,
)


def test_database_backend_crud(db):
    backend = DatabaseEdgeBackend()

    async def scenario():
        first = await backend.add_edge("alice.eth", "bob.eth")
        second = await backend.add_edge("bob.eth", "carol.eth")
        await backend.delete_edge(first.id)
        return first, second, await backend.list_edges()

    first, second, remaining = asyncio.run(scenario())
    assert first.id != second.id
    assert first.created_at is not None
    assert remaining == [second]


def test_database_backend_without_db_raises(no_db):
    with pytest.raises(BackendUnavailableError):
        asyncio.run(DatabaseEdgeBackend().list_edges())


def test_edge_store_over_missing_db_falls_back(no_db, tmp_path):
    store = EdgeStore(DatabaseEdgeBackend(), LocalEdgeStorage(tmp_path / "edges.json"))
    asyncio.run(store.list_edges())
    assert store.mode is StoreMode.LOCAL_FALLBACK


def test_repositories_reject_blank_edge(db):
    with pytest.raises(ValueError, match="Source and target are required"):
        db.insert_edge(" ", "bob.eth")
    assert db.list_edges() == []
    assert db.delete_edge(123) is False


def test_repositories_raise_when_not_configured(no_db):
    from ensgraph.database import repositories

    with pytest.raises(DatabaseNotConfiguredError, match="No database configured"):
        repositories.list_edges()


def _http_backend(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpEdgeBackend("http://api.test/", client=client)


def test_http_backend_requests():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        seen.append((request.method, str(request.url), body))
        if request.method == "GET":
            return httpx.Response(200, json=[{"id": 1, "source": "a.eth", "target": "b.eth", "created_at": 5}])
        if request.method == "POST":
            return httpx.Response(200, json={"id": 2, **body, "created_at": 6})
        return httpx.Response(200, json={"success": True})

    backend = _http_backend(handler)

    async def scenario():
        listed = await backend.list_edges()
        added = await backend.add_edge("c.eth", "d.eth")
        await backend.delete_edge(2)
        return listed, added

    listed, added = asyncio.run(scenario())
    assert listed == [Edge(id=1, source="a.eth", target="b.eth", created_at=5)]
    assert added == Edge(id=2, source="c.eth", target="d.eth", created_at=6)
    assert [(m, u) for m, u, _ in seen] == [
        ("GET", "http://api.test/api/edges"),
        ("POST", "http://api.test/api/edges"),
        ("DELETE", "http://api.test/api/edges"),
    ]
    assert seen[1][2] == {"source": "c.eth", "target": "d.eth"}
    assert seen[2][2] == {"id": 2}


def test_http_backend_error_status():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"detail": "Failed to fetch edges"})

    with pytest.raises(BackendUnavailableError, match="500"):
        asyncio.run(_http_backend(handler).list_edges())


def test_http_backend_unexpected_payload():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"detail": "nope"})

    with pytest.raises(BackendUnavailableError, match="Unexpected"):
        asyncio.run(_http_backend(handler).list_edges())


def test_local_storage_round_trip(tmp_path):
    storage = LocalEdgeStorage(tmp_path / "nested" / "edges.json")
    assert storage.load() is None
    edges = [Edge(id=1, source="a.eth", target="b.eth"), Edge(id=2, source="b.eth", target="c.eth", created_at=9)]
    storage.save(edges)
    assert storage.load() == edges


def test_local_storage_unreadable_file(tmp_path):
    path = tmp_path / "edges.json"
    path.write_text("{not json")
    assert LocalEdgeStorage(path).load() is None
    path.write_text(json.dumps([{"id": 1}]))
    assert LocalEdgeStorage(path).load() is None


def test_edge_from_dict_accepts_camel_case():
    edge = Edge.from_dict({"id": "3", "source": "a.eth", "target": "b.eth", "createdAt": 1700000000})
    assert edge == Edge(id=3, source="a.eth", target="b.eth", created_at=1700000000)


def test_local_storage_wrong_shape_json(tmp_path):
    path = tmp_path / "edges.json"
    for payload in ({"edges": []}, [1, 2], "edges", [{"id": 1, "source": "a.eth", "target": "b.eth"}, None]):
        path.write_text(json.dumps(payload))
        assert LocalEdgeStorage(path).load() is None


def test_edge_store_wrong_shape_local_file_seeds_demo(tmp_path):
    path = tmp_path / "edges.json"
    path.write_text(json.dumps({"edges": []}))
    store = EdgeStore(None, LocalEdgeStorage(path))
    assert asyncio.run(store.list_edges()) == list(DEMO_EDGES)
    assert store.mode is StoreMode.LOCAL_FALLBACK
