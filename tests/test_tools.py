"""
Tests for the command-line tools (cache clearing, edge client).
"""

from __future__ import annotations

from datetime import date

import pytest

from ensgraph.activity.histogram import empty_series
from ensgraph.activity.models import series_to_json
from ensgraph.graph import EdgeStore, LocalEdgeStorage, StoreMode
from ensgraph.tools import clear_activity_cache, edge_cli
from fakes import ADDRESS, FakeEdgeBackend


def test_clear_activity_cache(db, capsys):
    db.upsert_activity_cache(ADDRESS, series_to_json(empty_series(date(2026, 3, 15))), 1, 100)
    assert clear_activity_cache.main([ADDRESS.upper().replace("0X", "0x")]) == 0
    assert db.get_activity_cache(ADDRESS) is None
    assert "Deleted 1 cache entry" in capsys.readouterr().out


def test_clear_activity_cache_invalid_address(db, capsys):
    assert clear_activity_cache.main(["not-an-address"]) == 1
    assert "Invalid Ethereum address" in capsys.readouterr().err


def test_clear_rejects_invalid_address():
    with pytest.raises(ValueError):
        clear_activity_cache.clear("0x1234")


@pytest.fixture
def cli_backend(monkeypatch, tmp_path):
    backend = FakeEdgeBackend()
    path = tmp_path / "edges.json"

    def build_store(api_url, local_path, validate):
        return EdgeStore(backend, LocalEdgeStorage(path), id_seed=500)

    monkeypatch.setattr(edge_cli, "build_store", build_store)
    return backend


def test_edge_cli_add_and_list(cli_backend, capsys):
    assert edge_cli.main(["add", "alice.eth", "bob.eth"]) == 0
    out = capsys.readouterr().out
    assert "Connected: alice.eth -> bob.eth (id 1)" in out
    assert "[api] 1 edge(s)" in out
    assert cli_backend.add_calls == [("alice.eth", "bob.eth")]


def test_edge_cli_delete_failure_reports_rollback(cli_backend, capsys):
    edge_cli.main(["add", "alice.eth", "bob.eth"])
    capsys.readouterr()
    cli_backend.fail_delete = True
    assert edge_cli.main(["delete", "1"]) == 1
    err = capsys.readouterr().err
    assert "ERROR:" in err
    assert "NOTICE: Failed to delete alice.eth -> bob.eth" in err


def test_edge_cli_falls_back_locally(cli_backend, capsys):
    cli_backend.fail_list = True
    assert edge_cli.main(["list"]) == 0
    assert "[local] 4 edge(s)" in capsys.readouterr().out


def test_edge_cli_unknown_id(cli_backend, capsys):
    assert edge_cli.main(["delete", "77"]) == 1
    assert "ERROR:" in capsys.readouterr().err


def test_build_store_uses_http_backend(tmp_path):
    store = edge_cli.build_store("http://localhost:8000", str(tmp_path / "e.json"), validate=False)
    assert isinstance(store, EdgeStore)
    assert store.mode is StoreMode.UNINITIALIZED
