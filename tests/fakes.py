"""
In-memory test doubles shared by the test modules: block explorer, activity cache
and edge backend, plus fixed clock constants.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from ensgraph.core.exceptions import BackendUnavailableError, ExplorerError
from ensgraph.graph.backends import EdgeBackend
from ensgraph.graph.models import Edge

# 2026-03-15 12:00:00 UTC
NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc).timestamp()
DAY = 24 * 60 * 60

ADDRESS = "0xb8c2c29ee19d8307cb7255e1cd9cbde883a267d5"


def tx(ts: float) -> dict[str, Any]:
    """Minimal Etherscan transaction record at Unix time ts."""
    return {"timeStamp": str(int(ts)), "from": ADDRESS, "to": "0x" + "1" * 40, "hash": "0x" + "a" * 64}


class FakeExplorer:
    """Stands in for EtherscanClient.fetch_history; counts calls, optionally fails."""

    def __init__(self, records: list[dict[str, Any]] | None = None, fail: bool = False):
        self.records = records or []
        self.fail = fail
        self.calls: list[str] = []

    async def fetch_history(self, address: str) -> list[dict[str, Any]]:
        self.calls.append(address)
        if self.fail:
            raise ExplorerError("Etherscan API unreachable: connection refused")
        return list(self.records)


class FakeActivityCache:
    """In-memory ActivityCache; read/write can be made to fail."""

    def __init__(self, fail_reads: bool = False, fail_writes: bool = False):
        self.entries: dict[str, Any] = {}
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.writes = 0

    async def get(self, address: str):
        if self.fail_reads:
            raise BackendUnavailableError("cache store unreachable")
        return self.entries.get(address)

    async def put(self, record) -> None:
        if self.fail_writes:
            raise BackendUnavailableError("cache store unreachable")
        self.writes += 1
        self.entries[record.address] = record


class FakeEdgeBackend(EdgeBackend):
    """In-memory EdgeBackend with per-operation failure switches and call counters."""

    def __init__(self, edges: list[Edge] | None = None):
        self.rows: list[Edge] = list(edges or [])
        self.next_id = max([e.id for e in self.rows if e.id] + [0]) + 1
        self.fail_list = False
        self.fail_add = False
        self.fail_delete = False
        self.list_calls = 0
        self.add_calls: list[tuple[str, str]] = []
        self.delete_calls: list[int] = []

    async def list_edges(self) -> list[Edge]:
        self.list_calls += 1
        if self.fail_list:
            raise BackendUnavailableError("GET /api/edges returned 500")
        return list(self.rows)

    async def add_edge(self, source: str, target: str) -> Edge:
        self.add_calls.append((source, target))
        if self.fail_add:
            raise BackendUnavailableError("POST /api/edges returned 500")
        edge = Edge(id=self.next_id, source=source, target=target, created_at=int(NOW))
        self.next_id += 1
        self.rows.append(edge)
        return edge

    async def delete_edge(self, edge_id: int) -> None:
        self.delete_calls.append(edge_id)
        if self.fail_delete:
            raise BackendUnavailableError("DELETE /api/edges returned 500")
        self.rows = [e for e in self.rows if e.id != edge_id]
