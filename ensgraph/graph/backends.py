"""
Durable edge backends for EdgeStore.

All access goes through the abstract interface so the store can run against the
database directly (server side) or against the HTTP API (client side).
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any

import httpx
from sqlalchemy.exc import SQLAlchemyError

from ensgraph.core.exceptions import BackendUnavailableError
from ensgraph.database import repositories
from ensgraph.ensgraph_logging import get_logger
from ensgraph.graph.models import Edge

logger = get_logger(__name__)

EDGES_PATH = "/api/edges"
DEFAULT_HTTP_TIMEOUT_SEC = 15.0


class EdgeBackend(ABC):
    """Abstract durable store for edges. Every method raises BackendUnavailableError on failure."""

    @abstractmethod
    async def list_edges(self) -> list[Edge]:
        """Return all persisted edges."""
        ...

    @abstractmethod
    async def add_edge(self, source: str, target: str) -> Edge:
        """Persist a new edge and return it with its store-assigned id and created_at."""
        ...

    @abstractmethod
    async def delete_edge(self, edge_id: int) -> None:
        """Delete the edge with the given id."""
        ...


class DatabaseEdgeBackend(EdgeBackend):
    """Edges table via SQLAlchemy repositories, run off the event loop."""

    async def list_edges(self) -> list[Edge]:
        rows = await self._call(repositories.list_edges)
        return [Edge.from_dict(r) for r in rows]

    async def add_edge(self, source: str, target: str) -> Edge:
        row = await self._call(repositories.insert_edge, source, target)
        return Edge.from_dict(row)

    async def delete_edge(self, edge_id: int) -> None:
        await self._call(repositories.delete_edge, edge_id)

    @staticmethod
    async def _call(fn: Any, *args: Any) -> Any:
        try:
            return await asyncio.to_thread(fn, *args)
        except SQLAlchemyError as e:
            raise BackendUnavailableError(f"Database error: {e}") from e


class HttpEdgeBackend(EdgeBackend):
    """Edges over the HTTP API: GET/POST/DELETE /api/edges."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_sec: float = DEFAULT_HTTP_TIMEOUT_SEC,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = base_url.rstrip("/") + EDGES_PATH
        self.timeout_sec = timeout_sec
        self._client = client

    async def list_edges(self) -> list[Edge]:
        data = await self._request("GET")
        if not isinstance(data, list):
            raise BackendUnavailableError("Unexpected edges payload")
        return [Edge.from_dict(item) for item in data]

    async def add_edge(self, source: str, target: str) -> Edge:
        data = await self._request("POST", {"source": source, "target": target})
        return Edge.from_dict(data)

    async def delete_edge(self, edge_id: int) -> None:
        await self._request("DELETE", {"id": edge_id})

    async def _request(self, method: str, body: dict[str, Any] | None = None) -> Any:
        try:
            if self._client is not None:
                response = await self._client.request(method, self.url, json=body)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_sec) as client:
                    response = await client.request(method, self.url, json=body)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise BackendUnavailableError(
                f"{method} {self.url} returned {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise BackendUnavailableError(f"{method} {self.url} failed: {e}") from e
