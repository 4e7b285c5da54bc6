"""
EdgeStore: in-memory edge list with optimistic mutations over a durable backend.

Mode transitions: UNINITIALIZED -> PERSISTENT when the first load from the backend
succeeds, UNINITIALIZED -> LOCAL_FALLBACK when it fails or no backend is configured.
Both are terminal for the store's lifetime; in LOCAL_FALLBACK the backend is never
called again and every mutation is written to local storage instead.

Mutations update the in-memory view before the backend call. When the backend call
fails the exact change is undone (the optimistic edge removed, the deleted Edge object
re-appended) and EdgeSyncError is raised; a message is added to notifications.
"""

from __future__ import annotations

import asyncio
import itertools
import time
from typing import Awaitable, Callable, Optional

from ensgraph.core.exceptions import EdgeSyncError
from ensgraph.ensgraph_logging import get_logger
from ensgraph.graph.backends import EdgeBackend
from ensgraph.graph.local_storage import LocalEdgeStorage
from ensgraph.graph.models import DEMO_EDGES, Edge, StoreMode

logger = get_logger(__name__)

NameValidator = Callable[[str], Awaitable[bool]]


class EdgeStore:
    """Relationship edges with optimistic add/delete, rollback, and a sticky local fallback."""

    def __init__(
        self,
        backend: Optional[EdgeBackend],
        local: Optional[LocalEdgeStorage] = None,
        *,
        name_validator: Optional[NameValidator] = None,
        id_seed: Optional[int] = None,
    ) -> None:
        self._backend = backend
        self._local = local
        self._validate_name = name_validator
        self._mode = StoreMode.UNINITIALIZED
        self._edges: list[Edge] = []
        self._pending: set[int] = set()
        self._init_lock: Optional[asyncio.Lock] = None
        # Temporary ids: time-derived start, strictly increasing
        self._temp_ids = itertools.count(id_seed if id_seed is not None else int(time.time() * 1000))
        self.notifications: list[str] = []

    @property
    def mode(self) -> StoreMode:
        return self._mode

    @property
    def edges(self) -> list[Edge]:
        """Snapshot of the current in-memory view."""
        return list(self._edges)

    def is_pending(self, edge_id: int) -> bool:
        """True while edge_id is a temporary id awaiting backend confirmation."""
        return edge_id in self._pending

    async def list_edges(self) -> list[Edge]:
        """Load edges on first call (backend, else local fallback); afterwards return the current view."""
        await self._ensure_initialized()
        return self.edges

    async def add_edge(self, source: str, target: str) -> Edge:
        """
        Append source -> target immediately with a temporary id, then persist.
        Returns the edge as it stands in the view (backend id once confirmed).
        Raises ValueError for missing/unregistered names, EdgeSyncError after a rollback.
        """
        source = (source or "").strip()
        target = (target or "").strip()
        if not source or not target:
            raise ValueError("Source and target are required")
        await self._ensure_initialized()
        if self._validate_name is not None:
            await self._check_names(source, target)

        temp = Edge(id=self._next_temp_id(), source=source, target=target)
        self._edges.append(temp)
        logger.info("edge_added_optimistic", edge_id=temp.id, source=source, target=target)

        if self._mode is StoreMode.LOCAL_FALLBACK:
            self._save_local()
            return temp

        self._pending.add(temp.id)
        try:
            saved = await self._backend.add_edge(source, target)
        except Exception as e:
            self._pending.discard(temp.id)
            self._remove(temp.id)
            self._notify(f"Failed to save {source} -> {target}")
            logger.warning("edge_add_rolled_back", edge_id=temp.id, source=source, target=target, error=str(e))
            raise EdgeSyncError(f"Failed to add edge {source} -> {target}: {e}", edge=temp) from e
        self._pending.discard(temp.id)

        idx = self._index_of(temp.id)
        if idx is None:
            # Deleted locally while the add was in flight: remove the row the backend just created
            logger.info("edge_deleted_while_pending", edge_id=saved.id)
            try:
                await self._backend.delete_edge(saved.id)
            except Exception as e:
                logger.warning("edge_orphan_delete_failed", edge_id=saved.id, error=str(e))
            return saved

        confirmed = Edge(id=saved.id, source=temp.source, target=temp.target, created_at=saved.created_at)
        self._edges[idx] = confirmed
        logger.info("edge_add_confirmed", temp_id=temp.id, edge_id=saved.id)
        return confirmed

    async def delete_edge(self, edge_id: int) -> Edge:
        """
        Remove the edge immediately, then delete it in the backend.
        Returns the removed edge. Raises KeyError for an unknown id, EdgeSyncError after a rollback.
        """
        await self._ensure_initialized()
        idx = self._index_of(edge_id)
        if idx is None:
            raise KeyError(edge_id)
        removed = self._edges.pop(idx)
        logger.info("edge_deleted_optimistic", edge_id=edge_id)

        if self._mode is StoreMode.LOCAL_FALLBACK:
            self._save_local()
            return removed
        if edge_id in self._pending:
            # Not persisted yet; add_edge deletes the backend row once it is assigned
            return removed

        try:
            await self._backend.delete_edge(edge_id)
        except Exception as e:
            self._edges.append(removed)
            self._notify(f"Failed to delete {removed.source} -> {removed.target}")
            logger.warning("edge_delete_rolled_back", edge_id=edge_id, error=str(e))
            raise EdgeSyncError(f"Failed to delete edge {edge_id}: {e}", edge=removed) from e
        return removed

    async def _ensure_initialized(self) -> None:
        """Run the first load once; concurrent callers wait for it instead of loading again."""
        if self._mode is not StoreMode.UNINITIALIZED:
            return
        if self._init_lock is None:
            self._init_lock = asyncio.Lock()
        async with self._init_lock:
            if self._mode is StoreMode.UNINITIALIZED:
                await self._initialize()

    async def _initialize(self) -> None:
        if self._backend is None:
            self._enter_fallback("no backend configured")
            return
        try:
            edges = await self._backend.list_edges()
        except Exception as e:
            self._enter_fallback(str(e))
            return
        self._edges = list(edges)
        self._mode = StoreMode.PERSISTENT
        logger.info("edge_store_persistent", edges=len(self._edges))

    def _enter_fallback(self, reason: str) -> None:
        self._mode = StoreMode.LOCAL_FALLBACK
        stored = self._local.load() if self._local is not None else None
        self._edges = list(stored) if stored is not None else list(DEMO_EDGES)
        logger.warning(
            "edge_store_local_fallback",
            reason=reason,
            source="local_storage" if stored is not None else "demo",
            edges=len(self._edges),
        )

    async def _check_names(self, source: str, target: str) -> None:
        source_ok, target_ok = await asyncio.gather(
            self._validate_name(source),
            self._validate_name(target),
        )
        if not source_ok and not target_ok:
            raise ValueError(f'Both "{source}" and "{target}" don\'t exist')
        if not source_ok:
            raise ValueError(f'"{source}" is not a registered ENS name')
        if not target_ok:
            raise ValueError(f'"{target}" is not a registered ENS name')

    def _next_temp_id(self) -> int:
        taken = {e.id for e in self._edges}
        candidate = next(self._temp_ids)
        while candidate in taken:
            candidate = next(self._temp_ids)
        return candidate

    def _index_of(self, edge_id: int) -> Optional[int]:
        for i, edge in enumerate(self._edges):
            if edge.id == edge_id:
                return i
        return None

    def _remove(self, edge_id: int) -> None:
        idx = self._index_of(edge_id)
        if idx is not None:
            del self._edges[idx]

    def _save_local(self) -> None:
        if self._local is None:
            return
        try:
            self._local.save(self._edges)
        except OSError as e:
            logger.warning("local_edges_save_failed", path=str(self._local.path), error=str(e))

    def _notify(self, message: str) -> None:
        self.notifications.append(message)
