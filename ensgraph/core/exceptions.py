"""
Application-level exceptions.

- BackendUnavailableError: durable store unreachable or not configured.
- ExplorerError: block explorer unreachable, timed out, or returned an error status.
- EdgeSyncError: backend rejected an optimistic edge mutation (already rolled back).

Validation problems (missing source/target, empty address) are plain ValueError.
"""

from __future__ import annotations

from typing import Any


class EnsGraphError(Exception):
    """Base class for ENS Graph errors."""


class BackendUnavailableError(EnsGraphError):
    """Durable backend could not be reached or refused the operation."""


class DatabaseNotConfiguredError(BackendUnavailableError):
    """No database URL or SQLite path is configured."""

    def __init__(self, message: str = "No database configured") -> None:
        super().__init__(message)


class ExplorerError(EnsGraphError):
    """Transaction-history source failed (network, timeout, HTTP status, or API status)."""


class EdgeSyncError(EnsGraphError):
    """
    Persisting an optimistic edge change failed. The local view has already been
    rolled back; edge is the edge that was added or restored.
    """

    def __init__(self, message: str, edge: Any = None) -> None:
        super().__init__(message)
        self.edge = edge
