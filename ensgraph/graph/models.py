"""
Edge model and store mode for the relationship graph.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class StoreMode(str, Enum):
    """EdgeStore backend mode. PERSISTENT and LOCAL_FALLBACK are terminal for the session."""

    UNINITIALIZED = "uninitialized"
    PERSISTENT = "persistent"
    LOCAL_FALLBACK = "local_fallback"


@dataclass(frozen=True)
class Edge:
    """Directed relationship source -> target between two identity labels (ENS names)."""

    id: Optional[int]
    source: str
    target: str
    created_at: Optional[int] = None
    """Unix timestamp (seconds) set by the store; None for optimistic/local edges."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Edge":
        created_at = data.get("created_at", data.get("createdAt"))
        return cls(
            id=int(data["id"]) if data.get("id") is not None else None,
            source=str(data["source"]),
            target=str(data["target"]),
            created_at=int(created_at) if isinstance(created_at, (int, float)) else None,
        )


# Sample network used when neither the backend nor local storage has edges
DEMO_EDGES: tuple[Edge, ...] = (
    Edge(id=1, source="vitalik.eth", target="balajis.eth"),
    Edge(id=2, source="vitalik.eth", target="nick.eth"),
    Edge(id=3, source="balajis.eth", target="nick.eth"),
    Edge(id=4, source="nick.eth", target="brantly.eth"),
)
