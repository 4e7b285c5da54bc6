"""
Local JSON-file persistence for edges, used when the durable backend is unavailable.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from ensgraph.ensgraph_logging import get_logger
from ensgraph.graph.models import Edge

logger = get_logger(__name__)


class LocalEdgeStorage:
    """Edge list persisted as a JSON array in a single file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> list[Edge] | None:
        """Return stored edges, or None when the file is missing, unreadable or not an edge list."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("local_edges_unreadable", path=str(self.path), error=str(e))
            return None
        if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
            logger.warning("local_edges_malformed", path=str(self.path), kind=type(data).__name__)
            return None
        try:
            return [Edge.from_dict(item) for item in data]
        except (TypeError, KeyError, ValueError) as e:
            logger.warning("local_edges_unreadable", path=str(self.path), error=str(e))
            return None

    def save(self, edges: Sequence[Edge]) -> None:
        """Write edges to the file, replacing its contents."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps([e.to_dict() for e in edges], indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
