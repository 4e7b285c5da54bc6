"""
Relationship graph: edges between ENS names, an optimistic EdgeStore, and its backends.
"""

from ensgraph.graph.backends import DatabaseEdgeBackend, EdgeBackend, HttpEdgeBackend
from ensgraph.graph.edge_store import EdgeStore
from ensgraph.graph.local_storage import LocalEdgeStorage
from ensgraph.graph.models import DEMO_EDGES, Edge, StoreMode

__all__ = [
    "DEMO_EDGES",
    "DatabaseEdgeBackend",
    "Edge",
    "EdgeBackend",
    "EdgeStore",
    "HttpEdgeBackend",
    "LocalEdgeStorage",
    "StoreMode",
]
