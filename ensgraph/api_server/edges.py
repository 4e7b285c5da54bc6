"""
FastAPI router: GET/POST/DELETE /edges.

Direct pass-through to the edges table. Missing fields -> 400, persistence failure
(including no database configured) -> 500.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ensgraph.database import repositories
from ensgraph.ensgraph_logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/edges", tags=["edges"])


class AddEdgeRequest(BaseModel):
    """POST /edges body. Fields are optional here so a missing one maps to 400, not 422."""

    source: Optional[str] = Field(None, max_length=255, description="Source ENS name")
    target: Optional[str] = Field(None, max_length=255, description="Target ENS name")


class DeleteEdgeRequest(BaseModel):
    """DELETE /edges body."""

    id: Optional[int] = Field(None, description="Edge id assigned by the store")


@router.get("")
def list_edges() -> list[dict[str, Any]]:
    """Return all edges (id, source, target, created_at)."""
    try:
        return repositories.list_edges()
    except Exception as e:
        logger.error("edges_get_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Failed to fetch edges") from e


@router.post("")
def add_edge(body: Optional[AddEdgeRequest] = None) -> JSONResponse:
    """Insert an edge and return the stored row."""
    source = ((body.source if body else None) or "").strip()
    target = ((body.target if body else None) or "").strip()
    if not source or not target:
        raise HTTPException(status_code=400, detail="Source and target are required")
    try:
        edge = repositories.insert_edge(source, target)
    except Exception as e:
        logger.error("edges_post_failed", source=source, target=target, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to add edge") from e
    return JSONResponse(status_code=200, content=edge)


@router.delete("")
def delete_edge(body: Optional[DeleteEdgeRequest] = None) -> dict[str, bool]:
    """Delete an edge by id."""
    edge_id = body.id if body else None
    if not edge_id:
        raise HTTPException(status_code=400, detail="ID is required")
    try:
        repositories.delete_edge(edge_id)
    except Exception as e:
        logger.error("edges_delete_failed", edge_id=edge_id, error=str(e))
        raise HTTPException(status_code=500, detail="Failed to delete edge") from e
    return {"success": True}
