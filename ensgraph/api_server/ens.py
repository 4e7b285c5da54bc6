"""
FastAPI router: ENS avatar, name search, and profile.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ensgraph.api_server.dependencies import get_ens_resolver, get_ens_search
from ensgraph.ens.resolver import EnsResolver
from ensgraph.ens.search import EnsSearchClient
from ensgraph.ensgraph_logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["ens"])


@router.get("/avatar")
async def get_avatar(
    name: Optional[str] = Query(None, description="ENS name"),
    resolver: EnsResolver = Depends(get_ens_resolver),
) -> dict[str, Any]:
    """Avatar URL for a name; {"avatar": null, "error": ...} when resolution fails."""
    if not name or not name.strip():
        raise HTTPException(status_code=400, detail="Name is required")
    try:
        avatar = await resolver.get_avatar(name.strip())
    except Exception as e:
        logger.warning("ens_avatar_failed", name=name, error=str(e))
        return {"avatar": None, "error": str(e) or "Failed to fetch avatar"}
    return {"avatar": avatar}


@router.get("/ens-search")
async def ens_search(
    q: Optional[str] = Query(None, description="Name prefix, at least 3 characters"),
    search: EnsSearchClient = Depends(get_ens_search),
) -> list[dict[str, str]]:
    """Up to 10 matching .eth names; empty list on short query or upstream error."""
    return await search.search(q or "")


@router.get("/profile/{name}")
async def get_profile(
    name: str,
    resolver: EnsResolver = Depends(get_ens_resolver),
) -> dict[str, Any]:
    """Resolved address, avatar and text records for a name."""
    profile = await resolver.fetch_profile(name.strip())
    return profile.to_dict()
