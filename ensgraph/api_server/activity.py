"""
FastAPI router: GET /activity?address=...

Always 200 with a 180-day series once an address is given; degraded results carry
stale / demo / error fields instead of an error status.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from ensgraph.activity.store import ActivityStore
from ensgraph.api_server.dependencies import get_activity_store

router = APIRouter(tags=["activity"])


@router.get("/activity")
async def get_activity(
    address: Optional[str] = Query(None, description="Account address (any case)"),
    store: ActivityStore = Depends(get_activity_store),
) -> JSONResponse:
    if not address or not address.strip():
        raise HTTPException(status_code=400, detail="Address is required")
    result = await store.get_activity(address)
    return JSONResponse(content=result.to_dict())
