"""
FastAPI server for the ENS Graph API.

Routes (all under /api): edges CRUD, activity histogram by address, ENS avatar,
ENS name search, ENS profile. Config via env (see ensgraph.config).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from ensgraph.api_server.activity import router as activity_router
from ensgraph.api_server.dependencies import (
    build_activity_store,
    build_ens_resolver,
    build_ens_search,
)
from ensgraph.api_server.edges import router as edges_router
from ensgraph.api_server.ens import router as ens_router
from ensgraph.config import get_settings
from ensgraph.database import init_db
from ensgraph.ensgraph_logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables when a database is configured and build app-scoped stores and clients."""
    settings = get_settings()
    if settings.has_database:
        try:
            init_db()
        except Exception as e:
            logger.warning("db_init_skip", error=str(e))
    else:
        logger.warning("db_not_configured", detail="edges API returns 500; activity cache disabled")

    app.state.activity_store = build_activity_store(settings)
    app.state.ens_resolver = build_ens_resolver(settings)
    app.state.ens_search = build_ens_search(settings)
    logger.info("api_started", has_database=settings.has_database)

    yield

    logger.info("api_stopped")


app = FastAPI(
    title="ENS Graph API",
    description="ENS profiles, cached on-chain activity, and a relationship graph between names.",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(edges_router, prefix="/api")
app.include_router(activity_router, prefix="/api")
app.include_router(ens_router, prefix="/api")


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness check: API is up."""
    return {"status": "ok"}


@app.exception_handler(HTTPException)
def http_exception_handler(request: Any, exc: HTTPException) -> JSONResponse:
    """Consistent JSON error response for HTTPException."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )
