"""
FastAPI dependencies: app-scoped stores and clients.

Built in the lifespan and kept on app.state; built lazily on first use when the
app runs without its lifespan (e.g. TestClient used outside a with-block).
Tests replace them through app.dependency_overrides.
"""

from __future__ import annotations

from fastapi import Request

from ensgraph.activity.cache import ActivityCache
from ensgraph.activity.etherscan import EtherscanClient
from ensgraph.activity.store import ActivityStore
from ensgraph.config import Settings, get_settings
from ensgraph.ens.resolver import EnsResolver
from ensgraph.ens.search import EnsSearchClient


def build_activity_store(settings: Settings) -> ActivityStore:
    return ActivityStore(
        EtherscanClient.from_settings(settings),
        ActivityCache() if settings.has_database else None,
        ttl_sec=settings.activity_cache_ttl_sec,
        window_days=settings.activity_window_days,
    )


def build_ens_resolver(settings: Settings) -> EnsResolver:
    return EnsResolver(rpc_url=settings.rpc_url)


def build_ens_search(settings: Settings) -> EnsSearchClient:
    return EnsSearchClient(
        subgraph_url=settings.ens_subgraph_url,
        timeout_sec=settings.ens_search_timeout_sec,
    )


def get_activity_store(request: Request) -> ActivityStore:
    store = getattr(request.app.state, "activity_store", None)
    if store is None:
        store = request.app.state.activity_store = build_activity_store(get_settings())
    return store


def get_ens_resolver(request: Request) -> EnsResolver:
    resolver = getattr(request.app.state, "ens_resolver", None)
    if resolver is None:
        resolver = request.app.state.ens_resolver = build_ens_resolver(get_settings())
    return resolver


def get_ens_search(request: Request) -> EnsSearchClient:
    search = getattr(request.app.state, "ens_search", None)
    if search is None:
        search = request.app.state.ens_search = build_ens_search(get_settings())
    return search
