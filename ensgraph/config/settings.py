"""
Application settings.

Typed settings for the API server, activity store, edge store and ENS clients,
read from environment variables (and .env via env.load_ensgraph_env).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from ensgraph.config.env import (
    get_database_url,
    get_etherscan_api_key,
    get_rpc_url,
    load_ensgraph_env,
)

DEFAULT_ETHERSCAN_BASE_URL = "https://api.etherscan.io/v2/api"
DEFAULT_ENS_SUBGRAPH_URL = "https://api.thegraph.com/subgraphs/name/ensdomains/ens"


@dataclass
class Settings:
    """Application configuration."""

    # Persistence
    database_url: Optional[str] = None
    db_pool_size: int = 5
    edges_local_path: str = "ens-graph-edges.json"

    # Block explorer
    etherscan_api_key: Optional[str] = None
    etherscan_base_url: str = DEFAULT_ETHERSCAN_BASE_URL
    etherscan_chain_id: int = 1
    explorer_timeout_sec: float = 60.0

    # Activity cache
    activity_cache_ttl_sec: int = 24 * 60 * 60
    activity_window_days: int = 180

    # ENS
    rpc_url: str = "https://cloudflare-eth.com"
    ens_subgraph_url: str = DEFAULT_ENS_SUBGRAPH_URL
    ens_search_timeout_sec: float = 10.0

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "info"

    @property
    def has_database(self) -> bool:
        return self.database_url is not None

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        load_ensgraph_env()
        return cls(
            database_url=get_database_url(),
            db_pool_size=int(os.getenv("DB_POOL_SIZE", "5").strip() or "5"),
            edges_local_path=os.getenv("EDGES_LOCAL_PATH", "ens-graph-edges.json").strip()
            or "ens-graph-edges.json",
            etherscan_api_key=get_etherscan_api_key(),
            etherscan_base_url=os.getenv("ETHERSCAN_BASE_URL", DEFAULT_ETHERSCAN_BASE_URL).strip()
            or DEFAULT_ETHERSCAN_BASE_URL,
            etherscan_chain_id=int(os.getenv("ETHERSCAN_CHAIN_ID", "1").strip() or "1"),
            explorer_timeout_sec=float(os.getenv("EXPLORER_TIMEOUT_SEC", "60").strip() or "60"),
            activity_cache_ttl_sec=int(os.getenv("ACTIVITY_CACHE_TTL_SEC", "86400").strip() or "86400"),
            rpc_url=get_rpc_url(),
            ens_subgraph_url=os.getenv("ENS_SUBGRAPH_URL", DEFAULT_ENS_SUBGRAPH_URL).strip()
            or DEFAULT_ENS_SUBGRAPH_URL,
            api_host=os.getenv("API_HOST", "0.0.0.0").strip() or "0.0.0.0",
            api_port=int(os.getenv("API_PORT", "8000").strip() or "8000"),
            log_level=os.getenv("LOG_LEVEL", "info").strip().lower() or "info",
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, built from the environment on first call."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings_for_test() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
