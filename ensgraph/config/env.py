"""
Environment variable loading for ENS Graph.

- ENSGRAPH_DB_URL / DATABASE_URL / POSTGRES_URL: PostgreSQL URL for edges and activity cache
- DATABASE_PATH: SQLite file used when no URL is set
- ETHERSCAN_API_KEY: Etherscan API V2 key
- ALCHEMY_KEY: Alchemy key or full RPC URL for ENS resolution
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

# Project root: config is ensgraph/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

PUBLIC_RPC_URL = "https://cloudflare-eth.com"
ALCHEMY_MAINNET_URL_TEMPLATE = "https://eth-mainnet.g.alchemy.com/v2/{key}"

# Value shipped in the sample .env; treated as unset
POSTGRES_URL_PLACEHOLDER = "your-vercel-postgres-or-supabase-url"


def load_ensgraph_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    from dotenv import load_dotenv

    load_dotenv(_ENV_PATH)


def get_rpc_url() -> str:
    """
    Resolve Ethereum mainnet RPC URL.
    ALCHEMY_KEY may be a full URL or a bare key; without it the public RPC is used.
    """
    load_ensgraph_env()
    key = (os.getenv("ALCHEMY_KEY") or os.getenv("ALCHEMY_API_KEY") or "").strip()
    if key:
        if key.startswith("http"):
            return key
        return ALCHEMY_MAINNET_URL_TEMPLATE.format(key=key)
    return PUBLIC_RPC_URL


def get_database_url() -> str | None:
    """
    Return the configured database URL, or None when no database is configured.
    Order: ENSGRAPH_DB_URL > DATABASE_URL > POSTGRES_URL > sqlite:///DATABASE_PATH.
    """
    load_ensgraph_env()
    for var in ("ENSGRAPH_DB_URL", "DATABASE_URL", "POSTGRES_URL"):
        url = (os.getenv(var) or "").strip()
        if url and url != POSTGRES_URL_PLACEHOLDER:
            return _with_driver(url)
    path = (os.getenv("DATABASE_PATH") or "").strip()
    if path:
        return f"sqlite:///{path}"
    return None


def _with_driver(url: str) -> str:
    """Use the psycopg (v3) driver for bare postgres:// URLs."""
    if url.startswith("postgres://"):
        return "postgresql+psycopg://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        return "postgresql+psycopg://" + url[len("postgresql://"):]
    return url


def has_database_config() -> bool:
    """Return True if a database URL or SQLite path is configured."""
    return get_database_url() is not None


def get_etherscan_api_key() -> str | None:
    """Return ETHERSCAN_API_KEY or None."""
    load_ensgraph_env()
    key = (os.getenv("ETHERSCAN_API_KEY") or "").strip()
    return key or None


def mask_url(url: str) -> str:
    """Strip credentials and query string for logging."""
    return url.split("?")[0].split("@")[-1].split("//")[-1]
