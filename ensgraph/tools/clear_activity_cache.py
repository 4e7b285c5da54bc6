"""
Delete the cached activity series for one address so the next request refetches it.

How to run:
    From project root (with .env configured):
        python -m ensgraph.tools.clear_activity_cache 0xb8c2C29ee19D8307cb7255e1Cd9CbDE883A267d5

Required env vars:
    DATABASE_URL (PostgreSQL) or DATABASE_PATH (SQLite)
"""

from __future__ import annotations

import argparse
import sys

from ensgraph.config.env import load_ensgraph_env
from ensgraph.database.repositories import delete_activity_cache
from ensgraph.ensgraph_logging import bind_address, get_logger
from ensgraph.utils.address_utils import is_valid_ethereum_address, normalize_address

logger = get_logger(__name__)


def clear(address: str) -> int:
    """Delete the cache row for address (normalized). Returns rows removed."""
    if not is_valid_ethereum_address(address):
        raise ValueError(f"Invalid Ethereum address: {address}")
    return delete_activity_cache(normalize_address(address))


def main(argv: list[str] | None = None) -> int:
    load_ensgraph_env()
    parser = argparse.ArgumentParser(description="Delete the cached activity series for an address.")
    parser.add_argument("address", help="Account address (any case, with or without 0x)")
    args = parser.parse_args(argv)
    try:
        deleted = clear(args.address)
    except Exception as e:
        bind_address(logger, args.address).exception("clear_activity_cache_failed", error=str(e))
        print("ERROR:", e, file=sys.stderr)
        return 1
    print(f"Deleted {deleted} cache entr{'y' if deleted == 1 else 'ies'} for {normalize_address(args.address)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
