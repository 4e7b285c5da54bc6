"""
Create ENS Graph database tables (edges, activity_cache).

Usage:
    python -m ensgraph.database.init_tables
"""

from __future__ import annotations

import os
import sys

from ensgraph.config.env import get_database_url, load_ensgraph_env, mask_url
from ensgraph.database.connection import init_db


def main() -> int:
    load_ensgraph_env()
    url = get_database_url()
    if url is None:
        print("No database configured: set DATABASE_URL (PostgreSQL) or DATABASE_PATH (SQLite).")
        return 1

    # Ensure SQLite file directory exists
    if url.startswith("sqlite"):
        path = url.replace("sqlite:///", "").split("?")[0]
        parent = os.path.dirname(os.path.abspath(path)) if path else ""
        if parent and not os.path.exists(parent):
            os.makedirs(parent, exist_ok=True)

    print("DB URL:", mask_url(url))
    print("Creating ENS Graph tables...")
    init_db()
    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
