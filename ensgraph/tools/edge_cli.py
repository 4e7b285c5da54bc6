"""
Edge graph client: list, add or delete edges through the API with the optimistic
EdgeStore, falling back to a local JSON file when the API is unreachable.

How to run:
    python -m ensgraph.tools.edge_cli list
    python -m ensgraph.tools.edge_cli add vitalik.eth nick.eth
    python -m ensgraph.tools.edge_cli --api http://localhost:8000 delete 3
    python -m ensgraph.tools.edge_cli --validate add alice.eth bob.eth   # check names via ENS search
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from ensgraph.config import get_settings
from ensgraph.core.exceptions import EdgeSyncError
from ensgraph.ens.search import EnsSearchClient
from ensgraph.ensgraph_logging import get_logger
from ensgraph.graph import EdgeStore, HttpEdgeBackend, LocalEdgeStorage, StoreMode

logger = get_logger(__name__)


def build_store(api_url: str, local_path: str, validate: bool) -> EdgeStore:
    settings = get_settings()
    validator = None
    if validate:
        validator = EnsSearchClient(subgraph_url=settings.ens_subgraph_url).is_registered
    return EdgeStore(
        HttpEdgeBackend(api_url),
        LocalEdgeStorage(local_path),
        name_validator=validator,
    )


def _print_edges(store: EdgeStore) -> None:
    mode = "local" if store.mode is StoreMode.LOCAL_FALLBACK else "api"
    print(f"[{mode}] {len(store.edges)} edge(s)")
    for edge in store.edges:
        print(f"  {edge.id}: {edge.source} -> {edge.target}")


async def run(args: argparse.Namespace) -> int:
    store = build_store(args.api, args.local_path, args.validate)
    await store.list_edges()
    try:
        if args.command == "add":
            edge = await store.add_edge(args.source, args.target)
            print(f"Connected: {edge.source} -> {edge.target} (id {edge.id})")
        elif args.command == "delete":
            edge = await store.delete_edge(args.id)
            print(f"Removed: {edge.source} -> {edge.target}")
    except (ValueError, KeyError, EdgeSyncError) as e:
        print("ERROR:", e, file=sys.stderr)
        return 1
    finally:
        for message in store.notifications:
            print("NOTICE:", message, file=sys.stderr)
    _print_edges(store)
    return 0


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="List, add or delete ENS graph edges.")
    parser.add_argument(
        "--api",
        default=f"http://localhost:{settings.api_port}",
        help="ENS Graph API base URL",
    )
    parser.add_argument(
        "--local-path",
        default=settings.edges_local_path,
        help=f"Local fallback file (default: {settings.edges_local_path})",
    )
    parser.add_argument("--validate", action="store_true", help="Require registered ENS names on add")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="Show all edges")
    add = sub.add_parser("add", help="Add source -> target")
    add.add_argument("source")
    add.add_argument("target")
    delete = sub.add_parser("delete", help="Delete an edge by id")
    delete.add_argument("id", type=int)
    args = parser.parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
