"""
ENS name search over the ENS subgraph (The Graph).

Search never raises: upstream errors degrade to an empty result list.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from ensgraph.config.settings import DEFAULT_ENS_SUBGRAPH_URL
from ensgraph.ensgraph_logging import get_logger

logger = get_logger(__name__)

MIN_QUERY_LENGTH = 3
MAX_RESULTS = 10

SEARCH_QUERY = """
query SearchENS($search: String!) {
  domains(
    first: %d
    where: { name_starts_with: $search, name_ends_with: ".eth" }
    orderBy: name
    orderDirection: asc
  ) {
    id
    name
    labelName
    owner {
      id
    }
  }
}
""" % MAX_RESULTS


def clean_query(query: str) -> str:
    """Lowercase and drop a trailing .eth."""
    term = (query or "").strip().lower()
    if term.endswith(".eth"):
        term = term[: -len(".eth")]
    return term


class EnsSearchClient:
    """Prefix search for .eth names."""

    def __init__(
        self,
        subgraph_url: str = DEFAULT_ENS_SUBGRAPH_URL,
        timeout_sec: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.subgraph_url = subgraph_url
        self.timeout_sec = timeout_sec
        self._client = client

    async def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if self._client is not None:
            response = await self._client.post(self.subgraph_url, json=payload)
        else:
            async with httpx.AsyncClient(timeout=self.timeout_sec) as client:
                response = await client.post(self.subgraph_url, json=payload)
        response.raise_for_status()
        return response.json()

    async def search(self, query: str) -> List[Dict[str, str]]:
        """Up to 10 names starting with query, ordered by name; [] for short queries or on error."""
        if not query or len(query) < MIN_QUERY_LENGTH:
            return []
        term = clean_query(query)
        try:
            data = await self._post({"query": SEARCH_QUERY, "variables": {"search": term}})
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("ens_search_failed", query=term, error=str(e))
            return []
        if not isinstance(data, dict):
            logger.warning("ens_search_malformed_response", query=term, kind=type(data).__name__)
            return []
        if data.get("errors"):
            logger.warning("ens_search_subgraph_errors", query=term, errors=data["errors"])
            return []

        payload = data.get("data") or {}
        domains = payload.get("domains") if isinstance(payload, dict) else None
        if not isinstance(domains, list):
            if domains is not None or not isinstance(payload, dict):
                logger.warning("ens_search_malformed_response", query=term, kind=type(payload).__name__)
            return []
        results = []
        for domain in domains:
            if not isinstance(domain, dict):
                continue
            name = domain.get("name")
            if not name or not isinstance(name, str):
                continue
            results.append({
                "name": name,
                "label": domain.get("labelName") or name.replace(".eth", ""),
            })
        return results

    async def is_registered(self, name: str) -> bool:
        """True if name appears (case-insensitive) among the search results for itself."""
        results = await self.search(name)
        wanted = (name or "").strip().lower()
        return any(r["name"].lower() == wanted for r in results)
