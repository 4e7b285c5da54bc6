"""
Async client for the Etherscan API V2 transaction history endpoints.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

import httpx

from ensgraph.config.settings import DEFAULT_ETHERSCAN_BASE_URL, Settings
from ensgraph.core.exceptions import ExplorerError
from ensgraph.ensgraph_logging import get_logger

logger = get_logger(__name__)

# Etherscan returns status "0" with this message for addresses with no history
NO_TRANSACTIONS_MESSAGE = "No transactions found"

DEFAULT_TIMEOUT_SEC = 60.0
MAX_RECORDS_PER_REQUEST = 1000


class EtherscanClient:
    """Client for Etherscan API V2 (account module)."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_ETHERSCAN_BASE_URL,
        chain_id: int = 1,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.chain_id = chain_id
        self.timeout_sec = timeout_sec
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "EtherscanClient":
        return cls(
            api_key=settings.etherscan_api_key,
            base_url=settings.etherscan_base_url,
            chain_id=settings.etherscan_chain_id,
            timeout_sec=settings.explorer_timeout_sec,
        )

    async def _make_request(self, client: httpx.AsyncClient, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Make a request to Etherscan. Returns the result list; raises ExplorerError on any failure."""
        params = {"chainid": self.chain_id, **params, "apikey": self.api_key}
        try:
            response = await client.get(self.base_url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise ExplorerError(f"Etherscan API returned HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise ExplorerError(f"Etherscan API unreachable: {e}") from e

        status = str(data.get("status", ""))
        message = str(data.get("message", ""))
        result = data.get("result")
        if status == "1" and isinstance(result, list):
            return result
        if status == "0" and message.startswith(NO_TRANSACTIONS_MESSAGE):
            return []
        raise ExplorerError(f"Etherscan API error: {message or 'Unknown error'} ({result})")

    def _history_params(self, action: str, address: str) -> Dict[str, Any]:
        return {
            "module": "account",
            "action": action,
            "address": address,
            "startblock": 0,
            "endblock": 99999999,
            "page": 1,
            "offset": MAX_RECORDS_PER_REQUEST,
            "sort": "desc",
        }

    async def get_transactions(self, client: httpx.AsyncClient, address: str) -> List[Dict[str, Any]]:
        """Standard (external) transactions for an address, newest first."""
        return await self._make_request(client, self._history_params("txlist", address))

    async def get_internal_transactions(self, client: httpx.AsyncClient, address: str) -> List[Dict[str, Any]]:
        """Internal transactions for an address, newest first."""
        return await self._make_request(client, self._history_params("txlistinternal", address))

    async def fetch_history(self, address: str) -> List[Dict[str, Any]]:
        """
        Fetch standard and internal transactions concurrently and return both lists joined.
        The pair is bounded by timeout_sec; exceeding it raises ExplorerError.
        """
        if not self.api_key:
            raise ExplorerError("Etherscan API key not configured")

        async def _both(client: httpx.AsyncClient) -> List[Dict[str, Any]]:
            normal, internal = await asyncio.gather(
                self.get_transactions(client, address),
                self.get_internal_transactions(client, address),
            )
            logger.info(
                "etherscan_history_fetched",
                address=address,
                normal=len(normal),
                internal=len(internal),
            )
            return normal + internal

        try:
            if self._client is not None:
                return await asyncio.wait_for(_both(self._client), timeout=self.timeout_sec)
            async with httpx.AsyncClient(timeout=self.timeout_sec) as client:
                return await asyncio.wait_for(_both(client), timeout=self.timeout_sec)
        except asyncio.TimeoutError as e:
            raise ExplorerError(f"Etherscan API timed out after {self.timeout_sec}s") from e
