"""
ENS profile resolution over web3.py (AsyncWeb3).

Every lookup (resolver, address, avatar, each text record) can fail independently;
failures are caught per field and the field is left as None.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Dict, Optional

from ens.utils import normalize_name
from web3 import AsyncHTTPProvider, AsyncWeb3

from ensgraph.ensgraph_logging import get_logger
from ensgraph.utils.address_utils import truncate_address

logger = get_logger(__name__)

TEXT_RECORD_KEYS = (
    "description",
    "url",
    "com.twitter",
    "com.github",
    "com.discord",
    "email",
    "location",
    "keywords",
)

IPFS_GATEWAY = "https://ipfs.io/ipfs/"


@dataclass
class EnsProfile:
    """Resolved ENS profile. error is set when the name itself could not be normalized."""

    ens_name: str
    normalized_name: str
    address: Optional[str] = None
    avatar: Optional[str] = None
    text_records: Dict[str, Optional[str]] = field(default_factory=dict)
    has_resolver: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "ensName": self.ens_name,
            "normalizedName": self.normalized_name,
            "address": self.address,
            "avatar": self.avatar,
            "textRecords": dict(self.text_records),
            "hasResolver": self.has_resolver,
            "displayAddress": truncate_address(self.address) if self.address else None,
        }
        if self.error:
            body["error"] = self.error
        return body


def avatar_uri_to_url(uri: Optional[str]) -> Optional[str]:
    """Rewrite ipfs:// avatar URIs to an HTTP gateway; http(s) and data: URIs pass through."""
    if not uri:
        return None
    uri = uri.strip()
    if uri.startswith("ipfs://"):
        path = uri[len("ipfs://"):]
        if path.startswith("ipfs/"):
            path = path[len("ipfs/"):]
        return IPFS_GATEWAY + path
    return uri


class EnsResolver:
    """ENS lookups against an Ethereum mainnet RPC endpoint."""

    def __init__(self, rpc_url: Optional[str] = None, w3: Any = None):
        if w3 is None:
            w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url or "https://cloudflare-eth.com"))
        self._w3 = w3

    async def _safe(self, field_name: str, name: str, lookup: Awaitable[Any]) -> Any:
        try:
            return await lookup
        except Exception as e:
            logger.debug("ens_field_lookup_failed", name=name, field=field_name, error=str(e))
            return None

    async def get_avatar(self, name: str) -> Optional[str]:
        """Avatar URL for a name, or None. Raises when the name fails normalization or the lookup fails."""
        normalized = normalize_name(name)
        uri = await self._w3.ens.get_text(normalized, "avatar")
        return avatar_uri_to_url(uri)

    async def fetch_profile(self, ens_name: str) -> EnsProfile:
        """Resolve resolver, address, avatar and text records concurrently."""
        try:
            normalized = normalize_name(ens_name)
        except Exception as e:
            return EnsProfile(
                ens_name=ens_name,
                normalized_name=ens_name,
                error=str(e) or "Failed to resolve ENS name",
            )

        ens = self._w3.ens
        resolver, address, avatar, *texts = await asyncio.gather(
            self._safe("resolver", normalized, ens.resolver(normalized)),
            self._safe("address", normalized, ens.address(normalized)),
            self._safe("avatar", normalized, ens.get_text(normalized, "avatar")),
            *(self._safe(key, normalized, ens.get_text(normalized, key)) for key in TEXT_RECORD_KEYS),
        )
        text_records = {key: (value or None) for key, value in zip(TEXT_RECORD_KEYS, texts)}
        profile = EnsProfile(
            ens_name=ens_name,
            normalized_name=normalized,
            address=str(address) if address else None,
            avatar=avatar_uri_to_url(avatar),
            text_records=text_records,
            has_resolver=resolver is not None,
        )
        logger.info(
            "ens_profile_resolved",
            name=normalized,
            has_resolver=profile.has_resolver,
            address=profile.address,
        )
        return profile
