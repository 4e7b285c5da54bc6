"""Ethereum address helpers."""

import re

_ADDRESS_RE = re.compile(r"^[0-9a-fA-F]{40}$")


def is_valid_ethereum_address(address: str) -> bool:
    """Check if a string is a 20-byte hex address, with or without 0x prefix."""
    if not address:
        return False
    address = address.strip()
    if address.startswith("0x"):
        address = address[2:]
    return bool(_ADDRESS_RE.match(address))


def normalize_address(address: str) -> str:
    """Normalize an Ethereum address to lowercase with 0x prefix."""
    if not address:
        return ""
    address = address.strip().lower()
    if not address.startswith("0x"):
        address = "0x" + address
    return address


def truncate_address(address: str) -> str:
    """0x1234...abcd form for display."""
    return f"{address[:6]}...{address[-4:]}"
