"""
ENS Graph: backend for ENS identity profiles, on-chain activity, and a small
social graph of relationships between names.

Two data-access components front slow external sources: the activity store
(Etherscan history with a TTL cache and stale fallback) and the edge store
(optimistic edge mutations with rollback and a local-file fallback).
"""

__version__ = "0.1.0"
