"""
Configuration management for ENS Graph.

Loads settings from environment variables and an optional .env file.
Exposes a single source of truth for all service configuration.
"""

from ensgraph.config.settings import Settings, get_settings, reset_settings_for_test  # noqa: F401

__all__ = ["Settings", "get_settings", "reset_settings_for_test"]
