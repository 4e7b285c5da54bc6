"""
structlog setup for ENS Graph.

Records are rendered as JSON (LOG_FORMAT=json, default) or for the console, and
always carry event_type, level, timestamp and logger. Activity code binds the
lowercase account address; edge code logs edge_id / source / target.

Explorer errors embed request URLs, so `apikey=...` query values are masked in
every string field before rendering.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from typing import Any, MutableMapping, Optional

import structlog

_API_KEY_PARAM = re.compile(r"(?i)(apikey=)[^&\s'\"]+")
MASK = "***"


def mask_api_keys(
    logger: Any,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Replace apikey query values in string fields with MASK."""
    for key, value in event_dict.items():
        if isinstance(value, str) and "apikey=" in value.lower():
            event_dict[key] = _API_KEY_PARAM.sub(r"\g<1>" + MASK, value)
    return event_dict


def lowercase_address(
    logger: Any,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Lowercase the address field to match activity cache keys."""
    address = event_dict.get("address")
    if isinstance(address, str):
        event_dict["address"] = address.strip().lower()
    return event_dict


def event_to_event_type(
    logger: Any,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Emit structlog's positional event under event_type."""
    if "event" in event_dict:
        event_dict.setdefault("event_type", event_dict.pop("event"))
    return event_dict


def build_processors(log_format: str = "json") -> list[Any]:
    """Processor chain shared by the app logger and tests; the renderer comes last."""
    renderer: Any
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        lowercase_address,
        mask_api_keys,
        event_to_event_type,
        renderer,
    ]


def configure_structlog(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure structlog from arguments, falling back to LOG_LEVEL / LOG_FORMAT."""
    level_name = (level or os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    fmt = (log_format or os.getenv("LOG_FORMAT") or "json").strip().lower()
    structlog.configure(
        processors=build_processors(fmt),
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level_name, logging.INFO)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """Logger for a module, with logger=name bound."""
    return structlog.get_logger(name).bind(logger=name)


def bind_address(logger: structlog.BoundLogger, address: str) -> structlog.BoundLogger:
    """Return logger with the normalized (stripped, lowercase) address bound."""
    return logger.bind(address=(address or "").strip().lower())
