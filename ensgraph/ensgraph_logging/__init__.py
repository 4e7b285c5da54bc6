"""
Structured logging for ENS Graph.

JSON logs with timestamp, level, event_type and address.
Use get_logger() in every module for aggregation-friendly output.
"""

from ensgraph.ensgraph_logging.logger import bind_address, get_logger

__all__ = ["bind_address", "get_logger"]
