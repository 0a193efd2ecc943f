"""Observability helpers."""

from .logging import configure_logging
from .queries import add_query_logger

__all__ = ["configure_logging", "add_query_logger"]
