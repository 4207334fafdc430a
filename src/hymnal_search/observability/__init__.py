"""Logging setup for hymnal-search."""

from hymnal_search.observability.logging import JsonFormatter, configure_logging


__all__ = ["JsonFormatter", "configure_logging"]
