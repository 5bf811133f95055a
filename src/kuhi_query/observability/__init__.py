"""Observability – structured logging."""

from kuhi_query.observability.logging import JsonLoggerFactory, get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
