"""Observability – structured logging helpers."""
from kuhi_query.observability.logging.factory import JsonLoggerFactory
from kuhi_query.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
