"""Kernel time – ISO-8601 timestamp parsing and formatting."""
from kuhi_query.kernel.time.timestamps import (
    STORAGE_SEPARATOR,
    TimestampParseError,
    format_timestamp,
    iso_timestamp,
    parse_timestamp,
    storage_timestamp,
)

__all__ = [
    "STORAGE_SEPARATOR",
    "TimestampParseError",
    "format_timestamp",
    "iso_timestamp",
    "parse_timestamp",
    "storage_timestamp",
]
