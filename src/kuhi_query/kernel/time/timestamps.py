"""Kernel time – timestamp parsing with explicit failure values.

Incoming date bounds are parsed leniently: :func:`parse_timestamp` never
raises, it returns :class:`~kuhi_query.kernel.types.Err` and the caller
decides.  Outgoing stored timestamps are formatted strictly:
:func:`format_timestamp` raises :class:`SerializationError` on malformed data
instead of substituting the current time.
"""
from __future__ import annotations

import datetime

from kuhi_query.kernel.errors import SerializationError, ValidationError
from kuhi_query.kernel.types import Err, Ok, Result

STORAGE_SEPARATOR = " "


class TimestampParseError(ValidationError):
    """A string could not be read as an ISO-8601 date or datetime."""

    default_code = "invalid_timestamp"

    def __init__(self, raw: str) -> None:
        super().__init__(
            f"{raw!r} is not an ISO-8601 timestamp",
            errors=[{"value": raw, "reason": "not ISO-8601"}],
        )
        self.raw = raw


def parse_timestamp(raw: str) -> Result[datetime.datetime, TimestampParseError]:
    """Parse *raw* as ISO-8601.

    Accepts dates (``2024-05-01``), ``T``- or space-separated datetimes and
    UTC offsets, including a trailing ``Z``.
    """
    text = raw.strip()
    if not text:
        return Err(TimestampParseError(raw))
    try:
        return Ok(datetime.datetime.fromisoformat(text))
    except ValueError:
        return Err(TimestampParseError(raw))


def storage_timestamp(raw: str) -> Result[str, TimestampParseError]:
    """Rewrite *raw* in the form timestamps are stored in (``YYYY-MM-DD HH:MM:SS``).

    Stored timestamps are SQLite local-time text, so an offset-aware value is
    shifted to local time and its offset dropped.  A date becomes midnight.
    The result compares lexicographically against stored values the same way
    the instants compare chronologically.
    """
    result = parse_timestamp(raw)
    if result.is_err():
        return result
    value = result.unwrap()
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return Ok(value.isoformat(sep=STORAGE_SEPARATOR))


def iso_timestamp(raw: str) -> Result[str, TimestampParseError]:
    """Rewrite *raw* as ISO-8601 with the ``T`` separator.

    For columns that store client-supplied ISO-8601 text rather than SQLite
    local time.  A date becomes midnight; an offset is kept as given.
    """
    result = parse_timestamp(raw)
    if result.is_err():
        return result
    return Ok(result.unwrap().isoformat())


def format_timestamp(value: str | datetime.datetime | None) -> str | None:
    """Normalise a stored timestamp to ISO-8601 (``T`` separator).

    ``None`` passes through.

    Raises:
        SerializationError: *value* is a string that does not parse.
    """
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.isoformat()
    result = parse_timestamp(value)
    if result.is_err():
        raise SerializationError(
            f"Stored timestamp {value!r} is malformed",
            payload_type="timestamp",
            cause=result.error,
        )
    return result.unwrap().isoformat()


__all__ = [
    "STORAGE_SEPARATOR",
    "TimestampParseError",
    "format_timestamp",
    "iso_timestamp",
    "parse_timestamp",
    "storage_timestamp",
]
