"""Application query – PageWindow and PaginationResolver."""
from __future__ import annotations

import dataclasses

from kuhi_query.application.query.request import FilterRequest
from kuhi_query.config.settings import QuerySettings
from kuhi_query.kernel.errors import InvariantViolationError
from kuhi_query.observability.logging import get_logger

_log = get_logger(__name__)

DEFAULT_LIMIT = 50
MAX_LIMIT = 1000


@dataclasses.dataclass(frozen=True, slots=True)
class PageWindow:
    """Resolved ``LIMIT`` / ``OFFSET`` pair."""

    limit: int
    offset: int

    def __post_init__(self) -> None:
        if self.limit < 0 or self.offset < 0:
            raise InvariantViolationError("limit and offset must be >= 0")

    def slice(self, items: list) -> list:
        return items[self.offset : self.offset + self.limit]


class PaginationResolver:
    """Resolve limit/offset with defaults, clamping rather than rejecting.

    Negative values become ``0``; ``limit`` is capped at ``max_limit``.
    """

    def __init__(self, default_limit: int = DEFAULT_LIMIT, max_limit: int = MAX_LIMIT) -> None:
        if default_limit < 0 or max_limit < default_limit:
            raise InvariantViolationError(
                "require 0 <= default_limit <= max_limit",
                detail={"default_limit": default_limit, "max_limit": max_limit},
            )
        self._default_limit = default_limit
        self._max_limit = max_limit

    @classmethod
    def from_settings(cls, settings: QuerySettings) -> "PaginationResolver":
        return cls(default_limit=settings.default_limit, max_limit=settings.max_limit)

    def resolve(self, request: FilterRequest) -> PageWindow:
        limit = self._default_limit if request.limit is None else request.limit
        offset = 0 if request.offset is None else request.offset

        clamped_limit = min(max(limit, 0), self._max_limit)
        clamped_offset = max(offset, 0)
        if (clamped_limit, clamped_offset) != (limit, offset):
            _log.debug(
                "pagination_clamped",
                limit=limit,
                offset=offset,
                clamped_limit=clamped_limit,
                clamped_offset=clamped_offset,
            )
        return PageWindow(clamped_limit, clamped_offset)


__all__ = ["DEFAULT_LIMIT", "MAX_LIMIT", "PageWindow", "PaginationResolver"]
