"""Application query – OrderingToken and OrderingResolver."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Sequence

from kuhi_query.application.query.registry import SearchableFieldRegistry
from kuhi_query.kernel.casing import to_camel_key
from kuhi_query.observability.logging import get_logger

_log = get_logger(__name__)


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclasses.dataclass(frozen=True, slots=True)
class OrderingToken:
    """A resolved sort criterion on a physical column."""

    column: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


def split_token(token: str) -> tuple[str, SortDirection]:
    """``"-created_at"`` → ``("created_at", DESC)``; ``"name"`` → ``("name", ASC)``."""
    token = token.strip()
    if token.startswith("-"):
        return token[1:], SortDirection.DESC
    return token, SortDirection.ASC


class OrderingResolver:
    """Map wire ordering tokens onto a registry's orderable columns.

    Unknown names are dropped.  When nothing resolves the result is the
    primary key ascending, so paging is always repeatable.  Names are
    matched in camelCase, which makes ``created_at`` and ``createdAt``
    equivalent.
    """

    def resolve(
        self,
        tokens: Sequence[str] | None,
        registry: SearchableFieldRegistry,
    ) -> tuple[OrderingToken, ...]:
        resolved: list[OrderingToken] = []
        seen: set[str] = set()

        for token in tokens or ():
            name, direction = split_token(token)
            column = registry.order_column(to_camel_key(name))
            if column is None:
                _log.debug("ordering_token_dropped", entity=registry.entity, token=token)
                continue
            if column in seen:
                continue
            seen.add(column)
            resolved.append(OrderingToken(column, direction))

        if not resolved:
            return (OrderingToken(registry.primary_key, SortDirection.ASC),)
        return tuple(resolved)


__all__ = ["OrderingResolver", "OrderingToken", "SortDirection", "split_token"]
