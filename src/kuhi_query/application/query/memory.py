"""Application query – InMemoryQueryExecutor.

Runs a :class:`QueryPlan` over rows held in process, keyed by physical
column name.  It is the reference reading of a plan and backs unit tests and
small fixed datasets.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from kuhi_query.application.query.resolver import QueryPlan
from kuhi_query.kernel.casing import to_internal
from kuhi_query.kernel.time import format_timestamp


def _sort_key(column: str):  # noqa: ANN202
    # NULLs sort first ascending, last descending.
    def key(row: Mapping[str, Any]) -> tuple[bool, Any]:
        value = row.get(column)
        return (value is not None, value if value is not None else 0)

    return key


def to_internal_row(row: Mapping[str, Any], timestamp_columns: Iterable[str]) -> dict[str, Any]:
    """Normalise timestamp columns and convert keys to camelCase."""
    data = dict(row)
    for column in timestamp_columns:
        if column in data:
            data[column] = format_timestamp(data[column])
    return to_internal(data)


class InMemoryQueryExecutor:
    def __init__(self, rows: Iterable[Mapping[str, Any]]) -> None:
        self._rows = [dict(row) for row in rows]

    def select(self, plan: QueryPlan) -> list[dict[str, Any]]:
        """Filter and order, without paging."""
        matched = [row for row in self._rows if plan.predicate.is_satisfied_by(row)]
        # Stable sort applied least-significant key first.
        for token in reversed(plan.sort_keys):
            matched.sort(key=_sort_key(token.column), reverse=token.descending)
        return matched

    def execute(self, plan: QueryPlan) -> list[dict[str, Any]]:
        rows = plan.window.slice(self.select(plan))
        return [to_internal_row(row, plan.registry.timestamps) for row in rows]

    def count(self, plan: QueryPlan) -> int:
        return sum(1 for row in self._rows if plan.predicate.is_satisfied_by(row))


__all__ = ["InMemoryQueryExecutor", "to_internal_row"]
