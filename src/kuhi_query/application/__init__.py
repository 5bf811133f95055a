"""Application – use-case building blocks (framework-agnostic)."""

from kuhi_query.application.query import (
    FilterRequest,
    QueryParameterParser,
    QueryPlan,
    QueryResolver,
    SearchableFieldRegistry,
)

__all__ = [
    "FilterRequest",
    "QueryParameterParser",
    "QueryPlan",
    "QueryResolver",
    "SearchableFieldRegistry",
]
