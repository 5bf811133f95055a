"""FastAPI adapter – request dependencies for list endpoints.

Usage::

    POETS_QUERY = QueryPlanDep(POETS)

    @router.get("/poets")
    async def list_poets(plan: POETS_QUERY, session: SessionDep) -> list[dict]:
        return await SqlAlchemyQueryRepository(session, poets_table, POETS).find(plan)
"""
from __future__ import annotations

from typing import Annotated, Any, Callable

from fastapi import Depends, Request

from kuhi_query.application.query.registry import SearchableFieldRegistry
from kuhi_query.application.query.request import FilterRequest
from kuhi_query.application.query.resolver import QueryPlan, QueryResolver
from kuhi_query.config.settings import QuerySettings


def _resolver(registry: SearchableFieldRegistry, settings: QuerySettings | None) -> QueryResolver:
    if settings is None:
        return QueryResolver(registry)
    return QueryResolver.from_settings(registry, settings)


def filter_request_dependency(
    registry: SearchableFieldRegistry,
    settings: QuerySettings | None = None,
) -> Callable[[Request], Any]:
    """Return a dependency that parses the query string into a :class:`FilterRequest`."""
    resolver = _resolver(registry, settings)

    async def filter_request(request: Request) -> FilterRequest:
        # multi_items() keeps repeated keys such as ``ordering``.
        return resolver.parse(request.query_params.multi_items())

    return filter_request


def query_plan_dependency(
    registry: SearchableFieldRegistry,
    settings: QuerySettings | None = None,
) -> Callable[[Request], Any]:
    """Return a dependency that resolves the query string into a :class:`QueryPlan`."""
    resolver = _resolver(registry, settings)

    async def query_plan(request: Request) -> QueryPlan:
        return resolver.resolve(request.query_params.multi_items())

    return query_plan


def FilterRequestDep(  # noqa: N802
    registry: SearchableFieldRegistry,
    settings: QuerySettings | None = None,
) -> Any:
    """``Annotated[FilterRequest, Depends(...)]`` bound to *registry*."""
    return Annotated[FilterRequest, Depends(filter_request_dependency(registry, settings))]


def QueryPlanDep(  # noqa: N802
    registry: SearchableFieldRegistry,
    settings: QuerySettings | None = None,
) -> Any:
    """``Annotated[QueryPlan, Depends(...)]`` bound to *registry*."""
    return Annotated[QueryPlan, Depends(query_plan_dependency(registry, settings))]


__all__ = [
    "FilterRequestDep",
    "QueryPlanDep",
    "filter_request_dependency",
    "query_plan_dependency",
]
