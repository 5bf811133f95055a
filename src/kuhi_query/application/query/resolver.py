"""Application query – QueryPlan and QueryResolver.

The resolver is the single entry point repositories use: raw parameters in,
one immutable :class:`QueryPlan` out.  Executors only ever see plans.
"""
from __future__ import annotations

import dataclasses

from kuhi_query.application.query.ordering import OrderingResolver, OrderingToken, SortDirection
from kuhi_query.application.query.pagination import PageWindow, PaginationResolver
from kuhi_query.application.query.parser import QueryParameterParser, RawParams
from kuhi_query.application.query.predicates import AllOf, Predicate, PredicateBuilder, has_radius
from kuhi_query.application.query.registry import SearchableFieldRegistry
from kuhi_query.application.query.request import FilterRequest
from kuhi_query.config.settings import QuerySettings
from kuhi_query.observability.logging import get_logger

_log = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class QueryPlan:
    """Everything an executor needs to run one list query."""

    registry: SearchableFieldRegistry
    predicate: AllOf
    ordering: tuple[OrderingToken, ...]
    window: PageWindow

    @property
    def entity(self) -> str:
        return self.registry.entity

    @property
    def sort_keys(self) -> tuple[OrderingToken, ...]:
        """``ordering`` plus a final primary-key tie-break when it is missing."""
        pk = self.registry.primary_key
        if any(token.column == pk for token in self.ordering):
            return self.ordering
        return (*self.ordering, OrderingToken(pk, SortDirection.ASC))

    @property
    def radius_terms(self) -> tuple[Predicate, ...]:
        """Top-level terms that carry a radius search, directly or through a relation."""
        return tuple(term for term in self.predicate.terms if has_radius(term))


class QueryResolver:
    """Compose parser, predicate builder, ordering and pagination for one entity."""

    def __init__(
        self,
        registry: SearchableFieldRegistry,
        pagination: PaginationResolver | None = None,
        predicates: PredicateBuilder | None = None,
        ordering: OrderingResolver | None = None,
    ) -> None:
        self._registry = registry
        self._parser = QueryParameterParser(registry)
        self._pagination = pagination or PaginationResolver()
        self._predicates = predicates or PredicateBuilder()
        self._ordering = ordering or OrderingResolver()

    @classmethod
    def from_settings(cls, registry: SearchableFieldRegistry, settings: QuerySettings) -> "QueryResolver":
        return cls(registry, pagination=PaginationResolver.from_settings(settings))

    @property
    def registry(self) -> SearchableFieldRegistry:
        return self._registry

    def parse(self, raw: RawParams) -> FilterRequest:
        return self._parser.parse(raw)

    def plan(self, request: FilterRequest) -> QueryPlan:
        plan = QueryPlan(
            registry=self._registry,
            predicate=self._predicates.build(request, self._registry),
            ordering=self._ordering.resolve(request.ordering, self._registry),
            window=self._pagination.resolve(request),
        )
        _log.debug(
            "query_plan_resolved",
            entity=self._registry.entity,
            terms=len(plan.predicate.terms),
            ordering=[f"{t.column}:{t.direction.value}" for t in plan.ordering],
            limit=plan.window.limit,
            offset=plan.window.offset,
        )
        return plan

    def resolve(self, raw: RawParams) -> QueryPlan:
        return self.plan(self.parse(raw))


__all__ = ["QueryPlan", "QueryResolver"]
