"""Application query – query resolution & dynamic filtering engine.

Raw query parameters → :class:`FilterRequest` → :class:`QueryPlan`
(predicate, ordering, page window) → executor.
"""
from kuhi_query.application.query.catalog import CATALOG, registry_for
from kuhi_query.application.query.geo import (
    EARTH_RADIUS_METERS,
    GeoPoint,
    GeoRadiusFilter,
    haversine_distance,
)
from kuhi_query.application.query.memory import InMemoryQueryExecutor
from kuhi_query.application.query.ordering import OrderingResolver, OrderingToken, SortDirection
from kuhi_query.application.query.pagination import PageWindow, PaginationResolver
from kuhi_query.application.query.parser import QueryParameterParser
from kuhi_query.application.query.predicates import (
    AllOf,
    AnyOf,
    Contains,
    Equals,
    GreaterThan,
    LessThan,
    Predicate,
    PredicateBuilder,
    Related,
    WithinBoundingBox,
    WithinRadius,
    has_radius,
)
from kuhi_query.application.query.registry import (
    FieldKind,
    FilterField,
    GeoColumns,
    Join,
    Relation,
    SearchableFieldRegistry,
    ValueType,
    timestamp_filters,
)
from kuhi_query.application.query.request import BoundingBox, FilterRequest, GeoQuery
from kuhi_query.application.query.resolver import QueryPlan, QueryResolver

__all__ = [
    "CATALOG",
    "EARTH_RADIUS_METERS",
    "AllOf",
    "AnyOf",
    "BoundingBox",
    "Contains",
    "Equals",
    "FieldKind",
    "FilterField",
    "FilterRequest",
    "GeoColumns",
    "GeoPoint",
    "GeoQuery",
    "GeoRadiusFilter",
    "GreaterThan",
    "InMemoryQueryExecutor",
    "Join",
    "LessThan",
    "OrderingResolver",
    "OrderingToken",
    "PageWindow",
    "PaginationResolver",
    "Predicate",
    "PredicateBuilder",
    "QueryParameterParser",
    "QueryPlan",
    "QueryResolver",
    "Related",
    "Relation",
    "SearchableFieldRegistry",
    "SortDirection",
    "ValueType",
    "WithinBoundingBox",
    "WithinRadius",
    "has_radius",
    "haversine_distance",
    "registry_for",
    "timestamp_filters",
]
