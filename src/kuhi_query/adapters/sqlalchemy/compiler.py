"""SQLAlchemy adapter – compile predicates and ordering to Core expressions.

``WithinRadius`` has no portable SQL form (SQLite ships without
trigonometric functions), so it compiles to its bounding-box pre-filter and
the repository applies the exact haversine check to the rows that come back.
``Related`` compiles to a correlated ``EXISTS`` over the relation's join path;
the related tables are looked up in the entity table's ``MetaData``.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import ColumnElement, FromClause, Table, and_, asc, desc, false, literal, or_, select, true

from kuhi_query.application.query.geo import GeoRadiusFilter
from kuhi_query.application.query.ordering import OrderingToken
from kuhi_query.application.query.predicates import (
    AllOf,
    AnyOf,
    Contains,
    Equals,
    GreaterThan,
    LessThan,
    Predicate,
    Related,
    WithinBoundingBox,
    WithinRadius,
)
from kuhi_query.application.query.registry import Relation
from kuhi_query.application.query.request import BoundingBox

_GEO = GeoRadiusFilter()


def _bbox_clause(
    table: FromClause, lat_column: str, lon_column: str, bbox: BoundingBox | None
) -> ColumnElement[bool]:
    lat = table.c[lat_column]
    lon = table.c[lon_column]
    if bbox is None:
        return and_(lat.is_not(None), lon.is_not(None))
    return and_(
        lat.is_not(None),
        lon.is_not(None),
        lat.between(bbox.min_lat, bbox.max_lat),
        lon.between(bbox.min_lon, bbox.max_lon),
    )


def related_source(table: Table, relation: Relation) -> tuple[FromClause, ColumnElement[Any], Table]:
    """Return ``(joined tables, anchor column, target table)`` for *relation*.

    The anchor is the first join's column, to be equated with
    ``table.c[relation.joins[0].parent_column]``.
    """
    tables = [table.metadata.tables[join.table] for join in relation.joins]
    source: FromClause = tables[0]
    for previous, current, join in zip(tables, tables[1:], relation.joins[1:]):
        source = source.join(current, previous.c[join.parent_column] == current.c[join.column])
    return source, tables[0].c[relation.joins[0].column], tables[-1]


def _related_clause(table: FromClause, relation: Relation, term: Predicate) -> ColumnElement[bool]:
    if not isinstance(table, Table):
        raise TypeError(f"Related terms need a Table with MetaData, got {type(table).__name__}")
    source, anchor, target = related_source(table, relation)
    return (
        select(literal(1))
        .select_from(source)
        .where(anchor == table.c[relation.joins[0].parent_column], compile_predicate(term, target))
        .exists()
    )


def compile_predicate(predicate: Predicate, table: FromClause) -> ColumnElement[bool]:
    """Translate *predicate* into a WHERE clause over *table*'s columns."""
    match predicate:
        case AllOf(terms=terms):
            if not terms:
                return true()
            return and_(*(compile_predicate(term, table) for term in terms))
        case AnyOf(terms=terms):
            if not terms:
                return false()
            return or_(*(compile_predicate(term, table) for term in terms))
        case Equals(column=column, value=value):
            return table.c[column] == value
        case Contains(column=column, fragment=fragment):
            return table.c[column].contains(fragment, autoescape=True)
        case GreaterThan(column=column, bound=bound):
            return table.c[column] > bound
        case LessThan(column=column, bound=bound):
            return table.c[column] < bound
        case WithinBoundingBox(latitude_column=lat, longitude_column=lon, bbox=bbox):
            return _bbox_clause(table, lat, lon, bbox)
        case WithinRadius(latitude_column=lat, longitude_column=lon, query=query):
            return _bbox_clause(table, lat, lon, _GEO.bounding_box(query))
        case Related(relation=relation, term=term):
            return _related_clause(table, relation, term)
        case _:
            raise TypeError(f"Cannot compile predicate of type {type(predicate).__name__}")


def compile_ordering(tokens: tuple[OrderingToken, ...], table: FromClause) -> list[Any]:
    return [
        desc(table.c[token.column]) if token.descending else asc(table.c[token.column])
        for token in tokens
    ]


__all__ = ["compile_ordering", "compile_predicate", "related_source"]
