"""Application query – Predicate terms and PredicateBuilder.

Predicates are composable boolean rules over a stored row (a mapping keyed
by physical column name).  Each term can be evaluated in process through
``is_satisfied_by`` and is compiled to SQL by
:mod:`kuhi_query.adapters.sqlalchemy.compiler`; both readings must agree.

:class:`PredicateBuilder` accumulates one term per present condition and
combines them once into an :class:`AllOf`.  An empty ``AllOf`` matches
every row.
"""
from __future__ import annotations

import abc
import dataclasses
import operator
from typing import Any, Callable, Mapping

from kuhi_query.application.query.geo import GeoRadiusFilter
from kuhi_query.application.query.registry import (
    FieldKind,
    FilterField,
    Relation,
    SearchableFieldRegistry,
)
from kuhi_query.application.query.request import BoundingBox, FilterRequest, FilterValue, GeoQuery

Row = Mapping[str, Any]

_GEO = GeoRadiusFilter()


class Predicate(abc.ABC):
    """A boolean condition over a row, composable with ``&`` and ``|``."""

    @abc.abstractmethod
    def is_satisfied_by(self, row: Row) -> bool: ...

    def __and__(self, other: "Predicate") -> "AllOf":
        return AllOf((self, other))

    def __or__(self, other: "Predicate") -> "AnyOf":
        return AnyOf((self, other))


def _compare(left: Any, right: Any, op: Callable[[Any, Any], bool]) -> bool:
    # NULL never compares; mismatched types behave like a non-match.
    if left is None:
        return False
    try:
        return bool(op(left, right))
    except TypeError:
        return False


@dataclasses.dataclass(frozen=True)
class Equals(Predicate):
    column: str
    value: FilterValue

    def is_satisfied_by(self, row: Row) -> bool:
        return _compare(row.get(self.column), self.value, operator.eq)


@dataclasses.dataclass(frozen=True)
class Contains(Predicate):
    """Substring match, wildcard on both sides; the fragment is matched literally."""

    column: str
    fragment: str

    def is_satisfied_by(self, row: Row) -> bool:
        value = row.get(self.column)
        if value is None:
            return False
        return self.fragment in str(value)


@dataclasses.dataclass(frozen=True)
class GreaterThan(Predicate):
    column: str
    bound: FilterValue

    def is_satisfied_by(self, row: Row) -> bool:
        return _compare(row.get(self.column), self.bound, operator.gt)


@dataclasses.dataclass(frozen=True)
class LessThan(Predicate):
    column: str
    bound: FilterValue

    def is_satisfied_by(self, row: Row) -> bool:
        return _compare(row.get(self.column), self.bound, operator.lt)


@dataclasses.dataclass(frozen=True)
class AllOf(Predicate):
    """Conjunction; empty means "match all"."""

    terms: tuple[Predicate, ...] = ()

    def is_satisfied_by(self, row: Row) -> bool:
        return all(term.is_satisfied_by(row) for term in self.terms)

    @property
    def is_empty(self) -> bool:
        return not self.terms

    def __and__(self, other: Predicate) -> "AllOf":
        return AllOf((*self.terms, other))


@dataclasses.dataclass(frozen=True)
class AnyOf(Predicate):
    """Disjunction; empty matches nothing."""

    terms: tuple[Predicate, ...] = ()

    def is_satisfied_by(self, row: Row) -> bool:
        return any(term.is_satisfied_by(row) for term in self.terms)


@dataclasses.dataclass(frozen=True)
class WithinRadius(Predicate):
    latitude_column: str
    longitude_column: str
    query: GeoQuery

    def is_satisfied_by(self, row: Row) -> bool:
        point = (row.get(self.latitude_column), row.get(self.longitude_column))
        return _GEO.matches(point, self.query)


@dataclasses.dataclass(frozen=True)
class WithinBoundingBox(Predicate):
    latitude_column: str
    longitude_column: str
    bbox: BoundingBox

    def is_satisfied_by(self, row: Row) -> bool:
        latitude = row.get(self.latitude_column)
        longitude = row.get(self.longitude_column)
        if latitude is None or longitude is None:
            return False
        return self.bbox.contains(latitude, longitude)


@dataclasses.dataclass(frozen=True)
class Related(Predicate):
    """*term* holds for at least one row reached through *relation*.

    In process the related rows are read from ``row[relation.name]``.
    """

    relation: Relation
    term: Predicate

    def is_satisfied_by(self, row: Row) -> bool:
        related = row.get(self.relation.name) or ()
        return any(self.term.is_satisfied_by(item) for item in related)


def has_radius(predicate: Predicate) -> bool:
    """``True`` when a :class:`WithinRadius` term sits anywhere inside *predicate*."""
    match predicate:
        case WithinRadius():
            return True
        case AllOf(terms=terms) | AnyOf(terms=terms):
            return any(has_radius(term) for term in terms)
        case Related(term=term):
            return has_radius(term)
    return False


_TERM_FACTORIES: dict[FieldKind, Callable[[str, FilterValue], Predicate]] = {
    FieldKind.EQUALS: Equals,
    FieldKind.CONTAINS: lambda column, value: Contains(column, str(value)),
    FieldKind.GREATER_THAN: GreaterThan,
    FieldKind.LESS_THAN: LessThan,
}


class PredicateBuilder:
    """Turn a :class:`FilterRequest` into one AND-combined predicate."""

    def term_for(self, field: FilterField, value: FilterValue) -> Predicate:
        return _TERM_FACTORIES[field.kind](field.column, value)

    def build(self, request: FilterRequest, registry: SearchableFieldRegistry) -> AllOf:
        """Terms on related tables are grouped per relation, so every
        condition on one relation must hold for the same related row."""
        terms: list[Predicate] = []
        related: dict[Relation, list[Predicate]] = {}

        def add(term: Predicate, relation: Relation | None) -> None:
            if relation is None:
                terms.append(term)
            else:
                related.setdefault(relation, []).append(term)

        for name, value in request.filters.items():
            field = registry.field_for(name)
            if field is None:
                continue
            add(self.term_for(field, value), field.relation)

        if request.search is not None and registry.searchable:
            terms.append(
                AnyOf(tuple(Contains(column, request.search) for column in registry.searchable))
            )

        geo = registry.geo
        if geo is not None:
            if request.geo is not None:
                add(WithinRadius(geo.latitude, geo.longitude, request.geo), geo.relation)
            if request.bbox is not None:
                add(WithinBoundingBox(geo.latitude, geo.longitude, request.bbox), geo.relation)

        for relation, group in related.items():
            terms.append(Related(relation, group[0] if len(group) == 1 else AllOf(tuple(group))))

        return AllOf(tuple(terms))


__all__ = [
    "AllOf",
    "AnyOf",
    "Contains",
    "Equals",
    "GreaterThan",
    "LessThan",
    "Predicate",
    "PredicateBuilder",
    "Related",
    "Row",
    "WithinBoundingBox",
    "WithinRadius",
    "has_radius",
]
