"""Application query – SearchableFieldRegistry and field declarations.

A registry is the per-entity static configuration that drives the whole
engine: which logical (camelCase) names may be filtered or ordered, the
physical column each maps to, which columns the catch-all ``search`` token
spans, and where the coordinates live for geo entities.  Fields and
coordinates that live on another table are declared with a :class:`Relation`,
the join path from the entity's table to that table.  Registries are
validated once when constructed, so a malformed declaration fails at startup
rather than on a request::

    POETS = SearchableFieldRegistry(
        entity="poets",
        filters=(
            FilterField.contains("nameContains", "name"),
            FilterField.equals("birthYear", "birth_year", ValueType.INTEGER),
            *timestamp_filters(),
        ),
        orderable={"id": "id", "name": "name", "createdAt": "created_at"},
        searchable=("name", "biography"),
    )
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Mapping

from kuhi_query.kernel.errors import RegistryError

#: Wire parameters owned by the engine itself; no entity field may reuse them.
RESERVED_NAMES: frozenset[str] = frozenset(
    {"limit", "offset", "ordering", "search", "q", "lat", "lon", "radius", "bbox"}
)


class FieldKind(str, Enum):
    EQUALS = "equals"
    CONTAINS = "contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"


class ValueType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    TIMESTAMP = "timestamp"
    #: ISO-8601 text with the ``T`` separator, as clients send it.
    ISO_TIMESTAMP = "iso_timestamp"


@dataclasses.dataclass(frozen=True, slots=True)
class Join:
    """One hop of a relation: ``<previous>.parent_column = <table>.column``."""

    table: str
    parent_column: str
    column: str


@dataclasses.dataclass(frozen=True, slots=True)
class Relation:
    """Path from an entity row to rows of another table.

    The first join starts at the entity's own table; fields declared on the
    relation live on the last table of the path.  In process, *name* is the
    row key holding the already-related rows (a list of mappings).
    """

    name: str
    joins: tuple[Join, ...]

    @property
    def target(self) -> str:
        return self.joins[-1].table


@dataclasses.dataclass(frozen=True, slots=True)
class FilterField:
    """One filterable logical field."""

    name: str
    column: str
    kind: FieldKind = FieldKind.EQUALS
    value_type: ValueType = ValueType.STRING
    aliases: tuple[str, ...] = ()
    #: When set, *column* lives on the relation's target table.
    relation: Relation | None = None

    @classmethod
    def equals(
        cls,
        name: str,
        column: str,
        value_type: ValueType = ValueType.STRING,
        relation: Relation | None = None,
    ) -> "FilterField":
        return cls(name, column, FieldKind.EQUALS, value_type, relation=relation)

    @classmethod
    def contains(cls, name: str, column: str, relation: Relation | None = None) -> "FilterField":
        return cls(name, column, FieldKind.CONTAINS, ValueType.STRING, relation=relation)

    @classmethod
    def greater_than(
        cls,
        name: str,
        column: str,
        value_type: ValueType = ValueType.TIMESTAMP,
        aliases: tuple[str, ...] = (),
    ) -> "FilterField":
        return cls(name, column, FieldKind.GREATER_THAN, value_type, aliases)

    @classmethod
    def less_than(
        cls,
        name: str,
        column: str,
        value_type: ValueType = ValueType.TIMESTAMP,
        aliases: tuple[str, ...] = (),
    ) -> "FilterField":
        return cls(name, column, FieldKind.LESS_THAN, value_type, aliases)


def timestamp_filters(
    created: str | None = "created_at",
    updated: str | None = "updated_at",
) -> tuple[FilterField, ...]:
    """Standard ``createdAfter`` / ``createdBefore`` / ``updatedAfter`` /
    ``updatedBefore`` bounds, also reachable through the legacy
    ``created_at_gt`` style keys."""
    fields: list[FilterField] = []
    if created is not None:
        fields.append(FilterField.greater_than("createdAfter", created, aliases=("createdAtGt",)))
        fields.append(FilterField.less_than("createdBefore", created, aliases=("createdAtLt",)))
    if updated is not None:
        fields.append(FilterField.greater_than("updatedAfter", updated, aliases=("updatedAtGt",)))
        fields.append(FilterField.less_than("updatedBefore", updated, aliases=("updatedAtLt",)))
    return tuple(fields)


@dataclasses.dataclass(frozen=True, slots=True)
class GeoColumns:
    latitude: str = "latitude"
    longitude: str = "longitude"
    relation: Relation | None = None


@dataclasses.dataclass(frozen=True)
class SearchableFieldRegistry:
    """Declarative filter/order/search configuration for one entity."""

    entity: str
    filters: tuple[FilterField, ...] = ()
    orderable: Mapping[str, str] = dataclasses.field(default_factory=dict)
    searchable: tuple[str, ...] = ()
    primary_key: str = "id"
    geo: GeoColumns | None = None
    timestamps: tuple[str, ...] = ("created_at", "updated_at")

    _lookup: Mapping[str, FilterField] = dataclasses.field(
        init=False, repr=False, compare=False, default_factory=dict
    )
    _relations: Mapping[str, Relation] = dataclasses.field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        if not self.entity.strip():
            raise RegistryError(self.entity, "entity name is blank")
        if not self.primary_key.strip():
            raise RegistryError(self.entity, "primary key column is blank")

        lookup: dict[str, FilterField] = {}
        for field in self.filters:
            if not field.column.strip():
                raise RegistryError(self.entity, f"field '{field.name}' has a blank column")
            for name in (field.name, *field.aliases):
                if not name.strip():
                    raise RegistryError(self.entity, "filter names must not be blank")
                if name in RESERVED_NAMES:
                    raise RegistryError(self.entity, f"'{name}' is a reserved parameter name")
                if name in lookup:
                    raise RegistryError(self.entity, f"filter name '{name}' is declared twice")
                lookup[name] = field
            if field.kind is FieldKind.CONTAINS and field.value_type is not ValueType.STRING:
                raise RegistryError(self.entity, f"contains field '{field.name}' must be a string")

        for name, column in self.orderable.items():
            if not name.strip() or not column.strip():
                raise RegistryError(self.entity, "orderable names and columns must not be blank")
        if any(not column.strip() for column in self.searchable):
            raise RegistryError(self.entity, "searchable columns must not be blank")

        relations: dict[str, Relation] = {}
        for relation in self._declared_relations():
            if not relation.name.strip() or not relation.joins:
                raise RegistryError(self.entity, "relations need a name and at least one join")
            for join in relation.joins:
                if not (join.table.strip() and join.parent_column.strip() and join.column.strip()):
                    raise RegistryError(self.entity, f"relation '{relation.name}' has a blank join")
            if relations.setdefault(relation.name, relation) != relation:
                raise RegistryError(
                    self.entity, f"relation name '{relation.name}' is bound to two different paths"
                )

        object.__setattr__(self, "orderable", MappingProxyType(dict(self.orderable)))
        object.__setattr__(self, "searchable", tuple(self.searchable))
        object.__setattr__(self, "_lookup", MappingProxyType(lookup))
        object.__setattr__(self, "_relations", MappingProxyType(relations))

    def field_for(self, name: str) -> FilterField | None:
        """Resolve a logical name or alias to its field declaration."""
        return self._lookup.get(name)

    def order_column(self, name: str) -> str | None:
        return self.orderable.get(name)

    def _declared_relations(self) -> Iterator[Relation]:
        for field in self.filters:
            if field.relation is not None:
                yield field.relation
        if self.geo is not None and self.geo.relation is not None:
            yield self.geo.relation

    @property
    def relations(self) -> Mapping[str, Relation]:
        return self._relations

    def columns(self) -> frozenset[str]:
        """Every physical column this registry refers to on its own table."""
        cols = {self.primary_key, *self.searchable, *self.orderable.values()}
        cols.update(field.column for field in self.filters if field.relation is None)
        cols.update(self.timestamps)
        if self.geo is not None and self.geo.relation is None:
            cols.update((self.geo.latitude, self.geo.longitude))
        cols.update(relation.joins[0].parent_column for relation in self._relations.values())
        return frozenset(cols)

    def related_columns(self) -> dict[str, frozenset[str]]:
        """Columns each related table must carry, keyed by table name."""
        needed: dict[str, set[str]] = {}
        for relation in self._relations.values():
            for join, following in zip(relation.joins, (*relation.joins[1:], None)):
                cols = needed.setdefault(join.table, set())
                cols.add(join.column)
                if following is not None:
                    cols.add(following.parent_column)
        for field in self.filters:
            if field.relation is not None:
                needed[field.relation.target].add(field.column)
        if self.geo is not None and self.geo.relation is not None:
            needed[self.geo.relation.target].update((self.geo.latitude, self.geo.longitude))
        return {table: frozenset(cols) for table, cols in needed.items()}


__all__ = [
    "RESERVED_NAMES",
    "FieldKind",
    "FilterField",
    "GeoColumns",
    "Join",
    "Relation",
    "SearchableFieldRegistry",
    "ValueType",
    "timestamp_filters",
]
