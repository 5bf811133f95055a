"""Application query – registries for the haiku-monument dataset.

One :class:`SearchableFieldRegistry` per listed entity.  Column names are the
physical snake_case columns of the relational schema.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from kuhi_query.application.query.registry import (
    FilterField,
    GeoColumns,
    Join,
    Relation,
    SearchableFieldRegistry,
    ValueType,
    timestamp_filters,
)
from kuhi_query.kernel.errors import RegistryError

_INT = ValueType.INTEGER
_ISO = ValueType.ISO_TIMESTAMP

_TIMESTAMP_ORDERING = {"createdAt": "created_at", "updatedAt": "updated_at"}

_MONUMENT_LOCATIONS = Relation(
    "locations",
    (
        Join("monument_locations", "id", "monument_id"),
        Join("locations", "location_id", "id"),
    ),
)

# monument -> inscriptions -> inscription_poems -> poem_attributions
_MONUMENT_POETS = Relation(
    "poem_attributions",
    (
        Join("inscriptions", "id", "monument_id"),
        Join("inscription_poems", "id", "inscription_id"),
        Join("poem_attributions", "poem_id", "poem_id"),
    ),
)

_POEM_POETS = Relation("poem_attributions", (Join("poem_attributions", "id", "poem_id"),))

MONUMENTS = SearchableFieldRegistry(
    entity="monuments",
    filters=(
        FilterField.contains("canonicalNameContains", "canonical_name"),
        FilterField.equals("monumentType", "monument_type"),
        FilterField.equals("material", "material"),
        FilterField.equals("prefecture", "prefecture", relation=_MONUMENT_LOCATIONS),
        FilterField.equals("region", "region", relation=_MONUMENT_LOCATIONS),
        FilterField.equals("poetId", "poet_id", _INT, relation=_MONUMENT_POETS),
        *timestamp_filters(),
    ),
    orderable={"id": "id", "canonicalName": "canonical_name", **_TIMESTAMP_ORDERING},
    searchable=("canonical_name",),
    geo=GeoColumns("latitude", "longitude", relation=_MONUMENT_LOCATIONS),
)

POETS = SearchableFieldRegistry(
    entity="poets",
    filters=(
        FilterField.contains("nameContains", "name"),
        FilterField.contains("biographyContains", "biography"),
        FilterField.equals("birthYear", "birth_year", _INT),
        FilterField.equals("deathYear", "death_year", _INT),
        *timestamp_filters(),
    ),
    orderable={
        "id": "id",
        "name": "name",
        "birthYear": "birth_year",
        "deathYear": "death_year",
        **_TIMESTAMP_ORDERING,
    },
    searchable=("name", "biography"),
)

LOCATIONS = SearchableFieldRegistry(
    entity="locations",
    filters=(
        FilterField.equals("prefecture", "prefecture"),
        FilterField.equals("region", "region"),
        FilterField.equals("municipality", "municipality"),
        FilterField.equals("imiPrefCode", "imi_pref_code"),
        *timestamp_filters(),
    ),
    orderable={
        "id": "id",
        "prefecture": "prefecture",
        "region": "region",
        "municipality": "municipality",
        "placeName": "place_name",
        **_TIMESTAMP_ORDERING,
    },
    searchable=("place_name", "address", "municipality"),
    geo=GeoColumns("latitude", "longitude"),
)

SOURCES = SearchableFieldRegistry(
    entity="sources",
    filters=(
        FilterField.contains("titleContains", "title"),
        FilterField.contains("authorContains", "author"),
        FilterField.contains("publisherContains", "publisher"),
        FilterField.equals("sourceYear", "source_year", _INT),
        FilterField.greater_than("sourceYearGt", "source_year", _INT),
        FilterField.less_than("sourceYearLt", "source_year", _INT),
        *timestamp_filters(),
    ),
    orderable={
        "id": "id",
        "title": "title",
        "author": "author",
        "sourceYear": "source_year",
        **_TIMESTAMP_ORDERING,
    },
    searchable=("title", "author", "citation"),
)

INSCRIPTIONS = SearchableFieldRegistry(
    entity="inscriptions",
    filters=(
        FilterField.equals("monumentId", "monument_id", _INT),
        FilterField.equals("sourceId", "source_id", _INT),
        FilterField.equals("side", "side"),
        FilterField.equals("language", "language"),
        *timestamp_filters(),
    ),
    orderable={"id": "id", "monumentId": "monument_id", "side": "side", **_TIMESTAMP_ORDERING},
    searchable=("original_text", "transliteration", "reading"),
)

EVENTS = SearchableFieldRegistry(
    entity="events",
    filters=(
        FilterField.equals("monumentId", "monument_id", _INT),
        FilterField.equals("sourceId", "source_id", _INT),
        FilterField.equals("eventType", "event_type"),
        FilterField.contains("actorContains", "actor"),
        FilterField.equals("actor", "actor"),
        FilterField.greater_than("intervalStartAfter", "interval_start", _ISO),
        FilterField.less_than("intervalEndBefore", "interval_end", _ISO),
        *timestamp_filters(updated=None),
    ),
    orderable={
        "id": "id",
        "eventType": "event_type",
        "intervalStart": "interval_start",
        "createdAt": "created_at",
    },
    searchable=("event_type", "actor"),
    timestamps=("created_at",),
)

MEDIA = SearchableFieldRegistry(
    entity="media",
    filters=(
        FilterField.equals("monumentId", "monument_id", _INT),
        FilterField.equals("mediaType", "media_type"),
        FilterField.equals("photographer", "photographer"),
        FilterField.equals("license", "license"),
        *timestamp_filters(),
    ),
    orderable={
        "id": "id",
        "mediaType": "media_type",
        "capturedAt": "captured_at",
        **_TIMESTAMP_ORDERING,
    },
    searchable=("url", "photographer"),
)

POEMS = SearchableFieldRegistry(
    entity="poems",
    filters=(
        FilterField.contains("textContains", "text"),
        FilterField.equals("kigo", "kigo"),
        FilterField.equals("season", "season"),
        FilterField.equals("poetId", "poet_id", _INT, relation=_POEM_POETS),
        *timestamp_filters(),
    ),
    orderable={"id": "id", "text": "text", "season": "season", **_TIMESTAMP_ORDERING},
    searchable=("text", "normalized_text", "kigo"),
)

CATALOG: Mapping[str, SearchableFieldRegistry] = MappingProxyType(
    {
        registry.entity: registry
        for registry in (MONUMENTS, POETS, LOCATIONS, SOURCES, INSCRIPTIONS, EVENTS, MEDIA, POEMS)
    }
)


def registry_for(entity: str) -> SearchableFieldRegistry:
    """Look up a registry by entity name."""
    try:
        return CATALOG[entity]
    except KeyError:
        raise RegistryError(entity, "no registry is declared for this entity") from None


__all__ = [
    "CATALOG",
    "EVENTS",
    "INSCRIPTIONS",
    "LOCATIONS",
    "MEDIA",
    "MONUMENTS",
    "POEMS",
    "POETS",
    "SOURCES",
    "registry_for",
]
