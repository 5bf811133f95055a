"""Unit tests for SearchableFieldRegistry and the entity catalog."""

from __future__ import annotations

import pytest

from kuhi_query.application.query import (
    CATALOG,
    FieldKind,
    FilterField,
    GeoColumns,
    SearchableFieldRegistry,
    ValueType,
    registry_for,
    timestamp_filters,
)
from kuhi_query.application.query.catalog import EVENTS, LOCATIONS, MONUMENTS, POEMS, POETS, SOURCES
from kuhi_query.application.query.registry import RESERVED_NAMES, Join, Relation
from kuhi_query.kernel.errors import RegistryError


# ---------------------------------------------------------------------------
# FilterField factories
# ---------------------------------------------------------------------------


class TestFilterField:
    def test_equals_defaults_to_string(self) -> None:
        field = FilterField.equals("region", "region")
        assert field.kind is FieldKind.EQUALS
        assert field.value_type is ValueType.STRING

    def test_range_defaults_to_timestamp(self) -> None:
        assert FilterField.greater_than("after", "created_at").value_type is ValueType.TIMESTAMP
        assert FilterField.less_than("before", "created_at").kind is FieldKind.LESS_THAN

    def test_timestamp_filters(self) -> None:
        names = {f.name: f for f in timestamp_filters()}
        assert set(names) == {"createdAfter", "createdBefore", "updatedAfter", "updatedBefore"}
        assert names["createdAfter"].aliases == ("createdAtGt",)
        assert names["updatedBefore"].column == "updated_at"

    def test_timestamp_filters_without_updated(self) -> None:
        assert [f.name for f in timestamp_filters(updated=None)] == ["createdAfter", "createdBefore"]


# ---------------------------------------------------------------------------
# Registry validation
# ---------------------------------------------------------------------------


class TestRegistryValidation:
    def test_lookup_by_name_and_alias(self) -> None:
        registry = SearchableFieldRegistry(entity="x", filters=timestamp_filters())
        assert registry.field_for("createdAfter") is registry.field_for("createdAtGt")
        assert registry.field_for("missing") is None

    def test_order_column(self) -> None:
        registry = SearchableFieldRegistry(entity="x", orderable={"birthYear": "birth_year"})
        assert registry.order_column("birthYear") == "birth_year"
        assert registry.order_column("birth_year") is None

    def test_blank_entity_rejected(self) -> None:
        with pytest.raises(RegistryError):
            SearchableFieldRegistry(entity=" ")

    def test_duplicate_name_rejected(self) -> None:
        with pytest.raises(RegistryError, match="declared twice"):
            SearchableFieldRegistry(
                entity="x",
                filters=(FilterField.equals("a", "a"), FilterField.equals("a", "b")),
            )

    def test_alias_collision_rejected(self) -> None:
        with pytest.raises(RegistryError):
            SearchableFieldRegistry(
                entity="x",
                filters=(*timestamp_filters(), FilterField.equals("createdAtGt", "c")),
            )

    @pytest.mark.parametrize("name", sorted(RESERVED_NAMES))
    def test_reserved_names_rejected(self, name: str) -> None:
        with pytest.raises(RegistryError, match="reserved"):
            SearchableFieldRegistry(entity="x", filters=(FilterField.equals(name, "col"),))

    def test_blank_column_rejected(self) -> None:
        with pytest.raises(RegistryError):
            SearchableFieldRegistry(entity="x", filters=(FilterField.equals("a", ""),))

    def test_contains_must_be_string(self) -> None:
        with pytest.raises(RegistryError):
            SearchableFieldRegistry(
                entity="x",
                filters=(FilterField("a", "a", FieldKind.CONTAINS, ValueType.INTEGER),),
            )

    def test_blank_searchable_rejected(self) -> None:
        with pytest.raises(RegistryError):
            SearchableFieldRegistry(entity="x", searchable=("name", ""))

    def test_blank_orderable_rejected(self) -> None:
        with pytest.raises(RegistryError):
            SearchableFieldRegistry(entity="x", orderable={"name": " "})

    def test_orderable_is_read_only(self) -> None:
        source = {"name": "name"}
        registry = SearchableFieldRegistry(entity="x", orderable=source)
        source["extra"] = "extra"
        assert registry.order_column("extra") is None

    def test_columns(self) -> None:
        registry = SearchableFieldRegistry(
            entity="x",
            filters=(FilterField.equals("a", "col_a"),),
            orderable={"b": "col_b"},
            searchable=("col_c",),
            geo=GeoColumns("lat", "lng"),
        )
        assert registry.columns() == {
            "id", "col_a", "col_b", "col_c", "lat", "lng", "created_at", "updated_at",
        }


# ---------------------------------------------------------------------------
# Relations
# ---------------------------------------------------------------------------

SPOTS = Relation("spots", (Join("item_spots", "id", "item_id"), Join("spots", "spot_id", "id")))


class TestRelations:
    def test_related_fields_stay_off_own_columns(self) -> None:
        registry = SearchableFieldRegistry(
            entity="items",
            filters=(FilterField.equals("region", "region", relation=SPOTS),),
            geo=GeoColumns("lat", "lng", relation=SPOTS),
        )
        assert registry.columns() == {"id", "created_at", "updated_at"}
        assert registry.relations == {"spots": SPOTS}

    def test_related_columns_per_table(self) -> None:
        registry = SearchableFieldRegistry(
            entity="items",
            filters=(FilterField.equals("region", "region", relation=SPOTS),),
            geo=GeoColumns("lat", "lng", relation=SPOTS),
        )
        assert registry.related_columns() == {
            "item_spots": {"item_id", "spot_id"},
            "spots": {"id", "region", "lat", "lng"},
        }

    def test_relation_without_joins_rejected(self) -> None:
        with pytest.raises(RegistryError, match="at least one join"):
            SearchableFieldRegistry(
                entity="x",
                filters=(FilterField.equals("a", "a", relation=Relation("r", ())),),
            )

    def test_blank_join_rejected(self) -> None:
        with pytest.raises(RegistryError, match="blank join"):
            SearchableFieldRegistry(
                entity="x",
                filters=(FilterField.equals("a", "a", relation=Relation("r", (Join("t", "id", " "),))),),
            )

    def test_one_name_two_paths_rejected(self) -> None:
        other = Relation("spots", (Join("spots", "id", "item_id"),))
        with pytest.raises(RegistryError, match="two different paths"):
            SearchableFieldRegistry(
                entity="x",
                filters=(
                    FilterField.equals("a", "a", relation=SPOTS),
                    FilterField.equals("b", "b", relation=other),
                ),
            )


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class TestCatalog:
    def test_all_entities_declared(self) -> None:
        assert set(CATALOG) == {
            "monuments", "poets", "locations", "sources", "inscriptions", "events", "media", "poems",
        }

    def test_registry_for(self) -> None:
        assert registry_for("poets") is POETS

    def test_registry_for_unknown(self) -> None:
        with pytest.raises(RegistryError) as exc_info:
            registry_for("haiku")
        assert exc_info.value.entity == "haiku"

    def test_geo_entities(self) -> None:
        assert [r.entity for r in CATALOG.values() if r.geo is not None] == ["monuments", "locations"]
        assert LOCATIONS.geo == GeoColumns("latitude", "longitude")
        assert MONUMENTS.geo.relation is MONUMENTS.field_for("prefecture").relation

    def test_monument_location_filters_go_through_locations(self) -> None:
        relation = MONUMENTS.field_for("region").relation
        assert relation.name == "locations"
        assert relation.target == "locations"
        assert [join.table for join in relation.joins] == ["monument_locations", "locations"]

    def test_poet_id_on_monuments_and_poems(self) -> None:
        assert MONUMENTS.field_for("poetId").relation.target == "poem_attributions"
        assert POEMS.field_for("poetId").relation.joins == (Join("poem_attributions", "id", "poem_id"),)
        assert POEMS.field_for("poetId").value_type is ValueType.INTEGER

    def test_poets_filters(self) -> None:
        assert POETS.field_for("nameContains").kind is FieldKind.CONTAINS
        assert POETS.field_for("birthYear").value_type is ValueType.INTEGER
        assert POETS.searchable == ("name", "biography")

    def test_source_year_range_is_integer(self) -> None:
        assert SOURCES.field_for("sourceYearGt").value_type is ValueType.INTEGER

    def test_events_have_no_updated_bounds(self) -> None:
        assert EVENTS.field_for("updatedAfter") is None
        assert EVENTS.timestamps == ("created_at",)

    def test_event_intervals_are_iso_timestamps(self) -> None:
        assert EVENTS.field_for("intervalStartAfter").value_type is ValueType.ISO_TIMESTAMP
        assert EVENTS.field_for("intervalEndBefore").value_type is ValueType.ISO_TIMESTAMP
        assert EVENTS.field_for("createdAfter").value_type is ValueType.TIMESTAMP

    def test_every_registry_has_legacy_date_aliases(self) -> None:
        for registry in CATALOG.values():
            assert registry.field_for("createdAtGt") is registry.field_for("createdAfter")
