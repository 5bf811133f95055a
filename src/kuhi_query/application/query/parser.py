"""Application query – QueryParameterParser.

Parsing is lenient throughout: a value that is blank or malformed for its
declared type is treated as absent, never as an error.  Malformed input is
logged at debug level so it can still be traced.
"""
from __future__ import annotations

import math
import re
from collections.abc import Iterable, Iterator, Mapping, Sequence

from kuhi_query.application.query.registry import FilterField, SearchableFieldRegistry, ValueType
from kuhi_query.application.query.request import BoundingBox, FilterRequest, FilterValue, GeoQuery
from kuhi_query.kernel.casing import to_camel_key
from kuhi_query.kernel.time import iso_timestamp, storage_timestamp
from kuhi_query.observability.logging import get_logger

_log = get_logger(__name__)

RawParams = Mapping[str, str | Sequence[str]] | Iterable[tuple[str, str]]

_INTEGER = re.compile(r"^[+-]?[0-9]+$")

_TIMESTAMP_FORMS = {
    ValueType.TIMESTAMP: storage_timestamp,
    ValueType.ISO_TIMESTAMP: iso_timestamp,
}


def _iter_pairs(raw: RawParams) -> Iterator[tuple[str, str]]:
    """Flatten a multi-valued map (or an iterable of pairs) preserving order."""
    if isinstance(raw, Mapping):
        for key, value in raw.items():
            if isinstance(value, str):
                yield key, value
            else:
                for item in value:
                    yield key, item
    else:
        yield from raw


def parse_int(raw: str) -> int | None:
    text = raw.strip()
    if not _INTEGER.match(text):
        return None
    return int(text)


def parse_float(raw: str) -> float | None:
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_bbox(raw: str) -> BoundingBox | None:
    """``"minLon,minLat,maxLon,maxLat"`` → :class:`BoundingBox`."""
    parts = [parse_float(part) for part in raw.split(",")]
    if len(parts) != 4 or any(part is None for part in parts):
        return None
    min_lon, min_lat, max_lon, max_lat = parts
    if min_lon > max_lon or min_lat > max_lat:  # type: ignore[operator]
        return None
    return BoundingBox(min_lon, min_lat, max_lon, max_lat)  # type: ignore[arg-type]


class QueryParameterParser:
    """Build a :class:`FilterRequest` from raw query-string pairs.

    Keys arrive in snake_case and are matched in camelCase against the
    registry (``name_contains`` → ``nameContains``).  ``ordering`` keeps
    every occurrence in order; every other key takes its first non-blank
    occurrence.  Keys the registry does not know are ignored.
    """

    def __init__(self, registry: SearchableFieldRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> SearchableFieldRegistry:
        return self._registry

    def parse(self, raw: RawParams) -> FilterRequest:
        values: dict[str, list[str]] = {}
        for key, value in _iter_pairs(raw):
            if not value.strip():
                continue
            values.setdefault(to_camel_key(key.strip()), []).append(value)

        def first(name: str) -> str | None:
            found = values.get(name)
            return found[0] if found else None

        ordering = values.get("ordering")
        search = first("search") or first("q")

        return FilterRequest(
            limit=self._number(first("limit"), "limit"),
            offset=self._number(first("offset"), "offset"),
            ordering=tuple(ordering) if ordering else None,
            search=search,
            filters=self._filters(values),
            geo=self._geo(first("lat"), first("lon"), first("radius")),
            bbox=self._bbox(first("bbox")),
        )

    def _number(self, raw: str | None, name: str) -> int | None:
        if raw is None:
            return None
        value = parse_int(raw)
        if value is None:
            self._dropped(name, raw, "not an integer")
        return value

    def _filters(self, values: Mapping[str, list[str]]) -> dict[str, FilterValue]:
        filters: dict[str, FilterValue] = {}
        for key, raw_values in values.items():
            field = self._registry.field_for(key)
            if field is None:
                continue
            # An alias and its canonical name resolve to the same field; first wins.
            if field.name in filters:
                continue
            value = self._coerce(field, raw_values[0])
            if value is not None:
                filters[field.name] = value
        return filters

    def _coerce(self, field: FilterField, raw: str) -> FilterValue | None:
        if field.value_type is ValueType.INTEGER:
            value = parse_int(raw)
            if value is None:
                self._dropped(field.name, raw, "not an integer")
            return value
        if field.value_type in _TIMESTAMP_FORMS:
            result = _TIMESTAMP_FORMS[field.value_type](raw)
            if result.is_err():
                self._dropped(field.name, raw, "not an ISO-8601 timestamp")
                return None
            return result.unwrap()
        return raw

    def _geo(self, lat: str | None, lon: str | None, radius: str | None) -> GeoQuery | None:
        if lat is None and lon is None and radius is None:
            return None
        latitude = parse_float(lat) if lat is not None else None
        longitude = parse_float(lon) if lon is not None else None
        radius_meters = parse_float(radius) if radius is not None else None
        if radius_meters is not None and radius_meters < 0:
            radius_meters = None
        query = GeoQuery.from_parts(latitude, longitude, radius_meters)
        if query is None:
            self._dropped("geo", f"lat={lat} lon={lon} radius={radius}", "incomplete or malformed")
        return query

    def _bbox(self, raw: str | None) -> BoundingBox | None:
        if raw is None:
            return None
        bbox = parse_bbox(raw)
        if bbox is None:
            self._dropped("bbox", raw, "expected minLon,minLat,maxLon,maxLat")
        return bbox

    def _dropped(self, name: str, raw: str, reason: str) -> None:
        _log.debug(
            "query_param_dropped",
            entity=self._registry.entity,
            param=name,
            value=raw,
            reason=reason,
        )


__all__ = ["QueryParameterParser", "RawParams", "parse_bbox", "parse_float", "parse_int"]
