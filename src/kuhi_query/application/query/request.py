"""Application query – FilterRequest, GeoQuery, BoundingBox value objects."""
from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Mapping

from kuhi_query.kernel.errors import InvariantViolationError

FilterValue = str | int


@dataclasses.dataclass(frozen=True, slots=True)
class GeoQuery:
    """Radius search centre and radius (meters)."""

    latitude: float
    longitude: float
    radius_meters: float

    @classmethod
    def from_parts(
        cls,
        latitude: float | None,
        longitude: float | None,
        radius_meters: float | None,
    ) -> "GeoQuery | None":
        """Return a query only when all three parts are present."""
        if latitude is None or longitude is None or radius_meters is None:
            return None
        return cls(latitude, longitude, radius_meters)


@dataclasses.dataclass(frozen=True, slots=True)
class BoundingBox:
    """Inclusive lon/lat rectangle, in wire order ``minLon,minLat,maxLon,maxLat``."""

    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    def __post_init__(self) -> None:
        if self.min_lat > self.max_lat or self.min_lon > self.max_lon:
            raise InvariantViolationError(
                "bounding box minimums must not exceed maximums",
                detail={"bbox": [self.min_lon, self.min_lat, self.max_lon, self.max_lat]},
            )

    def contains(self, latitude: float, longitude: float) -> bool:
        return (
            self.min_lat <= latitude <= self.max_lat
            and self.min_lon <= longitude <= self.max_lon
        )


def _is_blank(value: object) -> bool:
    return isinstance(value, str) and not value.strip()


@dataclasses.dataclass(frozen=True)
class FilterRequest:
    """Typed, normalised view of one request's query parameters.

    Every field is either a valid value or absent (``None`` / missing key).
    ``filters`` is keyed by the logical camelCase field name declared in the
    entity's :class:`~kuhi_query.application.query.registry.SearchableFieldRegistry`.
    """

    limit: int | None = None
    offset: int | None = None
    ordering: tuple[str, ...] | None = None
    search: str | None = None
    filters: Mapping[str, FilterValue] = dataclasses.field(default_factory=dict)
    geo: GeoQuery | None = None
    bbox: BoundingBox | None = None

    def __post_init__(self) -> None:
        if self.ordering is not None:
            ordering = tuple(self.ordering)
            if not ordering:
                raise InvariantViolationError("ordering must be absent rather than empty")
            object.__setattr__(self, "ordering", ordering)
        if _is_blank(self.search):
            raise InvariantViolationError("search must be absent rather than blank")
        blank = sorted(k for k, v in self.filters.items() if v is None or _is_blank(v))
        if blank:
            raise InvariantViolationError(
                "filters must not carry blank values", detail={"fields": blank}
            )
        object.__setattr__(self, "filters", MappingProxyType(dict(self.filters)))

    def get(self, name: str) -> FilterValue | None:
        return self.filters.get(name)

    @property
    def is_empty(self) -> bool:
        """``True`` when no filter, search or geo condition is present."""
        return not self.filters and self.search is None and self.geo is None and self.bbox is None


__all__ = ["BoundingBox", "FilterRequest", "FilterValue", "GeoQuery"]
