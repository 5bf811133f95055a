"""Application query – great-circle distance and radius matching."""
from __future__ import annotations

import math
from typing import NamedTuple

from kuhi_query.application.query.request import BoundingBox, GeoQuery

EARTH_RADIUS_METERS = 6_371_000.0

# Widens pre-filter boxes so float rounding never excludes a boundary row.
_BOX_MARGIN_DEGREES = 1e-9


class GeoPoint(NamedTuple):
    latitude: float
    longitude: float


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two points given in degrees."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(max(0.0, a))))


class GeoRadiusFilter:
    """Inclusive radius test around a :class:`GeoQuery` centre.

    Coordinates are not range-checked here.
    """

    def distance(self, point: GeoPoint, query: GeoQuery) -> float:
        return haversine_distance(query.latitude, query.longitude, point.latitude, point.longitude)

    def matches(self, point: GeoPoint | tuple[float | None, float | None] | None, query: GeoQuery) -> bool:
        """``True`` iff *point* lies within ``query.radius_meters`` (``<=``).

        Rows without coordinates never match.
        """
        if point is None:
            return False
        latitude, longitude = point
        if latitude is None or longitude is None:
            return False
        return self.distance(GeoPoint(latitude, longitude), query) <= query.radius_meters

    def bounding_box(self, query: GeoQuery) -> BoundingBox | None:
        """Return a lat/lon box that contains every matching point.

        The box is only a pre-filter: it is looser than the circle, so the
        exact :meth:`matches` check must still run on the rows it admits.
        Near the poles, or when the circle crosses the antimeridian, the box
        spans every longitude.  A centre outside the valid coordinate range
        has no meaningful box and yields ``None``.
        """
        if not (-90.0 <= query.latitude <= 90.0 and -180.0 <= query.longitude <= 180.0):
            return None
        angular = query.radius_meters / EARTH_RADIUS_METERS
        if angular >= math.pi:
            return BoundingBox(-180.0, -90.0, 180.0, 90.0)

        lat = math.radians(query.latitude)
        lon = math.radians(query.longitude)
        min_lat = lat - angular
        max_lat = lat + angular

        if min_lat <= -math.pi / 2 or max_lat >= math.pi / 2:
            min_lat = min(max(min_lat, -math.pi / 2), math.pi / 2)
            max_lat = max(min(max_lat, math.pi / 2), -math.pi / 2)
            min_lon, max_lon = -math.pi, math.pi
        else:
            d_lon = math.asin(min(1.0, math.sin(angular) / math.cos(lat)))
            min_lon = lon - d_lon
            max_lon = lon + d_lon
            if min_lon < -math.pi or max_lon > math.pi:
                min_lon, max_lon = -math.pi, math.pi

        return BoundingBox(
            min_lon=math.degrees(min_lon) - _BOX_MARGIN_DEGREES,
            min_lat=math.degrees(min_lat) - _BOX_MARGIN_DEGREES,
            max_lon=math.degrees(max_lon) + _BOX_MARGIN_DEGREES,
            max_lat=math.degrees(max_lat) + _BOX_MARGIN_DEGREES,
        )


__all__ = ["EARTH_RADIUS_METERS", "GeoPoint", "GeoRadiusFilter", "haversine_distance"]
