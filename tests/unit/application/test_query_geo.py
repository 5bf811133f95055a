"""Unit tests for haversine distance and GeoRadiusFilter."""

from __future__ import annotations

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from kuhi_query.application.query import GeoPoint, GeoQuery, GeoRadiusFilter, haversine_distance

_lat = st.floats(min_value=-89.0, max_value=89.0)
_lon = st.floats(min_value=-179.0, max_value=179.0)

TOKYO = GeoPoint(35.6812, 139.7671)
OSAKA = GeoPoint(34.7025, 135.4959)


class TestHaversine:
    def test_same_point_is_zero(self) -> None:
        assert haversine_distance(*TOKYO, *TOKYO) == 0.0

    def test_tokyo_osaka(self) -> None:
        # ~403 km great-circle.
        assert haversine_distance(*TOKYO, *OSAKA) == pytest.approx(403_000, rel=0.01)

    def test_one_degree_latitude(self) -> None:
        expected = 6_371_000.0 * math.pi / 180
        assert haversine_distance(0.0, 0.0, 1.0, 0.0) == pytest.approx(expected)

    def test_antipodes(self) -> None:
        assert haversine_distance(0.0, 0.0, 0.0, 180.0) == pytest.approx(6_371_000.0 * math.pi)

    @given(_lat, _lon, _lat, _lon)
    def test_symmetric(self, lat1: float, lon1: float, lat2: float, lon2: float) -> None:
        assert haversine_distance(lat1, lon1, lat2, lon2) == pytest.approx(
            haversine_distance(lat2, lon2, lat1, lon1), abs=1e-6
        )


class TestGeoRadiusFilter:
    def test_zero_radius_matches_identical_point_only(self) -> None:
        query = GeoQuery(TOKYO.latitude, TOKYO.longitude, 0.0)
        geo = GeoRadiusFilter()
        assert geo.matches(TOKYO, query)
        assert not geo.matches(GeoPoint(TOKYO.latitude + 1e-6, TOKYO.longitude), query)

    def test_distance_zero_radius_one(self) -> None:
        assert GeoRadiusFilter().matches(TOKYO, GeoQuery(*TOKYO, 1.0))

    def test_boundary_is_inclusive_and_epsilon_outside_excluded(self) -> None:
        geo = GeoRadiusFilter()
        distance = geo.distance(OSAKA, GeoQuery(*TOKYO, 0.0))
        assert geo.matches(OSAKA, GeoQuery(*TOKYO, distance))
        assert not geo.matches(OSAKA, GeoQuery(*TOKYO, distance - 1e-3))
        assert geo.matches(OSAKA, GeoQuery(*TOKYO, distance + 1e-3))

    def test_missing_coordinates_never_match(self) -> None:
        query = GeoQuery(0.0, 0.0, 1e9)
        geo = GeoRadiusFilter()
        assert not geo.matches(None, query)
        assert not geo.matches((None, 0.0), query)
        assert not geo.matches((0.0, None), query)

    def test_plain_tuple_accepted(self) -> None:
        assert GeoRadiusFilter().matches((35.6812, 139.7671), GeoQuery(*TOKYO, 10.0))

    def test_bounding_box_spans_all_longitudes_near_pole(self) -> None:
        box = GeoRadiusFilter().bounding_box(GeoQuery(89.9, 0.0, 50_000.0))
        assert box.min_lon < -179.9
        assert box.max_lon > 179.9

    def test_bounding_box_spans_all_longitudes_across_antimeridian(self) -> None:
        box = GeoRadiusFilter().bounding_box(GeoQuery(0.0, 179.99, 10_000.0))
        assert box.min_lon < -179.9
        assert box.max_lon > 179.9

    def test_centre_outside_valid_range_has_no_box(self) -> None:
        geo = GeoRadiusFilter()
        assert geo.bounding_box(GeoQuery(100.0, 0.0, 10.0)) is None
        assert geo.bounding_box(GeoQuery(0.0, -200.0, 10.0)) is None

    def test_box_at_pole_keeps_minimums_below_maximums(self) -> None:
        box = GeoRadiusFilter().bounding_box(GeoQuery(90.0, 0.0, 10.0))
        assert box.min_lat <= box.max_lat
        assert box.contains(90.0, 123.0)

    def test_out_of_range_centre_does_not_raise(self) -> None:
        assert not GeoRadiusFilter().matches((35.0, 139.0), GeoQuery(250.0, 720.0, 10.0))

    def test_huge_radius_is_whole_globe(self) -> None:
        box = GeoRadiusFilter().bounding_box(GeoQuery(0.0, 0.0, 1e9))
        assert (box.min_lat, box.max_lat) == (-90.0, 90.0)

    @given(_lat, _lon, st.floats(min_value=0.0, max_value=500_000.0), st.floats(0, 1), st.floats(0, 2 * math.pi))
    def test_bounding_box_contains_every_match(
        self, lat: float, lon: float, radius: float, frac: float, bearing: float
    ) -> None:
        query = GeoQuery(lat, lon, radius)
        geo = GeoRadiusFilter()
        # Point at distance frac*radius along the given bearing.
        angular = frac * radius / 6_371_000.0
        phi1, lam1 = math.radians(lat), math.radians(lon)
        phi2 = math.asin(
            math.sin(phi1) * math.cos(angular) + math.cos(phi1) * math.sin(angular) * math.cos(bearing)
        )
        lam2 = lam1 + math.atan2(
            math.sin(bearing) * math.sin(angular) * math.cos(phi1),
            math.cos(angular) - math.sin(phi1) * math.sin(phi2),
        )
        point_lat = math.degrees(phi2)
        point_lon = (math.degrees(lam2) + 540.0) % 360.0 - 180.0
        box = geo.bounding_box(query)
        if geo.matches((point_lat, point_lon), query):
            assert box.contains(point_lat, point_lon)
