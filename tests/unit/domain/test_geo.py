"""Unit tests for great-circle helpers."""

import pytest

from pickme.domain.geo import bounding_box, haversine_meters
from pickme.domain.value import GeoPoint

BERLIN = GeoPoint(latitude=52.5200, longitude=13.4050)
POTSDAM = GeoPoint(latitude=52.3906, longitude=13.0645)


class TestHaversine:
    """Tests for haversine_meters."""

    def test_same_point_is_zero(self):
        assert haversine_meters(BERLIN, BERLIN) == 0

    def test_known_city_distance(self):
        """Berlin to Potsdam is roughly 27 km."""
        distance = haversine_meters(BERLIN, POTSDAM)

        assert 26_000 < distance < 28_000

    def test_symmetric(self):
        assert haversine_meters(BERLIN, POTSDAM) == pytest.approx(
            haversine_meters(POTSDAM, BERLIN)
        )

    def test_one_degree_of_latitude(self):
        a = GeoPoint(latitude=0.0, longitude=0.0)
        b = GeoPoint(latitude=1.0, longitude=0.0)

        assert haversine_meters(a, b) == pytest.approx(111_195, rel=1e-3)

    def test_grows_along_a_line(self):
        origin = GeoPoint(latitude=45.50, longitude=-73.58)
        nearer = GeoPoint(latitude=45.51, longitude=-73.58)
        farther = GeoPoint(latitude=45.52, longitude=-73.58)

        assert 0 < haversine_meters(origin, nearer) < haversine_meters(origin, farther)
        assert haversine_meters(origin, farther) == pytest.approx(
            haversine_meters(origin, nearer) + haversine_meters(nearer, farther)
        )

    def test_antipodal_points_do_not_blow_up(self):
        a = GeoPoint(latitude=0.0, longitude=0.0)
        b = GeoPoint(latitude=0.0, longitude=180.0)

        assert haversine_meters(a, b) == pytest.approx(20_015_087, rel=1e-3)


class TestBoundingBox:
    """Tests for bounding_box."""

    def test_box_contains_points_on_the_circle(self):
        radius = 5_000
        box = bounding_box(BERLIN, radius)

        assert box.min_latitude < BERLIN.latitude < box.max_latitude
        assert box.min_longitude is not None
        assert box.max_longitude is not None
        assert box.min_longitude < BERLIN.longitude < box.max_longitude

        # A point due east at the radius must fall inside the box
        east = GeoPoint(latitude=BERLIN.latitude, longitude=box.max_longitude - 1e-6)
        assert haversine_meters(BERLIN, east) <= radius * 1.01

    def test_longitude_filter_dropped_near_pole(self):
        near_pole = GeoPoint(latitude=89.99, longitude=0.0)

        box = bounding_box(near_pole, 5_000)

        assert box.min_longitude is None
        assert box.max_longitude is None
        assert box.max_latitude == 90.0

    def test_longitude_filter_dropped_across_antimeridian(self):
        fiji = GeoPoint(latitude=-17.7, longitude=179.99)

        box = bounding_box(fiji, 10_000)

        assert box.min_longitude is None
        assert box.max_longitude is None
