"""Tests for GeoPoint value object."""

import pytest

from printroute.domain.value_objects.geo_point import DEFAULT_CITY_CENTER, GeoPoint


def test_geo_point_is_frozen():
    p = GeoPoint(latitude=1.0, longitude=2.0)
    with pytest.raises(AttributeError):
        p.latitude = 5.0


def test_from_nullable():
    assert GeoPoint.from_nullable(30.0, 31.0) == GeoPoint(30.0, 31.0)
    assert GeoPoint.from_nullable(None, 31.0) is None
    assert GeoPoint.from_nullable(30.0, None) is None


def test_zero_is_a_coordinate():
    assert GeoPoint.from_nullable(0.0, 0.0) == GeoPoint(0.0, 0.0)


def test_default_city_center_is_cairo():
    assert DEFAULT_CITY_CENTER == GeoPoint(latitude=30.0444, longitude=31.2357)
