"""Tests for the haversine helpers."""
import math

import pytest

from eventradar.services.geo import EARTH_RADIUS_KM, GeoPoint, distance_between, haversine_km


def test_same_point_is_zero():
    assert haversine_km(-6.2, 106.816, -6.2, 106.816) == 0


def test_one_degree_of_latitude():
    assert haversine_km(0, 0, 1, 0) == pytest.approx(111.195, abs=0.001)


def test_half_circumference_between_antipodes():
    assert haversine_km(0, 0, 0, 180) == pytest.approx(math.pi * EARTH_RADIUS_KM)


def test_known_city_pair():
    # Jakarta to Bandung
    assert haversine_km(-6.2000, 106.8160, -6.9175, 107.6191) == pytest.approx(119.31, abs=0.05)


def test_symmetric():
    assert haversine_km(51.5, -0.12, 48.85, 2.35) == pytest.approx(haversine_km(48.85, 2.35, 51.5, -0.12))


@pytest.mark.parametrize(
    "origin,lat,lng",
    [
        (None, 1.0, 1.0),
        (GeoPoint(1.0, 1.0), None, 1.0),
        (GeoPoint(1.0, 1.0), 1.0, None),
    ],
)
def test_distance_between_missing_coordinates(origin, lat, lng):
    assert distance_between(origin, lat, lng) is None


def test_distance_between_zero_coordinates_are_present():
    assert distance_between(GeoPoint(0.0, 0.0), 0.0, 0.0) == 0
    assert distance_between(GeoPoint(0.0, 1.0), 0.0, 0.0) == pytest.approx(111.195, abs=0.001)
