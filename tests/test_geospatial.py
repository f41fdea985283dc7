import math

import pytest

from tracker.models.domain import GeoPoint
from tracker.services.geospatial import (
    clamp01,
    coerce_point,
    fit_bounds,
    haversine_between,
    haversine_km,
    lerp_point,
    parse_point,
)

FALLBACK = GeoPoint(35.3733, -119.0187)


def test_haversine_self_distance_is_zero():
    for point in [(0.0, 0.0), (35.3733, -119.0187), (-89.9, 179.9)]:
        assert haversine_km(*point, *point) == 0.0


def test_haversine_known_distance():
    # One degree of latitude is ~111.19 km on a 6371 km sphere
    assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(111.195, abs=0.01)


def test_haversine_non_finite_inputs_yield_zero():
    assert haversine_km(float("nan"), 0.0, 1.0, 1.0) == 0.0
    assert haversine_km(0.0, float("inf"), 1.0, 1.0) == 0.0
    assert haversine_km("abc", 0.0, 1.0, 1.0) == 0.0


def test_clamp01():
    assert clamp01(-0.5) == 0.0
    assert clamp01(1.7) == 1.0
    assert clamp01(0.4) == 0.4
    assert clamp01(float("nan")) == 0.0
    assert clamp01("junk") == 0.0


def test_lerp_point_endpoints():
    a = GeoPoint(10.0, 20.0)
    b = GeoPoint(20.0, 40.0)
    assert lerp_point(a, b, 0.0) == a
    assert lerp_point(a, b, 1.0) == b
    assert lerp_point(a, b, 0.5) == GeoPoint(15.0, 30.0)


@pytest.mark.parametrize(
    "value, expected",
    [
        ({"lat": 35.1, "lng": -119.2}, GeoPoint(35.1, -119.2)),
        ({"lat": "35.1", "lng": " -119.2 "}, GeoPoint(35.1, -119.2)),
        ((35.1, -119.2), GeoPoint(35.1, -119.2)),
        (GeoPoint(1.0, 2.0), GeoPoint(1.0, 2.0)),
    ],
)
def test_parse_point_accepts_point_like_values(value, expected):
    assert parse_point(value) == expected


@pytest.mark.parametrize(
    "value",
    [
        None,
        {},
        {"lat": "abc", "lng": None},
        {"lat": None, "lng": None},
        {"lat": "", "lng": ""},
        {"lat": True, "lng": 1.0},
        {"lat": float("nan"), "lng": 1.0},
        {"lat": 91.0, "lng": 0.0},
        {"lat": 0.0, "lng": -180.5},
        "35.1,-119.2",
    ],
)
def test_parse_point_rejects_malformed_values(value):
    assert parse_point(value) is None


def test_coerce_point_reports_fallback_use():
    resolved = coerce_point({"lat": "abc", "lng": None}, FALLBACK)
    assert resolved.used_fallback is True
    assert resolved.point == FALLBACK
    assert not math.isnan(resolved.point.lat)

    resolved = coerce_point({"lat": 35.4, "lng": -119.05}, FALLBACK)
    assert resolved.used_fallback is False
    assert resolved.point == GeoPoint(35.4, -119.05)


def test_fit_bounds_covers_all_points():
    points = [GeoPoint(35.3733, -119.0187), GeoPoint(35.4, -119.05), GeoPoint(35.385, -119.035)]
    bounds = fit_bounds(points, padding_px=30)

    assert bounds.south == pytest.approx(35.3733)
    assert bounds.north == pytest.approx(35.4)
    assert bounds.west == pytest.approx(-119.05)
    assert bounds.east == pytest.approx(-119.0187)
    assert bounds.padding_px == 30
    assert all(bounds.contains(point) for point in points)


def test_fit_bounds_requires_points():
    with pytest.raises(ValueError):
        fit_bounds([])


def test_haversine_between_matches_scalar_form():
    a, b = GeoPoint(35.385, -119.035), GeoPoint(35.4, -119.05)
    assert haversine_between(a, b) == haversine_km(35.385, -119.035, 35.4, -119.05)
