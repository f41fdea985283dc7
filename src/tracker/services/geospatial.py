"""Geospatial helper functions."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Iterable, Optional

from shapely.geometry import MultiPoint

from ..models.domain import Bounds, GeoPoint, ResolvedPoint

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula.

    Returns 0.0 instead of NaN/inf when any input is not a finite number.
    """

    try:
        phi1, phi2 = math.radians(lat1), math.radians(lat2)
        d_phi = math.radians(lat2 - lat1)
        d_lambda = math.radians(lon2 - lon1)

        a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
        c = 2 * math.asin(math.sqrt(min(1.0, a)))
        km = EARTH_RADIUS_KM * c
    except (TypeError, ValueError):
        return 0.0
    return km if math.isfinite(km) else 0.0


def haversine_between(a: GeoPoint, b: GeoPoint) -> float:
    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def clamp01(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return min(1.0, max(0.0, number))


def lerp_point(a: GeoPoint, b: GeoPoint, t: float) -> GeoPoint:
    return GeoPoint(a.lat + (b.lat - a.lat) * t, a.lng + (b.lng - a.lng) * t)


def midpoint(a: GeoPoint, b: GeoPoint) -> GeoPoint:
    return lerp_point(a, b, 0.5)


def _to_number(value: Any) -> Optional[float]:
    # bool is an int subclass; "" and None are not coordinates
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _extract_pair(value: Any) -> tuple[Any, Any]:
    if isinstance(value, GeoPoint):
        return value.lat, value.lng
    if isinstance(value, Mapping):
        return value.get("lat"), value.get("lng")
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return value[0], value[1]
    return getattr(value, "lat", None), getattr(value, "lng", None)


def is_valid_coordinate(lat: float, lng: float) -> bool:
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


def parse_point(value: Any) -> Optional[GeoPoint]:
    """Parse a GeoPoint-like value, returning None when it is missing or malformed.

    Accepts a GeoPoint, a mapping with ``lat``/``lng`` keys, an object exposing
    ``lat``/``lng`` attributes, or a ``(lat, lng)`` pair. Numeric strings are accepted.
    """

    if value is None:
        return None
    raw_lat, raw_lng = _extract_pair(value)
    lat = _to_number(raw_lat)
    lng = _to_number(raw_lng)
    if lat is None or lng is None or not is_valid_coordinate(lat, lng):
        return None
    return GeoPoint(lat, lng)


def coerce_point(value: Any, fallback: GeoPoint) -> ResolvedPoint:
    point = parse_point(value)
    if point is None:
        return ResolvedPoint(point=fallback, used_fallback=True)
    return ResolvedPoint(point=point, used_fallback=False)


def fit_bounds(points: Iterable[GeoPoint], padding_px: int = 0) -> Bounds:
    """Smallest lat/lng box covering every point."""

    coords = [point.as_lnglat() for point in points]
    if not coords:
        raise ValueError("At least one point is required to fit bounds.")
    min_lng, min_lat, max_lng, max_lat = MultiPoint(coords).bounds
    return Bounds(south=min_lat, west=min_lng, north=max_lat, east=max_lng, padding_px=padding_px)
