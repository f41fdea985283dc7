"""External map links for drivers and customers."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote, urlencode

from ..geospatial import parse_point

GOOGLE_MAPS_SEARCH = "https://www.google.com/maps/search/"
GOOGLE_MAPS_DIRECTIONS = "https://www.google.com/maps/dir/"


def google_maps_point_url(point: Any) -> str:
    parsed = parse_point(point)
    if parsed is None:
        return ""
    return f"{GOOGLE_MAPS_SEARCH}?api=1&query={parsed.lat},{parsed.lng}"


def google_maps_directions_url(origin: Any, destination: Any) -> str:
    start = parse_point(origin)
    end = parse_point(destination)
    if start is None or end is None:
        return ""
    query = urlencode(
        {
            "api": 1,
            "origin": f"{start.lat},{start.lng}",
            "destination": f"{end.lat},{end.lng}",
            "travelmode": "driving",
        },
        quote_via=quote,
    )
    return f"{GOOGLE_MAPS_DIRECTIONS}?{query}"
