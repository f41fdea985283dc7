"""Export services."""

from .geojson import linestring_to_wkt, snapshot_to_geojson
from .links import google_maps_directions_url, google_maps_point_url

__all__ = [
    "snapshot_to_geojson",
    "linestring_to_wkt",
    "google_maps_point_url",
    "google_maps_directions_url",
]
