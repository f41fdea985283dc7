import pytest

from tracker.models.domain import GeoPoint
from tracker.services.export import (
    google_maps_directions_url,
    google_maps_point_url,
    linestring_to_wkt,
    snapshot_to_geojson,
)
from tracker.services.tracking.engine import TrackingParameters, compute_tracking_snapshot


def test_snapshot_to_geojson_active_delivery():
    snapshot = compute_tracking_snapshot(
        {"lat": 35.3733, "lng": -119.0187},
        {"lat": 35.4, "lng": -119.05},
        "on_the_way",
        {"lat": 35.385, "lng": -119.035},
        params=TrackingParameters(),
    )
    collection = snapshot_to_geojson(snapshot)

    lines = [feature for feature in collection["features"] if feature["geometry"]["type"] == "LineString"]
    assert [line["properties"]["kind"] for line in lines] == ["base", "traveled", "remaining"]
    assert lines[0]["geometry"]["coordinates"] == [[-119.0187, 35.3733], [-119.05, 35.4]]
    assert lines[2]["properties"]["dashArray"] == "10 10"

    courier = collection["features"][-1]
    assert courier["properties"] == {"role": "courier", "live": True, "mode": "live"}
    assert courier["geometry"]["coordinates"] == [-119.035, 35.385]
    assert collection["bbox"] == [-119.05, 35.3733, -119.0187, 35.4]


def test_linestring_to_wkt():
    wkt = linestring_to_wkt([GeoPoint(35.0, -119.0), GeoPoint(35.5, -119.5)])
    assert wkt == "LINESTRING(-119.0 35.0,-119.5 35.5)"
    with pytest.raises(ValueError):
        linestring_to_wkt([GeoPoint(35.0, -119.0)])


def test_google_maps_links():
    assert google_maps_point_url({"lat": 35.1, "lng": -119.2}) == "https://www.google.com/maps/search/?api=1&query=35.1,-119.2"
    assert google_maps_directions_url(GeoPoint(35.1, -119.2), GeoPoint(35.4, -119.05)) == (
        "https://www.google.com/maps/dir/?api=1&origin=35.1%2C-119.2&destination=35.4%2C-119.05&travelmode=driving"
    )
    assert google_maps_point_url({"lat": "abc", "lng": 1}) == ""
    assert google_maps_directions_url(None, GeoPoint(1.0, 1.0)) == ""
