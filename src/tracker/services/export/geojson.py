"""GeoJSON/WKT export of tracking snapshots."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ...models.domain import GeoPoint, RouteSegment, TrackingSnapshot


def linestring_to_wkt(points: Sequence[GeoPoint]) -> str:
    """Convert a polyline to WKT format.

    Args:
        points: Ordered points of the line

    Returns:
        WKT LINESTRING string (in lon lat order as per WKT spec)
    """
    if not points or len(points) < 2:
        raise ValueError("LineString must have at least 2 coordinates")

    coord_pairs = [f"{point.lng} {point.lat}" for point in points]
    return f"LINESTRING({','.join(coord_pairs)})"


def _segment_feature(segment: RouteSegment) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {
            "type": "LineString",
            "coordinates": [list(point.as_lnglat()) for point in segment.points],
        },
        "properties": {
            "kind": segment.kind,
            "opacity": segment.style.opacity,
            "weight": segment.style.weight,
            "dashArray": segment.style.dash_array,
        },
    }


def _point_feature(role: str, point: GeoPoint, **extra: Any) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": list(point.as_lnglat())},
        "properties": {"role": role, **extra},
    }


def snapshot_to_geojson(snapshot: TrackingSnapshot) -> Dict[str, Any]:
    """Convert a tracking snapshot to a GeoJSON FeatureCollection.

    Route segments come first (drawn underneath), followed by the pickup, drop
    and courier markers.
    """
    features: List[Dict[str, Any]] = [_segment_feature(segment) for segment in snapshot.route]
    features.append(_point_feature("pickup", snapshot.pickup, used_fallback=snapshot.pickup_used_fallback))
    features.append(_point_feature("drop", snapshot.drop, used_fallback=snapshot.drop_used_fallback))
    features.append(
        _point_feature(
            "courier",
            snapshot.courier_position,
            live=snapshot.is_live,
            mode=snapshot.mode.value,
        )
    )

    bounds = snapshot.bounds
    return {
        "type": "FeatureCollection",
        "bbox": [bounds.west, bounds.south, bounds.east, bounds.north],
        "features": features,
        "properties": {
            "status": snapshot.status,
            "remaining_distance_km": snapshot.remaining_distance_km,
            "eta_label": snapshot.eta_label,
            "padding_px": bounds.padding_px,
        },
    }
