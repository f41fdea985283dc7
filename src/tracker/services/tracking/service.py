"""Tracking orchestration service."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ...config import settings
from ...data.live_fix_repository import fetch_latest_fix, parse_timestamp
from ...data.orders_repository import OrderKind, get_order_tracking_inputs
from ...models.domain import GeoPoint, TrackingSnapshot
from ...schemas.tracking import (
    BoundsModel,
    PointModel,
    SegmentModel,
    TrackingRequest,
    TrackingSnapshotResponse,
)
from ..export.geojson import snapshot_to_geojson
from ..export.links import google_maps_directions_url
from .engine import TrackingParameters, compute_tracking_snapshot
from .status import is_active_delivery

logger = logging.getLogger(__name__)


def _point_model(point: GeoPoint) -> PointModel:
    return PointModel(lat=point.lat, lng=point.lng)


def snapshot_to_response(snapshot: TrackingSnapshot, order_id: Optional[str] = None) -> TrackingSnapshotResponse:
    bounds = snapshot.bounds
    return TrackingSnapshotResponse(
        order_id=order_id,
        courier_position=_point_model(snapshot.courier_position),
        route=[
            SegmentModel(
                kind=segment.kind,
                points=[_point_model(point) for point in segment.points],
                opacity=segment.style.opacity,
                weight=segment.style.weight,
                dash_array=segment.style.dash_array,
            )
            for segment in snapshot.route
        ],
        remaining_distance_km=snapshot.remaining_distance_km,
        eta_label=snapshot.eta_label,
        is_live=snapshot.is_live,
        mode=snapshot.mode.value,
        status=snapshot.status,
        progress=snapshot.progress,
        pickup=_point_model(snapshot.pickup),
        drop=_point_model(snapshot.drop),
        pickup_used_fallback=snapshot.pickup_used_fallback,
        drop_used_fallback=snapshot.drop_used_fallback,
        center=_point_model(snapshot.center),
        zoom=settings.default_zoom,
        bounds=BoundsModel(
            south=bounds.south,
            west=bounds.west,
            north=bounds.north,
            east=bounds.east,
            padding_px=bounds.padding_px,
        ),
        distance_label=snapshot.distance_label,
        status_text=snapshot.status_text,
        live_label=snapshot.live_label,
        updated_label=snapshot.updated_label,
        observed_at=snapshot.observed_at,
        directions_url=google_maps_directions_url(snapshot.courier_position, snapshot.drop),
    )


def compute_snapshot(payload: TrackingRequest, params: TrackingParameters | None = None) -> TrackingSnapshotResponse:
    snapshot = compute_tracking_snapshot(
        payload.pickup,
        payload.drop,
        payload.status,
        payload.live_fix,
        payload.tick,
        observed_at=parse_timestamp(payload.live_fix_observed_at),
        params=params,
    )
    return snapshot_to_response(snapshot)


def _order_snapshot(order_id: str, kind: OrderKind, tick: int, client: Any = None) -> TrackingSnapshot:
    inputs = get_order_tracking_inputs(order_id, kind, client=client)
    if not inputs.has_any_point:
        logger.info(f"Order {order_id} has no saved pickup/drop coordinates; using fallback point")

    live_fix = None
    if is_active_delivery(inputs.status) and inputs.delivery_user_id:
        live_fix = fetch_latest_fix(inputs.order_id, client=client)

    return compute_tracking_snapshot(inputs.pickup, inputs.drop, inputs.status, live_fix, tick)


def track_order(order_id: str, kind: OrderKind = "restaurant", tick: int = 0, client: Any = None) -> TrackingSnapshotResponse:
    """Build a snapshot for a stored order, using the latest courier GPS fix when one exists."""
    snapshot = _order_snapshot(order_id, kind, tick, client=client)
    return snapshot_to_response(snapshot, order_id=order_id)


def track_order_geojson(order_id: str, kind: OrderKind = "restaurant", tick: int = 0, client: Any = None) -> dict:
    snapshot = _order_snapshot(order_id, kind, tick, client=client)
    collection = snapshot_to_geojson(snapshot)
    collection["properties"]["order_id"] = order_id
    return collection
