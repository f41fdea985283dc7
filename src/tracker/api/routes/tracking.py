"""Tracking endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from ...data.orders_repository import BackendUnavailableError, OrderKind, OrderNotFoundError
from ...schemas.tracking import TrackingRequest, TrackingSnapshotResponse
from ...services.tracking.service import compute_snapshot, track_order, track_order_geojson

router = APIRouter(prefix="/tracking", tags=["tracking"])


@router.post("/snapshot", response_model=TrackingSnapshotResponse, status_code=status.HTTP_200_OK)
def snapshot(payload: TrackingRequest) -> TrackingSnapshotResponse:
    """Compute a tracking snapshot from caller-supplied coordinates and status."""
    try:
        return compute_snapshot(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error computing tracking snapshot: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to compute tracking snapshot: {str(exc)}",
        ) from exc


@router.get("/orders/{order_id}", response_model=TrackingSnapshotResponse, status_code=status.HTTP_200_OK)
def order_snapshot(
    order_id: str,
    kind: OrderKind = Query(default="restaurant", description="Order source: restaurant or grocery"),
    tick: int = Query(default=0, description="Animation tick for the simulated courier marker"),
) -> TrackingSnapshotResponse:
    """Snapshot for a stored order, using the courier's latest GPS fix while it is out for delivery."""
    try:
        return track_order(order_id, kind=kind, tick=tick)
    except OrderNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except BackendUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error tracking order {order_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to track order: {str(exc)}",
        ) from exc


@router.get("/orders/{order_id}/geojson", status_code=status.HTTP_200_OK)
def order_geojson(
    order_id: str,
    kind: OrderKind = Query(default="restaurant"),
    tick: int = Query(default=0),
) -> dict:
    """GeoJSON FeatureCollection of the order's route and markers."""
    try:
        return track_order_geojson(order_id, kind=kind, tick=tick)
    except OrderNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except BackendUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error exporting order {order_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to export order route: {str(exc)}",
        ) from exc
