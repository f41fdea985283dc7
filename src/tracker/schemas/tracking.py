"""Tracking request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field


class TrackingRequest(BaseModel):
    """Fields are untyped; the engine substitutes defaults for unusable values."""

    pickup: Any = Field(
        default=None, description="Pickup point as {lat, lng} or [lat, lng]; malformed values fall back to the default point."
    )
    drop: Any = Field(
        default=None, description="Drop point as {lat, lng} or [lat, lng]; malformed values fall back to the default point."
    )
    status: Any = Field(default=None, description="Coarse order status, e.g. 'on_the_way'.")
    live_fix: Any = Field(default=None, description="Live courier position as {lat, lng} or [lat, lng].")
    live_fix_observed_at: Any = Field(default=None, description="ISO timestamp of the live fix.")
    tick: Any = Field(default=0, description="Animation tick driving the simulated courier marker.")


class PointModel(BaseModel):
    lat: float
    lng: float


class SegmentModel(BaseModel):
    kind: Literal["base", "traveled", "remaining"]
    points: List[PointModel]
    opacity: float
    weight: int
    dash_array: Optional[str] = None


class BoundsModel(BaseModel):
    south: float
    west: float
    north: float
    east: float
    padding_px: int


class TrackingSnapshotResponse(BaseModel):
    order_id: Optional[str] = None
    courier_position: PointModel
    route: List[SegmentModel]
    remaining_distance_km: Optional[float]
    eta_label: Optional[str]
    is_live: bool
    mode: Literal["simulated", "live"]
    status: str
    progress: Optional[float]
    pickup: PointModel
    drop: PointModel
    pickup_used_fallback: bool
    drop_used_fallback: bool
    center: PointModel
    zoom: int
    bounds: BoundsModel
    distance_label: Optional[str]
    status_text: str
    live_label: str
    updated_label: Optional[str]
    observed_at: Optional[datetime] = None
    directions_url: str = ""
