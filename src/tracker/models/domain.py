"""Domain models for tracking snapshots and courier positions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float

    def as_pair(self) -> tuple[float, float]:
        return (self.lat, self.lng)

    def as_lnglat(self) -> tuple[float, float]:
        """Coordinate order used by GeoJSON and WKT."""
        return (self.lng, self.lat)


@dataclass(frozen=True, slots=True)
class ResolvedPoint:
    """Result of coercing raw input into a point, tagged with whether the fallback was used."""

    point: GeoPoint
    used_fallback: bool


@dataclass(frozen=True, slots=True)
class LiveCourierFix:
    position: GeoPoint
    observed_at: Optional[datetime] = None
    source: Optional[str] = None


class TrackingMode(str, Enum):
    SIMULATED = "simulated"
    LIVE = "live"


@dataclass(frozen=True, slots=True)
class SegmentStyle:
    opacity: float
    weight: int
    dash_array: Optional[str] = None


BASE_STYLE = SegmentStyle(opacity=0.25, weight=4)
TRAVELED_STYLE = SegmentStyle(opacity=0.95, weight=6)
REMAINING_STYLE = SegmentStyle(opacity=0.45, weight=6, dash_array="10 10")


@dataclass(frozen=True, slots=True)
class RouteSegment:
    """A polyline to draw on the map.

    ``kind`` is one of ``base`` (pickup to drop), ``traveled`` (pickup to courier)
    or ``remaining`` (courier to drop).
    """

    kind: str
    points: tuple[GeoPoint, ...]
    style: SegmentStyle


@dataclass(frozen=True, slots=True)
class Bounds:
    south: float
    west: float
    north: float
    east: float
    padding_px: int = 0

    @property
    def center(self) -> GeoPoint:
        return GeoPoint((self.south + self.north) / 2, (self.west + self.east) / 2)

    def contains(self, point: GeoPoint) -> bool:
        return self.south <= point.lat <= self.north and self.west <= point.lng <= self.east


@dataclass(frozen=True, slots=True)
class TrackingSnapshot:
    """Render-ready tracking state, recomputed from scratch on every input change or tick."""

    courier_position: GeoPoint
    route: tuple[RouteSegment, ...]
    remaining_distance_km: Optional[float]
    eta_label: Optional[str]
    is_live: bool
    mode: TrackingMode
    status: str
    progress: Optional[float]
    pickup: GeoPoint
    drop: GeoPoint
    pickup_used_fallback: bool
    drop_used_fallback: bool
    center: GeoPoint
    bounds: Bounds
    distance_label: Optional[str]
    status_text: str
    live_label: str
    updated_label: Optional[str]
    observed_at: Optional[datetime] = None
