"""Tracking & ETA engine.

Turns a pickup point, a drop point, a coarse delivery status and an optional live
courier fix into a render-ready :class:`TrackingSnapshot`. The computation is pure:
mode selection depends only on the current inputs, so a live feed that drops out
falls straight back to the simulated marker instead of freezing on the last fix.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ...config import Settings, settings
from ...models.domain import (
    BASE_STYLE,
    REMAINING_STYLE,
    TRAVELED_STYLE,
    GeoPoint,
    LiveCourierFix,
    RouteSegment,
    TrackingMode,
    TrackingSnapshot,
)
from ..geospatial import coerce_point, fit_bounds, haversine_between, lerp_point, midpoint, parse_point
from .eta import format_distance, format_eta, format_time_short
from .status import is_active_delivery, normalize_status, simulated_progress

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK = GeoPoint(35.3733, -119.0187)


@dataclass(frozen=True, slots=True)
class TrackingParameters:
    """Tunable constants for simulation and ETA."""

    average_speed_kmh: float = 25.0
    min_speed_kmh: float = 5.0
    wobble_amplitude: float = 0.06
    fallback: GeoPoint = DEFAULT_FALLBACK
    bounds_padding_px: int = 30

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "TrackingParameters":
        config = config or settings
        return cls(
            average_speed_kmh=config.average_speed_kmh,
            min_speed_kmh=config.min_speed_kmh,
            wobble_amplitude=config.wobble_amplitude,
            fallback=GeoPoint(config.fallback_latitude, config.fallback_longitude),
            bounds_padding_px=config.bounds_padding_px,
        )


def _resolve_fallback(candidate: GeoPoint) -> GeoPoint:
    point = parse_point(candidate)
    if point is None:
        logger.warning("Configured fallback point %s is invalid; using %s", candidate, DEFAULT_FALLBACK)
        return DEFAULT_FALLBACK
    return point


def _coerce_tick(tick: Any) -> int:
    if isinstance(tick, bool):
        return 0
    try:
        value = float(tick)
    except (TypeError, ValueError):
        return 0
    return int(value) if math.isfinite(value) else 0


def _split_live_fix(
    live_fix: Any, observed_at: Optional[datetime]
) -> tuple[Optional[GeoPoint], Optional[datetime]]:
    if isinstance(live_fix, LiveCourierFix):
        return parse_point(live_fix.position), observed_at or live_fix.observed_at
    return parse_point(live_fix), observed_at


def build_route(pickup: GeoPoint, drop: GeoPoint, courier: GeoPoint, active: bool) -> tuple[RouteSegment, ...]:
    segments = [RouteSegment(kind="base", points=(pickup, drop), style=BASE_STYLE)]
    if active:
        segments.append(RouteSegment(kind="traveled", points=(pickup, courier), style=TRAVELED_STYLE))
        segments.append(RouteSegment(kind="remaining", points=(courier, drop), style=REMAINING_STYLE))
    return tuple(segments)


def _labels(active: bool, is_live: bool, observed_at: Optional[datetime]) -> tuple[str, str, Optional[str]]:
    updated = format_time_short(observed_at)
    if is_live:
        status_text = "LIVE GPS"
    elif active:
        status_text = "GPS (demo)"
    else:
        status_text = "Tracking"

    if not active:
        live_label = "Live GPS available during delivery"
    elif is_live:
        live_label = f"Live GPS connected (updated: {updated or '—'})"
    else:
        live_label = "Waiting for driver GPS…"

    updated_label = f"Updated: {updated or '—'}" if is_live else None
    return status_text, live_label, updated_label


def compute_tracking_snapshot(
    pickup: Any,
    drop: Any,
    status: Any = None,
    live_fix: Any = None,
    tick: Any = 0,
    *,
    observed_at: Optional[datetime] = None,
    params: TrackingParameters | None = None,
) -> TrackingSnapshot:
    """Compute a fresh snapshot from the current inputs. Never raises for malformed input."""

    params = params or TrackingParameters.from_settings()
    fallback = _resolve_fallback(params.fallback)

    resolved_pickup = coerce_point(pickup, fallback)
    resolved_drop = coerce_point(drop, fallback)
    if resolved_pickup.used_fallback or resolved_drop.used_fallback:
        logger.debug(
            "Substituted fallback point (pickup=%s, drop=%s)",
            resolved_pickup.used_fallback,
            resolved_drop.used_fallback,
        )
    pickup_point = resolved_pickup.point
    drop_point = resolved_drop.point

    normalized = normalize_status(status)
    active = is_active_delivery(normalized)
    live_point, fix_time = _split_live_fix(live_fix, observed_at)

    if active and live_point is not None:
        mode = TrackingMode.LIVE
        courier = live_point
        progress = None
    else:
        mode = TrackingMode.SIMULATED
        progress = simulated_progress(normalized, _coerce_tick(tick), params.wobble_amplitude)
        courier = lerp_point(pickup_point, drop_point, progress)
        fix_time = None
    is_live = mode is TrackingMode.LIVE

    remaining_km: Optional[float] = None
    eta_label: Optional[str] = None
    distance_label: Optional[str] = None
    if active:
        remaining_km = haversine_between(courier, drop_point)
        eta_label = format_eta(remaining_km, params.average_speed_kmh, params.min_speed_kmh)
        distance_label = format_distance(remaining_km)

    status_text, live_label, updated_label = _labels(active, is_live, fix_time)

    return TrackingSnapshot(
        courier_position=courier,
        route=build_route(pickup_point, drop_point, courier, active),
        remaining_distance_km=remaining_km,
        eta_label=eta_label,
        is_live=is_live,
        mode=mode,
        status=normalized,
        progress=progress,
        pickup=pickup_point,
        drop=drop_point,
        pickup_used_fallback=resolved_pickup.used_fallback,
        drop_used_fallback=resolved_drop.used_fallback,
        center=midpoint(pickup_point, drop_point),
        bounds=fit_bounds((pickup_point, drop_point, courier), params.bounds_padding_px),
        distance_label=distance_label,
        status_text=status_text,
        live_label=live_label,
        updated_label=updated_label,
        observed_at=fix_time,
    )
