"""Tracking engine exports."""

from .engine import TrackingParameters, build_route, compute_tracking_snapshot
from .eta import format_distance, format_eta, format_time_short
from .session import SimulationClock, TrackingSession
from .status import DeliveryStatus, base_progress, is_active_delivery, simulated_progress

__all__ = [
    "TrackingParameters",
    "compute_tracking_snapshot",
    "build_route",
    "format_eta",
    "format_distance",
    "format_time_short",
    "SimulationClock",
    "TrackingSession",
    "DeliveryStatus",
    "base_progress",
    "is_active_delivery",
    "simulated_progress",
]
