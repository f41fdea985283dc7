"""Delivery status interpretation used by the tracking engine."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from ..geospatial import clamp01


class DeliveryStatus(str, Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    PICKED_UP = "picked_up"
    ON_THE_WAY = "on_the_way"
    DELIVERING = "delivering"
    DELIVERED = "delivered"


ACTIVE_DELIVERY_STATUSES = frozenset(
    {DeliveryStatus.PICKED_UP.value, DeliveryStatus.ON_THE_WAY.value, DeliveryStatus.DELIVERING.value}
)

# Checked in order; the first matching substring wins.
PROGRESS_BY_STATUS: tuple[tuple[tuple[str, ...], float], ...] = (
    (("pending",), 0.02),
    (("preparing",), 0.15),
    (("ready",), 0.35),
    (("picked",), 0.55),
    (("on_the_way", "on the way", "delivering"), 0.75),
    (("delivered",), 1.0),
)
DEFAULT_PROGRESS = 0.10


def normalize_status(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        value = value.value
    return str(value).strip().lower()


def is_active_delivery(status: Any) -> bool:
    """True while a courier is carrying the order (picked up, on the way, delivering)."""
    return normalize_status(status) in ACTIVE_DELIVERY_STATUSES


def base_progress(status: Any) -> float:
    normalized = normalize_status(status)
    for needles, progress in PROGRESS_BY_STATUS:
        if any(needle in normalized for needle in needles):
            return progress
    return DEFAULT_PROGRESS


def wobble(tick: int) -> float:
    """Oscillation in [0, 1] driven by the animation tick."""
    return (math.sin(tick / 2) + 1) / 2


def simulated_progress(status: Any, tick: int, amplitude: float) -> float:
    return clamp01(base_progress(status) + wobble(tick) * amplitude)
