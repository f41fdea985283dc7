"""ETA estimation and human-readable labels."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Optional

DEFAULT_SPEED_KMH = 25.0
MIN_SPEED_KMH = 5.0
ETA_PLACEHOLDER = "—"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def estimate_minutes(
    km: Optional[float],
    speed_kmh: Optional[float] = DEFAULT_SPEED_KMH,
    min_speed_kmh: float = MIN_SPEED_KMH,
) -> Optional[int]:
    """Whole minutes needed to cover ``km`` at ``speed_kmh`` (never slower than ``min_speed_kmh``)."""

    if km is None:
        return None
    try:
        distance = float(km)
        speed = float(speed_kmh or DEFAULT_SPEED_KMH)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(speed):
        speed = DEFAULT_SPEED_KMH
    speed = max(min_speed_kmh, speed)
    minutes = distance / speed * 60
    if not math.isfinite(minutes):
        return None
    return _round_half_up(minutes)


def format_eta(
    km: Optional[float],
    speed_kmh: Optional[float] = DEFAULT_SPEED_KMH,
    min_speed_kmh: float = MIN_SPEED_KMH,
) -> Optional[str]:
    minutes = estimate_minutes(km, speed_kmh, min_speed_kmh)
    if minutes is None or minutes <= 0:
        return None
    if minutes < 60:
        return f"{minutes} min"
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest}m"


def format_distance(km: Optional[float]) -> str:
    if km is None or not math.isfinite(km):
        return ETA_PLACEHOLDER
    if km < 1:
        return f"{_round_half_up(km * 1000)} m"
    if km < 10:
        return f"{km:.1f} km"
    return f"{_round_half_up(km)} km"


def format_time_short(ts: Any) -> str:
    """Render a timestamp as e.g. ``3:07 PM``; empty string when it cannot be parsed."""

    if not ts:
        return ""
    if isinstance(ts, datetime):
        moment = ts
    else:
        try:
            moment = datetime.fromisoformat(str(ts).replace("Z", "+00:00"))
        except ValueError:
            return ""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"
