"""Latest courier GPS fix lookup."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import LiveCourierFix
from ..services.geospatial import parse_point

logger = logging.getLogger(__name__)

LATEST_LOCATION_VIEW = "delivery_latest_location"
EVENTS_TABLE = "delivery_events"


def parse_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _row_to_fix(row: dict | None, source: str) -> Optional[LiveCourierFix]:
    if not row:
        return None
    point = parse_point((row.get("lat"), row.get("lng")))
    if point is None:
        return None
    return LiveCourierFix(position=point, observed_at=parse_timestamp(row.get("created_at")), source=source)


def _from_view(client: Any, order_id: str) -> Optional[LiveCourierFix]:
    try:
        response = (
            client.table(LATEST_LOCATION_VIEW)
            .select("order_id, lat, lng, created_at")
            .eq("order_id", order_id)
            .limit(1)
            .execute()
        )
    except Exception as exc:
        logger.debug(f"{LATEST_LOCATION_VIEW} lookup failed for order {order_id}: {exc}")
        return None
    rows = getattr(response, "data", None) or []
    return _row_to_fix(rows[0] if rows else None, "view")


def _from_events(client: Any, order_id: str) -> Optional[LiveCourierFix]:
    try:
        response = (
            client.table(EVENTS_TABLE)
            .select("lat, lng, created_at, event_type")
            .eq("order_id", order_id)
            .in_("event_type", list(settings.live_fix_event_types))
            .not_.is_("lat", "null")
            .not_.is_("lng", "null")
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
    except Exception as exc:
        logger.warning(f"{EVENTS_TABLE} lookup failed for order {order_id}: {exc}")
        return None
    rows = getattr(response, "data", None) or []
    return _row_to_fix(rows[0] if rows else None, "events")


def fetch_latest_fix(order_id: str, client: Any = None) -> Optional[LiveCourierFix]:
    """Newest courier position for an order, or None when nothing usable is stored."""

    client = client if client is not None else get_supabase_client()
    if client is None or not order_id:
        return None
    return _from_view(client, order_id) or _from_events(client, order_id)
