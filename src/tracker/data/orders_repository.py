"""Read-only access to order records needed for tracking."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional, Sequence

from ..db.supabase import get_supabase_client
from ..models.domain import GeoPoint
from ..services.geospatial import parse_point

logger = logging.getLogger(__name__)

OrderKind = Literal["restaurant", "grocery"]

DEFAULT_COORDINATE_KEYS: tuple[tuple[str, str], ...] = (
    ("lat", "lng"),
    ("latitude", "longitude"),
    ("location_lat", "location_lng"),
    ("pickup_lat", "pickup_lng"),
    ("restaurant_lat", "restaurant_lng"),
    ("customer_lat", "customer_lng"),
    ("drop_lat", "drop_lng"),
)
DROP_KEYS: tuple[tuple[str, str], ...] = (
    ("customer_lat", "customer_lng"),
    ("drop_lat", "drop_lng"),
    ("delivery_lat", "delivery_lng"),
)
STORE_KEYS: tuple[tuple[str, str], ...] = (
    ("lat", "lng"),
    ("location_lat", "location_lng"),
    ("store_lat", "store_lng"),
)


@dataclass(frozen=True)
class OrderSource:
    orders_table: str
    venue_table: str
    venue_key: str
    order_pickup_keys: tuple[tuple[str, str], ...]
    venue_pickup_keys: tuple[tuple[str, str], ...]


ORDER_SOURCES: dict[str, OrderSource] = {
    "restaurant": OrderSource(
        orders_table="orders",
        venue_table="restaurants",
        venue_key="restaurant_id",
        order_pickup_keys=(("restaurant_lat", "restaurant_lng"), ("pickup_lat", "pickup_lng")),
        venue_pickup_keys=DEFAULT_COORDINATE_KEYS,
    ),
    "grocery": OrderSource(
        orders_table="grocery_orders",
        venue_table="grocery_stores",
        venue_key="store_id",
        order_pickup_keys=(("store_lat", "store_lng"), ("pickup_lat", "pickup_lng")),
        venue_pickup_keys=STORE_KEYS,
    ),
}


class OrderNotFoundError(LookupError):
    """Raised when an order id does not exist in the backend."""


class BackendUnavailableError(RuntimeError):
    """Raised when the hosted backend is not configured."""


@dataclass(frozen=True)
class OrderTrackingInputs:
    order_id: str
    kind: str
    status: Optional[str]
    pickup: Optional[GeoPoint]
    drop: Optional[GeoPoint]
    delivery_user_id: Optional[str] = None

    @property
    def has_any_point(self) -> bool:
        return self.pickup is not None or self.drop is not None


def pick_lat_lng(
    record: Mapping[str, Any] | None,
    candidates: Sequence[tuple[str, str]] = DEFAULT_COORDINATE_KEYS,
) -> Optional[GeoPoint]:
    """Return the first valid coordinate pair found under any of the candidate key pairs."""
    if not record:
        return None
    for lat_key, lng_key in candidates:
        point = parse_point((record.get(lat_key), record.get(lng_key)))
        if point is not None:
            return point
    return None


def _first_row(response: Any) -> Optional[dict]:
    rows = getattr(response, "data", None) or []
    return rows[0] if rows else None


def _require_client(client: Any) -> Any:
    client = client if client is not None else get_supabase_client()
    if client is None:
        raise BackendUnavailableError(
            "Supabase not configured. Set TRACKER_SUPABASE_URL and TRACKER_SUPABASE_KEY environment variables."
        )
    return client


def _load_venue_point(client: Any, source: OrderSource, venue_id: Any) -> Optional[GeoPoint]:
    if not venue_id:
        return None
    try:
        response = client.table(source.venue_table).select("*").eq("id", venue_id).limit(1).execute()
    except Exception as exc:
        logger.warning(f"Failed to load {source.venue_table} row {venue_id}: {exc}")
        return None
    return pick_lat_lng(_first_row(response), source.venue_pickup_keys)


def get_order_tracking_inputs(order_id: str, kind: OrderKind = "restaurant", client: Any = None) -> OrderTrackingInputs:
    """Fetch status and pickup/drop coordinates for one order."""

    source = ORDER_SOURCES.get(kind)
    if source is None:
        raise ValueError(f"Unknown order kind '{kind}'. Expected one of: {', '.join(ORDER_SOURCES)}")
    client = _require_client(client)

    response = client.table(source.orders_table).select("*").eq("id", order_id).limit(1).execute()
    order = _first_row(response)
    if order is None:
        raise OrderNotFoundError(f"Order {order_id} not found in {source.orders_table}")

    pickup = pick_lat_lng(order, source.order_pickup_keys)
    if pickup is None:
        pickup = _load_venue_point(client, source, order.get(source.venue_key))
    drop = pick_lat_lng(order, DROP_KEYS)

    delivery_user_id = order.get("delivery_user_id")
    return OrderTrackingInputs(
        order_id=str(order.get("id", order_id)),
        kind=kind,
        status=order.get("status"),
        pickup=pickup,
        drop=drop,
        delivery_user_id=str(delivery_user_id) if delivery_user_id else None,
    )
