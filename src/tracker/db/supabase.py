"""Supabase client for Python backend."""

import logging
from functools import lru_cache
from supabase import create_client, Client
from ..config import settings


@lru_cache()
def get_supabase_client() -> Client | None:
    """Get cached Supabase client instance.

    Returns:
        Supabase Client instance if configured, None otherwise.
        Note: This does not test the connection - actual queries may fail with network errors.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logging.warning("Supabase credentials not configured (missing URL or key)")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client: {e}")
        return None


# Tables read by the tracking service:
#
# orders / grocery_orders      -> status, pickup and drop coordinates
# restaurants / grocery_stores -> pickup coordinates when the order lacks them
# delivery_latest_location     -> view with the newest courier fix per order
# delivery_events              -> raw courier events (event_type "gps", lat, lng, created_at)
