"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TRACKER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Delivery Tracking API"
    api_prefix: str = "/api"
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Map defaults
    fallback_latitude: float = Field(
        default=35.3733,
        description="Latitude used whenever a pickup/drop coordinate is missing or malformed.",
    )
    fallback_longitude: float = Field(
        default=-119.0187,
        description="Longitude used whenever a pickup/drop coordinate is missing or malformed.",
    )
    bounds_padding_px: int = Field(default=30, ge=0)
    default_zoom: int = Field(default=13, ge=0, le=22)

    # ETA and simulation
    average_speed_kmh: float = Field(default=25.0, gt=0.0, description="Assumed courier speed for ETA.")
    min_speed_kmh: float = Field(default=5.0, gt=0.0, description="Lower bound applied to the ETA speed.")
    wobble_amplitude: float = Field(
        default=0.06,
        ge=0.0,
        le=1.0,
        description="Progress perturbation applied to the simulated courier marker.",
    )
    tick_interval_seconds: float = Field(default=1.2, gt=0.0)
    live_fix_event_types: tuple[str, ...] = Field(
        default=("gps", "gps_test"),
        description="Delivery event types that carry courier GPS coordinates.",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase key used for read-only order and GPS lookups.",
    )

    @field_validator("frontend_allowed_origins", "live_fix_event_types", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            # Try comma-separated
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            # Single value
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
