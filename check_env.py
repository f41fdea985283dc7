#!/usr/bin/env python3
"""Helper script to check and create the .env file for the tracking service."""

from pathlib import Path
import os
import sys

ENV_TEMPLATE = """# Supabase Configuration (read-only order and GPS lookups)
# Get these from: https://supabase.com/dashboard → Your Project → Settings → API
TRACKER_SUPABASE_URL=https://your-project-id.supabase.co
TRACKER_SUPABASE_KEY=your-key-here

# API Configuration
TRACKER_API_PREFIX=/api
# TRACKER_FRONTEND_ALLOWED_ORIGINS - JSON array or comma-separated list

# Map fallback point (used when pickup/drop coordinates are missing)
TRACKER_FALLBACK_LATITUDE=35.3733
TRACKER_FALLBACK_LONGITUDE=-119.0187

# ETA and simulation
TRACKER_AVERAGE_SPEED_KMH=25
TRACKER_MIN_SPEED_KMH=5
TRACKER_WOBBLE_AMPLITUDE=0.06
TRACKER_TICK_INTERVAL_SECONDS=1.2
"""

SECRET_KEYS = ("TRACKER_SUPABASE_KEY",)


def _mask(line: str) -> str:
    name, sep, value = line.partition("=")
    if sep and name.strip() in SECRET_KEYS and len(value.strip()) > 20:
        value = value.strip()
        return f"{name}={value[:20]}...{value[-10:]}"
    return line


def main() -> None:
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Tracking Service Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        env_file.write_text(ENV_TEMPLATE, encoding="utf-8")
        print(f"✅ Created template .env file at: {env_file}")
        print("⚠️  Please edit .env and add your Supabase credentials!")
        return

    print(f"✅ Found .env file at: {env_file}")
    print("-" * 60)
    for line in env_file.read_text(encoding="utf-8").splitlines():
        print(_mask(line))
    print("-" * 60)
    print()

    for name in ("TRACKER_SUPABASE_URL", "TRACKER_SUPABASE_KEY"):
        value = os.getenv(name)
        if value:
            print(f"✅ {name} (from environment): {value[:20]}...")
        else:
            print(f"❌ {name} not found in environment")
    print()

    try:
        sys.path.insert(0, str(project_root / "src"))
        from tracker.config import settings
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    print(f"Fallback point: ({settings.fallback_latitude}, {settings.fallback_longitude})")
    print(f"ETA speed: {settings.average_speed_kmh} km/h (floor {settings.min_speed_kmh} km/h)")
    print()
    if settings.supabase_url and settings.supabase_key:
        print("✅ SUCCESS: Supabase is configured; order tracking endpoints are available.")
    else:
        print("❌ Supabase is NOT configured; only POST /api/tracking/snapshot will work.")
        print("Make sure variables start with the TRACKER_ prefix and restart the backend.")


if __name__ == "__main__":
    main()
