#!/usr/bin/env python3
"""Start the tracking API with uvicorn, honouring the PORT environment variable."""

import os
import subprocess
import sys
from pathlib import Path

DEFAULT_PORT = 8000


def resolve_port() -> int:
    raw = os.environ.get("PORT", str(DEFAULT_PORT))
    try:
        return int(raw)
    except ValueError:
        print(f"Warning: Invalid PORT value '{raw}', using default {DEFAULT_PORT}", file=sys.stderr)
        return DEFAULT_PORT


def main() -> int:
    src_path = Path(__file__).resolve().parent / "src"
    if not src_path.is_dir():
        print(f"Warning: src directory not found at {src_path}", file=sys.stderr)
        src_path = Path.cwd()

    existing = os.environ.get("PYTHONPATH", "")
    os.environ["PYTHONPATH"] = f"{src_path}{os.pathsep}{existing}" if existing else str(src_path)
    sys.path.insert(0, str(src_path))

    # Fail fast on configuration/import errors before handing over to uvicorn
    try:
        import tracker.main  # noqa: F401
    except Exception as e:
        print(f"❌ Failed to import tracker.main ({type(e).__name__}): {e}", file=sys.stderr)
        import traceback
        traceback.print_exc(file=sys.stderr)
        return 1

    port = resolve_port()
    cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "tracker.main:app",
        "--host",
        "0.0.0.0",
        "--port",
        str(port),
        "--proxy-headers",
        "--forwarded-allow-ips", "*",
    ]
    print(f"🚀 Starting uvicorn on port {port}...", file=sys.stderr)
    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        print("⚠️ Server interrupted by user", file=sys.stderr)
        return 0


if __name__ == "__main__":
    sys.exit(main())
