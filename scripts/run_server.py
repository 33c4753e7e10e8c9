#!/usr/bin/env python3
# =============================================================================
# scripts/run_server.py - API Server Entry Point
# =============================================================================
# Starts the Conduit API under uvicorn.
#
# Usage:
#   # Start server (settings from environment / .env)
#   python scripts/run_server.py
#
#   # Wipe the database and load sample data first
#   python scripts/run_server.py --seed
#
#   # Development mode with auto-reload
#   python scripts/run_server.py --reload --port 8080
# =============================================================================

import argparse
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import uvicorn

from app.config import get_settings


def parse_args(argv=None):
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the Conduit API server")
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Empty all tables and insert sample data at startup",
    )
    parser.add_argument("--host", default=settings.API_HOST, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.API_PORT, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    return parser.parse_args(argv)


def main(argv=None):
    """Start the API server."""
    args = parse_args(argv)

    if args.seed:
        # Read by Settings when app.main builds the application
        os.environ["SEED_DATABASE"] = "true"
        get_settings.cache_clear()

    print("=" * 60)
    print("Conduit API")
    print("=" * 60)
    print()
    print(f"Listening on http://{args.host}:{args.port}")
    print(f"Seeding sample data: {'yes' if args.seed else 'no'}")
    print("Press Ctrl+C to stop")
    print()

    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
