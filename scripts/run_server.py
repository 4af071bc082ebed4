#!/usr/bin/env python3
"""
Run the payments API with uvicorn.

Exits with status 1 when credentials or the payments config are missing, so a
misconfigured deployment never starts serving.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from trackmypark.api.main import create_app
from trackmypark.error_handler import ConfigurationError
from trackmypark.utils.config_loader import load_settings

logger = logging.getLogger("run_server")


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def main() -> int:
    parser = argparse.ArgumentParser(description="TrackMyParking payments API server")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: $PORT or 3002)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(args.verbose)

    try:
        settings = load_settings()
        app = create_app(settings)
    except (ConfigurationError, FileNotFoundError) as e:
        logger.error("Startup aborted: %s", e)
        logger.error("Create a .env file with RAZORPAY_KEY_ID, RAZORPAY_SECRET, STRIPE_SECRET_KEY and STRIPE_WEBHOOK_SECRET.")
        return 1

    port = args.port or settings.port
    logger.info("Server running on: http://localhost:%d", port)
    logger.info("API Endpoints:")
    for method, path in (
        ("GET ", "/api/health"),
        ("GET ", "/api/test-razorpay-connectivity"),
        ("POST", "/api/create-razorpay-order"),
        ("POST", "/api/verify-razorpay-payment"),
        ("GET ", "/products"),
        ("POST", "/create-checkout-session"),
        ("GET ", "/verify-session/{session_id}"),
        ("POST", "/webhook"),
    ):
        logger.info("   %s http://localhost:%d%s", method, port, path)

    # uvicorn handles SIGINT/SIGTERM and drains in-flight requests.
    uvicorn.run(app, host=args.host, port=port, log_level="debug" if args.verbose else "info")
    return 0


if __name__ == "__main__":
    sys.exit(main())
