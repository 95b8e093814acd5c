#!/usr/bin/env python3
"""
Production entry point for Extractly.

Loads configuration from ``config.yaml`` (if present) and the ``EXTRACTLY_``
environment, configures logging and serves the API with uvicorn, which
handles SIGINT/SIGTERM and runs the application shutdown hooks.
"""

from __future__ import annotations

import sys

import structlog

from extractly.config import load_config
from extractly.observability import configure_logging
from extractly.web import run_web_server

logger = structlog.get_logger(__name__)


def main() -> int:
    try:
        config = load_config()
    except Exception as e:
        print(f"Failed to load configuration: {e}", file=sys.stderr)
        return 1

    configure_logging(config.monitoring)
    logger.info("Starting Extractly", version=config.version, environment=config.environment)
    run_web_server(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
