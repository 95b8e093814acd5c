"""HTTP API."""

from __future__ import annotations

from .main import app_factory, create_app, run_web_server

__all__ = ["app_factory", "create_app", "run_web_server"]
