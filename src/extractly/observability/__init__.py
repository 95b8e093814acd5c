"""Logging and metrics."""

from __future__ import annotations

from .logging import configure_logging
from .metrics import METRICS

__all__ = ["configure_logging", "METRICS", "export_prometheus"]


def export_prometheus() -> bytes:
    """Export metrics in Prometheus format."""
    from prometheus_client import generate_latest

    return generate_latest()
