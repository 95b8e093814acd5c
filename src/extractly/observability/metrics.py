"""
Defines the Prometheus metrics exported by the service.
"""

from __future__ import annotations

from typing import Any, Dict

from prometheus_client import REGISTRY as _PROM_REGISTRY
from prometheus_client import Counter as _OrigCounter
from prometheus_client import Histogram as _OrigHistogram

# ---------------------------------------------------------------------------
# Duplicate-safe Prometheus metric wrappers
# ---------------------------------------------------------------------------
# A module reload (test suites, uvicorn --reload) must reuse the collectors
# already registered instead of raising on duplicate names.


def _duplicate_safe_factory(metric_cls):
    """Return a factory that reuses an existing collector if already present."""

    def _factory(name: str, documentation: str, *args, **kwargs):  # type: ignore[override]
        existing = _PROM_REGISTRY._names_to_collectors.get(name)
        if existing is not None:
            return existing  # type: ignore[return-value]

        try:
            return metric_cls(name, documentation, *args, **kwargs)  # type: ignore[call-arg]
        except ValueError:
            return _PROM_REGISTRY._names_to_collectors[name]  # type: ignore[return-value]

    return _factory


Counter = _duplicate_safe_factory(_OrigCounter)  # type: ignore[assignment]
Histogram = _duplicate_safe_factory(_OrigHistogram)  # type: ignore[assignment]


METRICS: Dict[str, Any] = {
    "extract_requests": Counter(
        "extractly_extract_requests_total",
        "Extraction requests by ruleset and outcome",
        ["ruleset", "outcome"],
    ),
    "fetch_duration": Histogram(
        "extractly_fetch_duration_seconds",
        "Time spent fetching target pages",
        buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
    ),
    "fetch_errors": Counter(
        "extractly_fetch_errors_total",
        "Failed fetches by error kind",
        ["kind"],
    ),
    "auth_failures": Counter(
        "extractly_auth_failures_total",
        "Rejected bearer tokens",
    ),
}
