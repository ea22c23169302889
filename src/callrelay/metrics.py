"""
Prometheus metrics for callrelay.

Counters for broadcast fan-out and third-party call outcomes, exposed by
the application at ``/metrics``.
"""

from __future__ import annotations

from prometheus_client import Counter

events_published_total = Counter(
    "callrelay_events_published_total",
    "Total events published to dashboard viewers",
    ["type"],
)
event_deliveries_failed_total = Counter(
    "callrelay_event_deliveries_failed_total",
    "Total per-viewer event deliveries that failed",
)
external_calls_total = Counter(
    "callrelay_external_calls_total",
    "Total third-party call outcomes",
    ["service", "outcome"],
)
