# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_LATENCY = Histogram(
    "webclipper_request_latency_seconds",
    "Request latency",
    labelnames=("endpoint",),
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10),
)
AUTH_EVENTS = Counter(
    "webclipper_auth_events_total",
    "Authentication events by outcome",
    labelnames=("event", "outcome"),
)


def record_auth_event(event: str, *, ok: bool, enabled: bool = True) -> None:
    if not enabled:
        return
    AUTH_EVENTS.labels(event=event, outcome="success" if ok else "failure").inc()


__all__ = ["AUTH_EVENTS", "REQUEST_LATENCY", "record_auth_event"]
