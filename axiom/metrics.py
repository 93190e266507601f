"""Prometheus metrics for the interception pipeline."""
from __future__ import annotations

from prometheus_client import Counter, Histogram

ACTIVATIONS = Counter(
    "axiom_activations_total",
    "Actions that activated an outbound call",
    labelnames=("kind",),
)

OUTCOMES = Counter(
    "axiom_outcomes_total",
    "Classified call outcomes",
    labelnames=("kind", "outcome"),
)

ACTIONS_DROPPED = Counter(
    "axiom_actions_dropped_total",
    "Actions dropped by throttling or for lack of a handler",
    labelnames=("kind", "reason"),
)

CALL_LATENCY = Histogram(
    "axiom_call_latency_ms",
    "Outbound call latency including interceptors (milliseconds)",
    labelnames=("kind",),
    buckets=(1, 2, 5, 10, 20, 50, 100, 200, 500, 1000, 2000, 5000),
)
