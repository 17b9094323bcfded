"""
Metric registry using prometheus_client.

Provides pre-defined metrics for difficulty retargeting.
Exposes metrics in Prometheus text format.
"""

from __future__ import annotations

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

# Dedicated registry, kept free of default Python process metrics.
REGISTRY = CollectorRegistry()

retargets_total = Counter(
    "pow_retargets_total",
    "Difficulty retargets computed",
    registry=REGISTRY,
)

retarget_height = Gauge(
    "pow_retarget_height",
    "Height of the most recent retarget",
    registry=REGISTRY,
)

retarget_timespan_seconds = Histogram(
    "pow_retarget_timespan_seconds",
    "Observed (unclamped) duration of a retarget interval",
    buckets=(3600, 21600, 43200, 86400, 302400, 604800, 1209600, 2419200, 4838400),
    registry=REGISTRY,
)

retargets_clamped_total = Counter(
    "pow_retargets_clamped_total",
    "Retargets whose observed timespan fell outside the clamp window",
    registry=REGISTRY,
)


def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics output.

    Returns:
        Prometheus text format output as bytes.
    """
    return generate_latest(REGISTRY)
