"""
Metrics module for observability.

Exposes retarget counters, gauges, and histograms in Prometheus text format.
"""

from .registry import (
    REGISTRY,
    generate_metrics,
    retarget_height,
    retarget_timespan_seconds,
    retargets_clamped_total,
    retargets_total,
)

__all__ = [
    "REGISTRY",
    "generate_metrics",
    "retarget_height",
    "retarget_timespan_seconds",
    "retargets_clamped_total",
    "retargets_total",
]
