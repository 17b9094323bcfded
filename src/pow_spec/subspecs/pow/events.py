"""
Retarget events and the sinks that observe them.

A retarget computation reports what it did through a `RetargetSink`. Sinks are
observers only: nothing they do can change the computed target, and the
default sink discards every event.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from pow_spec.subspecs.chain import Height
from pow_spec.subspecs.compact import CompactTarget
from pow_spec.subspecs.metrics import (
    retarget_height,
    retarget_timespan_seconds,
    retargets_clamped_total,
    retargets_total,
)
from pow_spec.types import StrictBaseModel, Uint64, Uint256

logger = logging.getLogger(__name__)


class RetargetEvent(StrictBaseModel):
    """Everything a retarget computed, for diagnostics."""

    height: Height
    """Height of the block the new target applies to."""

    target_timespan: Uint64
    """Seconds the interval was supposed to take."""

    actual_timespan: Uint64
    """Seconds the interval took, after clamping."""

    real_actual_timespan: int
    """Seconds the interval took according to the timestamps. May be negative."""

    old_bits: CompactTarget
    old_target: Uint256
    new_bits: CompactTarget
    new_target: Uint256

    @property
    def clamped(self) -> bool:
        """Whether the observed timespan was pulled into the clamp window."""
        return int(self.actual_timespan) != self.real_actual_timespan


class RetargetSink(Protocol):
    """Receiver of retarget events."""

    def record(self, event: RetargetEvent) -> None:
        """Observe one retarget."""
        ...


class NullRetargetSink:
    """Discards every event."""

    def record(self, event: RetargetEvent) -> None:
        return None


NULL_RETARGET_SINK = NullRetargetSink()
"""Shared no-op sink, the default for every retarget computation."""


class LoggingRetargetSink:
    """Writes each event to a logger at INFO level."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log if log is not None else logger

    def record(self, event: RetargetEvent) -> None:
        self._log.info("RETARGET at height %d", int(event.height))
        self._log.info(
            "target_timespan = %d    actual_timespan = %d    real_actual_timespan = %d",
            int(event.target_timespan),
            int(event.actual_timespan),
            event.real_actual_timespan,
        )
        self._log.info("Before: %08x  %064x", int(event.old_bits), int(event.old_target))
        self._log.info("After:  %08x  %064x", int(event.new_bits), int(event.new_target))


class MetricsRetargetSink:
    """Feeds events into the Prometheus retarget metrics."""

    def record(self, event: RetargetEvent) -> None:
        retargets_total.inc()
        retarget_height.set(int(event.height))
        retarget_timespan_seconds.observe(event.real_actual_timespan)
        if event.clamped:
            retargets_clamped_total.inc()


class FanoutRetargetSink:
    """Delivers each event to several sinks, in order."""

    def __init__(self, sinks: Iterable[RetargetSink]) -> None:
        self._sinks = tuple(sinks)

    def record(self, event: RetargetEvent) -> None:
        for sink in self._sinks:
            sink.record(event)
