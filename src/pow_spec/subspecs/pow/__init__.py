"""Difficulty retargeting and proof-of-work validation."""

from .events import (
    NULL_RETARGET_SINK,
    FanoutRetargetSink,
    LoggingRetargetSink,
    MetricsRetargetSink,
    NullRetargetSink,
    RetargetEvent,
    RetargetSink,
)
from .retarget import calculate_next_work_required, get_next_work_required
from .sampler import get_first_block_time
from .validation import check_proof_of_work

__all__ = [
    "FanoutRetargetSink",
    "LoggingRetargetSink",
    "MetricsRetargetSink",
    "NULL_RETARGET_SINK",
    "NullRetargetSink",
    "RetargetEvent",
    "RetargetSink",
    "calculate_next_work_required",
    "check_proof_of_work",
    "get_first_block_time",
    "get_next_work_required",
]
