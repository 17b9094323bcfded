"""Test helpers for building chains and parameter sets."""

from .builders import (
    GENESIS_TIME,
    RecordingSink,
    make_chain,
    make_header,
    make_params,
)
from .mocks import MockBlockRef, PlainBlockRef, make_plain_chain

__all__ = [
    "GENESIS_TIME",
    "MockBlockRef",
    "PlainBlockRef",
    "RecordingSink",
    "make_chain",
    "make_header",
    "make_params",
    "make_plain_chain",
]
