"""Tests for retarget interval timestamp sampling."""

from __future__ import annotations

import pytest

from pow_spec.subspecs.chain import Height
from pow_spec.subspecs.compact import CompactTarget
from pow_spec.subspecs.pow import get_first_block_time
from pow_spec.types import Uint64
from tests.pow_spec.helpers import GENESIS_TIME, MockBlockRef, make_chain, make_plain_chain


def test_first_block_of_full_interval() -> None:
    """The first block of a 2016-block interval ending at 2015 is genesis."""
    tip = make_chain(2016).tip
    assert tip is not None
    assert get_first_block_time(tip, Uint64(2016)) == Uint64(GENESIS_TIME)


def test_first_block_of_later_interval() -> None:
    """Intervals higher up start `interval - 1` blocks below the tip."""
    tip = make_chain(30, spacing=10).tip
    assert tip is not None
    # Tip at 29, interval 8: the first block sits at height 22.
    assert get_first_block_time(tip, Uint64(8)) == Uint64(GENESIS_TIME + 220)


def test_interval_longer_than_chain_is_fatal() -> None:
    """A tip too low for the interval is a broken caller contract."""
    tip = make_chain(10).tip
    assert tip is not None
    with pytest.raises(AssertionError, match="too low for an interval of 2016 blocks"):
        get_first_block_time(tip, Uint64(2016))


def test_missing_ancestor_is_fatal() -> None:
    """A chain index that cannot produce the ancestor is a broken collaborator."""
    tip = MockBlockRef(
        height=Height(71),
        block_time=Uint64(GENESIS_TIME),
        bits=CompactTarget(0x1D00FFFF),
    )
    with pytest.raises(AssertionError, match="no ancestor at height 0"):
        get_first_block_time(tip, Uint64(72))


def test_plain_integer_chain_refs() -> None:
    """Stores that keep heights and times as plain ints are sampled the same way."""
    tip = make_plain_chain(30, bits=0x1D00FFFF, spacing=10, start_time=GENESIS_TIME)
    assert get_first_block_time(tip, Uint64(8)) == Uint64(GENESIS_TIME + 22 * 10)


def test_plain_integer_tip_too_low() -> None:
    """The short-chain check works on plain int heights."""
    tip = make_plain_chain(5, bits=0x1D00FFFF, spacing=600, start_time=GENESIS_TIME)
    with pytest.raises(AssertionError, match="too low for an interval of 2016 blocks"):
        get_first_block_time(tip, Uint64(2016))
