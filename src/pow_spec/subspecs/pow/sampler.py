"""Timestamp sampling for retarget intervals."""

from __future__ import annotations

from pow_spec.subspecs.chain import ChainBlockRef, Height
from pow_spec.types import Uint64


def get_first_block_time(tip: ChainBlockRef, interval: Uint64) -> Uint64:
    """
    Timestamp of the first block of the interval ending at `tip`.

    The interval spans `interval` blocks, so its first block sits
    `interval - 1` steps below the tip.

    Args:
        tip: Last block of the interval.
        interval: Number of blocks in the interval.

    Returns:
        The first block's timestamp.

    Raises:
        AssertionError: If the chain is shorter than the interval, or the
            chain index cannot produce the ancestor.
    """
    tip_height = Height(tip.height)
    lookback = Uint64(interval) - Uint64(1)

    # A retarget can only be due once a full interval exists below the tip.
    assert tip_height >= lookback, (
        f"Tip at height {tip_height} is too low for an interval of {interval} blocks"
    )
    first_height = Height(tip_height - lookback)

    first = tip.get_ancestor(first_height)
    assert first is not None, f"Chain index has no ancestor at height {first_height}"
    return Uint64(first.block_time)
