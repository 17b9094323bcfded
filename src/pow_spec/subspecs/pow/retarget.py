"""
Difficulty Retargeting
======================

Computes the compact target the next block must meet.

The target only moves on retarget boundaries. Between boundaries every block
inherits its parent's target, except on networks that allow min-difficulty
blocks.

The chain passes through a one-time fork that changes the rules:

- The block at the fork height is mined at `pow_limit`.
- The block right after it is mined at `fork_begin_pow_limit`.
- From there, retargets happen every 72 blocks (counted from the fork height)
  and one retarget may move the target by at most 2x instead of 4x.
"""

from __future__ import annotations

import logging

from pow_spec.subspecs.chain import (
    FORK_ADJUSTMENT_INTERVAL,
    FORK_CLAMP_LIMIT,
    LEGACY_CLAMP_LIMIT,
    BlockHeader,
    ChainBlockRef,
    ConsensusParameters,
    Height,
)
from pow_spec.subspecs.compact import CompactTarget
from pow_spec.types import Uint64, Uint256, Uint512

from .events import NULL_RETARGET_SINK, RetargetEvent, RetargetSink
from .sampler import get_first_block_time

logger = logging.getLogger(__name__)


def get_next_work_required(
    tip: ChainBlockRef | None,
    candidate: BlockHeader,
    params: ConsensusParameters,
    sink: RetargetSink = NULL_RETARGET_SINK,
) -> CompactTarget:
    """
    Compact target required of the block built on top of `tip`.

    Args:
        tip: Current chain tip, or None when the candidate is genesis.
        candidate: Header of the block being built. Only its timestamp is read.
        params: Network consensus parameters.
        sink: Receiver of the retarget event, if a retarget happens.

    Returns:
        The required compact target.

    Raises:
        AssertionError: If a retarget is due but the chain index cannot supply
            the first block of the interval.
    """
    pow_limit_bits = CompactTarget.from_target(params.pow_limit)

    # Genesis, and the fork block itself, are mined at the easiest target.
    if tip is None:
        return pow_limit_bits
    next_height = Height(tip.height).next()
    if next_height == params.fork_height:
        return pow_limit_bits

    # The first post-fork block opens the new regime at a fixed target.
    if next_height == params.fork_height.next():
        return CompactTarget.from_target(params.fork_begin_pow_limit)

    # Post-fork intervals are counted from the fork height.
    if next_height > params.fork_height:
        height = next_height - params.fork_height
        interval = FORK_ADJUSTMENT_INTERVAL
    else:
        height = next_height
        interval = params.difficulty_adjustment_interval

    if not height.is_multiple_of(interval):
        if not params.allow_min_difficulty_blocks:
            return CompactTarget(tip.bits)

        # A block arriving after twice the target spacing may use the easiest target.
        tip_time = Uint64(tip.block_time)
        if Uint64(candidate.block_time) > tip_time + params.pow_target_spacing * Uint64(2):
            return pow_limit_bits

        # Otherwise inherit the last target that was not a min-difficulty one.
        return _last_regular_bits(tip, params, pow_limit_bits)

    first_block_time = get_first_block_time(tip, interval)
    return calculate_next_work_required(tip, first_block_time, params, sink)


def _last_regular_bits(
    tip: ChainBlockRef,
    params: ConsensusParameters,
    pow_limit_bits: CompactTarget,
) -> CompactTarget:
    """
    Walk back past min-difficulty blocks to the last regular target.

    The walk stops at genesis, at a retarget boundary, or at the first block
    whose bits differ from `pow_limit_bits`. Bits are compared as compact
    values, never as decoded targets.
    """
    interval = params.difficulty_adjustment_interval
    block = tip
    while True:
        previous = block.previous
        if previous is None:
            break
        if Height(block.height).is_multiple_of(interval):
            break
        if CompactTarget(block.bits) != pow_limit_bits:
            break
        block = previous

    logger.debug(
        "Min-difficulty walk-back from height %d stopped at height %d",
        int(tip.height),
        int(block.height),
    )
    return CompactTarget(block.bits)


def calculate_next_work_required(
    tip: ChainBlockRef,
    first_block_time: Uint64,
    params: ConsensusParameters,
    sink: RetargetSink = NULL_RETARGET_SINK,
) -> CompactTarget:
    """
    Retarget from the time the last interval took.

    The new target scales the tip's target by `actual / target` timespan, with
    the actual timespan clamped so one retarget moves the target by at most
    the regime's clamp limit in either direction.

    Args:
        tip: Last block of the interval.
        first_block_time: Timestamp of the first block of the interval.
        params: Network consensus parameters.
        sink: Receiver of the retarget event.

    Returns:
        The new compact target, never easier than `pow_limit`.
    """
    if params.no_retargeting:
        return CompactTarget(tip.bits)

    next_height = Height(tip.height).next()
    if next_height > params.fork_height:
        target_timespan = int(FORK_ADJUSTMENT_INTERVAL * params.pow_target_spacing)
        clamp_limit = FORK_CLAMP_LIMIT
    else:
        target_timespan = int(params.pow_target_timespan)
        clamp_limit = LEGACY_CLAMP_LIMIT

    # Timestamps are not monotonic, so the raw timespan may even be negative.
    real_actual_timespan = int(tip.block_time) - int(first_block_time)
    actual_timespan = real_actual_timespan
    if actual_timespan < target_timespan // clamp_limit:
        actual_timespan = target_timespan // clamp_limit
    if actual_timespan > target_timespan * clamp_limit:
        actual_timespan = target_timespan * clamp_limit

    old_bits = CompactTarget(tip.bits)
    old_target = old_bits.decode().target

    # The product needs more than 256 bits before the division narrows it.
    scaled = Uint512(old_target) * Uint512(actual_timespan) // Uint512(target_timespan)
    if scaled > Uint512(params.pow_limit):
        new_target = params.pow_limit
    else:
        new_target = Uint256(scaled)
    new_bits = CompactTarget.from_target(new_target)

    sink.record(
        RetargetEvent(
            height=next_height,
            target_timespan=Uint64(target_timespan),
            actual_timespan=Uint64(actual_timespan),
            real_actual_timespan=real_actual_timespan,
            old_bits=old_bits,
            old_target=old_target,
            new_bits=new_bits,
            new_target=new_target,
        )
    )
    return new_bits
