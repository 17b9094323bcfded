"""Proof-of-work validity check."""

from __future__ import annotations

from pow_spec.subspecs.chain import ConsensusParameters
from pow_spec.subspecs.compact import CompactTarget
from pow_spec.types import Bytes32, Uint256


def check_proof_of_work(
    block_hash: Bytes32 | Uint256,
    bits: CompactTarget,
    params: ConsensusParameters,
) -> bool:
    """
    Check that `block_hash` meets the target claimed in `bits`.

    This is a plain predicate. Malformed bits from the network yield False,
    never an exception.

    Args:
        block_hash: The block hash, either as a digest in internal (little-endian)
            byte order or as an already-decoded 256-bit magnitude.
        bits: Compact target claimed by the block header.
        params: Network consensus parameters.

    Returns:
        True if the target is in range and the hash does not exceed it.
    """
    target, negative, overflow = CompactTarget(bits).decode()

    # The claimed target must be a positive value no easier than the network limit.
    if negative or overflow or target == Uint256(0) or target > params.pow_limit:
        return False

    if isinstance(block_hash, Bytes32):
        hash_value = block_hash.to_uint256()
    else:
        hash_value = Uint256(block_hash)
    return hash_value <= target
