"""Compact (`nBits`) encoding of proof-of-work targets."""

from .codec import CompactTarget, DecodedTarget, get_block_proof

__all__ = [
    "CompactTarget",
    "DecodedTarget",
    "get_block_proof",
]
