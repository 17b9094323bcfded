"""Consensus parameters, block heights and the chain index interface."""

from .config import (
    FORK_ADJUSTMENT_INTERVAL,
    FORK_CLAMP_LIMIT,
    LEGACY_CLAMP_LIMIT,
    MAINNET_PARAMS,
    NETWORK_PRESETS,
    REGTEST_PARAMS,
    TESTNET_PARAMS,
    ConsensusParameters,
)
from .height import Height
from .index import BlockHeader, ChainBlockRef, ChainEntry, HeaderChain

__all__ = [
    "BlockHeader",
    "ChainBlockRef",
    "ChainEntry",
    "ConsensusParameters",
    "FORK_ADJUSTMENT_INTERVAL",
    "FORK_CLAMP_LIMIT",
    "HeaderChain",
    "Height",
    "LEGACY_CLAMP_LIMIT",
    "MAINNET_PARAMS",
    "NETWORK_PRESETS",
    "REGTEST_PARAMS",
    "TESTNET_PARAMS",
]
