"""
Shared pytest fixtures for all pow_spec tests.

Parameter sets push or pull the fork height so each regime can be exercised
with short chains.
"""

from __future__ import annotations

import pytest

from pow_spec.subspecs.chain import MAINNET_PARAMS, TESTNET_PARAMS, ConsensusParameters, Height
from tests.pow_spec.helpers import RecordingSink, make_params

FAR_FORK_HEIGHT = Height(10_000_000)
"""A fork height no test chain reaches."""

NEAR_FORK_HEIGHT = Height(100)
"""A fork height short test chains pass through."""


@pytest.fixture
def legacy_params() -> ConsensusParameters:
    """Mainnet rules with the fork out of reach."""
    return make_params(MAINNET_PARAMS, fork_height=FAR_FORK_HEIGHT)


@pytest.fixture
def min_difficulty_params() -> ConsensusParameters:
    """Testnet rules (min-difficulty blocks) with the fork out of reach."""
    return make_params(TESTNET_PARAMS, fork_height=FAR_FORK_HEIGHT)


@pytest.fixture
def fork_params() -> ConsensusParameters:
    """Mainnet rules with the fork at height 100."""
    return make_params(MAINNET_PARAMS, fork_height=NEAR_FORK_HEIGHT)


@pytest.fixture
def recording_sink() -> RecordingSink:
    """A sink collecting retarget events."""
    return RecordingSink()
