"""Tests for network selection."""

from __future__ import annotations

import pytest

from pow_spec import config
from pow_spec.config import get_network_params
from pow_spec.subspecs.chain import MAINNET_PARAMS, REGTEST_PARAMS, TESTNET_PARAMS


def test_default_network_is_mainnet() -> None:
    """The test session runs with POW_NETWORK=main."""
    assert config.POW_NETWORK == "main"
    assert get_network_params() is MAINNET_PARAMS


@pytest.mark.parametrize(
    "name, expected",
    [("main", MAINNET_PARAMS), ("test", TESTNET_PARAMS), ("REGTEST", REGTEST_PARAMS)],
)
def test_named_networks(name: str, expected: object) -> None:
    """Names resolve case-insensitively to presets."""
    assert get_network_params(name) is expected


def test_unknown_network() -> None:
    """Unknown names are rejected with the supported list."""
    with pytest.raises(ValueError, match="Unknown network 'signet'"):
        get_network_params("signet")
