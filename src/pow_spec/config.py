"""
Global configuration for the proof-of-work tools.

Selects the network whose parameters the command-line tools use by default.
The consensus functions never read this: they take parameters explicitly.
"""

import os

from pow_spec.subspecs.chain import NETWORK_PRESETS, ConsensusParameters

_SUPPORTED_POW_NETWORKS: list[str] = sorted(NETWORK_PRESETS)

POW_NETWORK = os.environ.get("POW_NETWORK", "main").lower()
"""The network flag ('main', 'test' or 'regtest'). Defaults to 'main'."""

if POW_NETWORK not in _SUPPORTED_POW_NETWORKS:
    raise ValueError(
        f"Invalid POW_NETWORK environment variable: '{POW_NETWORK}'. "
        f"Supported values: {_SUPPORTED_POW_NETWORKS}"
    )


def get_network_params(name: str | None = None) -> ConsensusParameters:
    """
    Resolve a network preset by name, falling back to `POW_NETWORK`.

    Raises:
        ValueError: If the name is not a known network.
    """
    network = (name or POW_NETWORK).lower()
    if network not in NETWORK_PRESETS:
        raise ValueError(f"Unknown network '{network}'. Supported values: {_SUPPORTED_POW_NETWORKS}")
    return NETWORK_PRESETS[network]
