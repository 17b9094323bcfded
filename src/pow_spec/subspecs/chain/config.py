"""
Consensus Parameters Specification

This file defines the proof-of-work consensus parameters and the network
presets. A parameter set is an explicit, immutable value handed to every
difficulty computation. Nothing reads it from global state.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import field_validator, model_validator
from typing_extensions import Final

from pow_spec.types import StrictBaseModel, Uint64, Uint256

from .height import Height

# --- Post-Fork Regime ---

FORK_ADJUSTMENT_INTERVAL: Final = Uint64(72)
"""Blocks between retargets once the fork height has been passed."""

LEGACY_CLAMP_LIMIT: Final = 4
"""Maximum factor a single retarget may move the target before the fork."""

FORK_CLAMP_LIMIT: Final = 2
"""Maximum factor a single retarget may move the target after the fork."""


class ConsensusParameters(StrictBaseModel):
    """
    The proof-of-work rules of one network.

    Fields are read from the UPPERCASE keys of YAML parameter files.
    Python code may use the snake_case names directly.
    """

    pow_limit: Uint256
    """
    The easiest target the network accepts.

    No retarget may produce a target above this value, and no block may claim one.
    """

    pow_target_spacing: Uint64
    """Desired number of seconds between blocks."""

    pow_target_timespan: Uint64
    """Desired number of seconds covered by one pre-fork retarget interval."""

    allow_min_difficulty_blocks: bool = False
    """
    Allow a block at `pow_limit` when production stalls.

    Test networks enable this so a lone miner can recover after hashrate leaves.
    """

    no_retargeting: bool = False
    """Freeze the target at every retarget boundary (regression networks)."""

    fork_height: Height
    """
    Height at which the post-fork rules begin.

    The block at this height is mined at `pow_limit` and the next one at
    `fork_begin_pow_limit`. From then on retargets happen every
    `FORK_ADJUSTMENT_INTERVAL` blocks with a tighter clamp.
    """

    fork_begin_pow_limit: Uint256
    """Target of the single block that opens the post-fork regime."""

    @field_validator("pow_limit", "fork_begin_pow_limit", mode="before")
    @classmethod
    def parse_hex_target(cls, v: Any) -> Any:
        """
        Accept 256-bit targets as hex strings.

        YAML parsers read unquoted 0x-prefixed values as integers, but quoted
        values arrive as strings.
        """
        if isinstance(v, str):
            return int(v.removeprefix("0x"), 16)
        return v

    @model_validator(mode="after")
    def validate_timing(self) -> ConsensusParameters:
        """Reject parameter sets that would make the retarget interval meaningless."""
        if self.pow_target_spacing == Uint64(0):
            raise ValueError("POW_TARGET_SPACING must be positive")
        if self.pow_target_timespan < self.pow_target_spacing:
            raise ValueError(
                f"POW_TARGET_TIMESPAN ({self.pow_target_timespan}) must cover at least "
                f"one block spacing ({self.pow_target_spacing})"
            )
        if self.pow_target_timespan % self.pow_target_spacing != Uint64(0):
            raise ValueError(
                f"POW_TARGET_SPACING ({self.pow_target_spacing}) must divide "
                f"POW_TARGET_TIMESPAN ({self.pow_target_timespan})"
            )
        if self.pow_limit == Uint256(0):
            raise ValueError("POW_LIMIT must be positive")
        return self

    @property
    def difficulty_adjustment_interval(self) -> Uint64:
        """Number of blocks between pre-fork retargets."""
        return self.pow_target_timespan // self.pow_target_spacing

    @classmethod
    def from_yaml_file(cls, path: Path | str) -> ConsensusParameters:
        """
        Load a parameter set from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            pydantic.ValidationError: If the data fails validation.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data)

    @classmethod
    def from_yaml(cls, content: str) -> ConsensusParameters:
        """Load a parameter set from a YAML string."""
        return cls.model_validate(yaml.safe_load(content))


# --- Network Presets ---

_TWO_WEEKS: Final = Uint64(14 * 24 * 60 * 60)
_TEN_MINUTES: Final = Uint64(10 * 60)

MAINNET_PARAMS: Final = ConsensusParameters(
    pow_limit=Uint256(0x00000000FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF),
    pow_target_spacing=_TEN_MINUTES,
    pow_target_timespan=_TWO_WEEKS,
    allow_min_difficulty_blocks=False,
    no_retargeting=False,
    fork_height=Height(495866),
    fork_begin_pow_limit=Uint256(
        0x0000000000FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF
    ),
)
"""Production network."""

TESTNET_PARAMS: Final = ConsensusParameters(
    pow_limit=Uint256(0x00000000FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF),
    pow_target_spacing=_TEN_MINUTES,
    pow_target_timespan=_TWO_WEEKS,
    allow_min_difficulty_blocks=True,
    no_retargeting=False,
    fork_height=Height(1210000),
    fork_begin_pow_limit=Uint256(
        0x0000000000FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF
    ),
)
"""Public test network, with the min-difficulty escape valve enabled."""

REGTEST_PARAMS: Final = ConsensusParameters(
    pow_limit=Uint256(0x7FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF),
    pow_target_spacing=_TEN_MINUTES,
    pow_target_timespan=_TWO_WEEKS,
    allow_min_difficulty_blocks=True,
    no_retargeting=True,
    fork_height=Height(3000),
    fork_begin_pow_limit=Uint256(
        0x7FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF
    ),
)
"""Local regression network. Targets never move."""

NETWORK_PRESETS: Final[dict[str, ConsensusParameters]] = {
    "main": MAINNET_PARAMS,
    "test": TESTNET_PARAMS,
    "regtest": REGTEST_PARAMS,
}
"""Presets addressable by network name."""
