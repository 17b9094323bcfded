"""
Chain index interface and an in-memory reference implementation.

Difficulty computation needs to look backwards along the chain: to the block
one interval ago, and block by block during the min-difficulty walk-back. It
does so only through the `ChainBlockRef` protocol, so any chain store with
matching attributes can serve it.

`HeaderChain` is the simplest such store: a list of headers indexed by height,
giving constant-time ancestor lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Protocol

import yaml
from pydantic import Field, field_validator

from pow_spec.subspecs.compact import CompactTarget
from pow_spec.types import StrictBaseModel, Uint64

from .height import Height


class ChainBlockRef(Protocol):
    """
    Read-only view of a block in the chain index.

    Uses structural subtyping: any object exposing these members satisfies
    the protocol. Stores that keep heights, times and bits as plain `int`
    are accepted; the difficulty rules coerce them to fixed-width values.
    """

    @property
    def height(self) -> Height:
        """Height of this block."""
        ...

    @property
    def block_time(self) -> Uint64:
        """Header timestamp in Unix seconds."""
        ...

    @property
    def bits(self) -> CompactTarget:
        """Compact target the block was mined against."""
        ...

    @property
    def previous(self) -> ChainBlockRef | None:
        """The parent block, or None for genesis."""
        ...

    def get_ancestor(self, height: Height) -> ChainBlockRef | None:
        """
        Retrieve the ancestor at `height` on this block's chain.

        Returns:
            The ancestor (or this block itself), None if `height` is above this block.
        """
        ...


class BlockHeader(StrictBaseModel):
    """The header fields that proof-of-work rules read."""

    block_time: Uint64 = Field(alias="TIME")
    """Header timestamp in Unix seconds."""

    bits: CompactTarget
    """Compact target the header claims."""

    @field_validator("bits", mode="before")
    @classmethod
    def parse_hex_bits(cls, v: Any) -> Any:
        """Accept compact targets written as hex strings such as "1d00ffff"."""
        if isinstance(v, str):
            return int(v.removeprefix("0x"), 16)
        return v


@dataclass(frozen=True, slots=True)
class ChainEntry:
    """A block of a `HeaderChain`, satisfying `ChainBlockRef`."""

    chain: HeaderChain
    """The chain this entry belongs to."""

    height: Height
    """Height of this block."""

    @property
    def header(self) -> BlockHeader:
        """The stored header."""
        return self.chain.header_at(self.height)

    @property
    def block_time(self) -> Uint64:
        """Header timestamp in Unix seconds."""
        return self.header.block_time

    @property
    def bits(self) -> CompactTarget:
        """Compact target the block was mined against."""
        return self.header.bits

    @property
    def previous(self) -> ChainEntry | None:
        """The parent block, or None for genesis."""
        if self.height == Height(0):
            return None
        return ChainEntry(self.chain, self.height - Height(1))

    def get_ancestor(self, height: Height) -> ChainEntry | None:
        """Retrieve the ancestor at `height`, or None if it lies above this block."""
        if height > self.height:
            return None
        return ChainEntry(self.chain, Height(height))


class HeaderChain:
    """
    An append-only chain of headers, indexed by height.

    The header at list position `n` is the block at height `n`.
    """

    def __init__(self, headers: Iterable[BlockHeader] = ()) -> None:
        self._headers: list[BlockHeader] = list(headers)

    def __len__(self) -> int:
        return len(self._headers)

    @property
    def tip(self) -> ChainEntry | None:
        """The highest block, or None for an empty chain."""
        if not self._headers:
            return None
        return ChainEntry(self, Height(len(self._headers) - 1))

    def append(self, header: BlockHeader) -> ChainEntry:
        """Add a header on top of the chain and return its entry."""
        self._headers.append(header)
        return ChainEntry(self, Height(len(self._headers) - 1))

    def header_at(self, height: Height) -> BlockHeader:
        """
        Retrieve the stored header at `height`.

        Raises:
            IndexError: If the chain has no block at `height`.
        """
        if int(height) >= len(self._headers):
            raise IndexError(f"No header at height {height} (chain length {len(self)})")
        return self._headers[int(height)]

    def entry_at(self, height: Height) -> ChainEntry | None:
        """Retrieve the entry at `height`, or None if the chain is shorter."""
        if int(height) >= len(self._headers):
            return None
        return ChainEntry(self, Height(height))

    @classmethod
    def from_yaml_file(cls, path: Path | str) -> HeaderChain:
        """
        Load a chain from a YAML file.

        The expected format lists headers from genesis upwards::

            HEADERS:
            - TIME: 1231006505
              BITS: 0x1d00ffff
            - TIME: 1231469665
              BITS: 0x1d00ffff

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            pydantic.ValidationError: If a header fails validation.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            return cls.from_yaml(f.read())

    @classmethod
    def from_yaml(cls, content: str) -> HeaderChain:
        """Load a chain from a YAML string."""
        data = yaml.safe_load(content) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Header file must be a mapping, got {type(data).__name__}")
        return cls(BlockHeader.model_validate(item) for item in data.get("HEADERS") or [])
