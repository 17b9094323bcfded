"""
32-byte digests, such as block hashes.

Hashes live in two byte orders. Internally a digest is stored as produced by
the hash function and read as a little-endian integer. Explorers and RPC
output print the same digest reversed ("display order"), so the leading zeros
of a valid block hash appear first.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic.annotated_handlers import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self

from .uint import Uint256


class Bytes32(bytes):
    """Exactly 32 bytes in internal byte order."""

    LENGTH = 32

    def __new__(cls, value: Any = b"") -> Self:
        """
        Build a digest from bytes, a hex string (optionally 0x-prefixed) or
        an iterable of byte values.

        Raises:
            ValueError: If the input is not exactly 32 bytes.
        """
        if isinstance(value, str):
            raw = bytes.fromhex(value.removeprefix("0x"))
        else:
            raw = bytes(value)
        if len(raw) != cls.LENGTH:
            raise ValueError(f"{cls.__name__} expects exactly {cls.LENGTH} bytes, got {len(raw)}")
        return super().__new__(cls, raw)

    @classmethod
    def from_display_hex(cls, value: str) -> Self:
        """Parse a hash printed in display (reversed) byte order."""
        return cls(bytes.fromhex(value.removeprefix("0x"))[::-1])

    def display_hex(self) -> str:
        """The hash as explorers print it."""
        return self[::-1].hex()

    def to_uint256(self, byteorder: Literal["little", "big"] = "little") -> Uint256:
        """
        Interpret the bytes as a 256-bit unsigned magnitude.

        The default little-endian read is the one proof-of-work compares
        against the target.
        """
        return Uint256(int.from_bytes(self, byteorder))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Accept instances as-is, coerce anything else, and serialize to hex."""
        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(cls),
                core_schema.no_info_plain_validator_function(cls),
            ],
            serialization=core_schema.plain_serializer_function_ser_schema(lambda x: x.hex()),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.hex()})"

    def __hash__(self) -> int:
        return hash((type(self), bytes(self)))
