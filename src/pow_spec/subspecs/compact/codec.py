"""
Compact Target Codec
====================

The 32-bit "compact" representation of a 256-bit proof-of-work target.

A compact value is a tiny base-256 floating point number::

    0x1d00ffff
      ^^        exponent: length of the target in bytes
        ^^^^^^  mantissa: the three most significant bytes

    target = mantissa * 256 ** (exponent - 3)

Bit 23 of the mantissa is a sign flag. Targets are never negative, so the
encoder keeps the flag clear by bumping the exponent whenever the top mantissa
bit would be set.

The encoding is lossy. Only 24 bits of precision survive, and that truncation
is part of consensus: every node must round the same way.
"""

from __future__ import annotations

from typing import NamedTuple

from pow_spec.types import Uint32, Uint256

SIGN_BIT = 0x00800000
"""Bit 23 of the mantissa, interpreted as a sign flag."""

MANTISSA_MASK = 0x007FFFFF
"""The 23 magnitude bits of the mantissa."""


class DecodedTarget(NamedTuple):
    """Result of decoding a compact value."""

    target: Uint256
    """The 256-bit magnitude, reduced to 256 bits when the exponent is too large."""

    negative: bool
    """True if the sign bit is set on a non-zero mantissa."""

    overflow: bool
    """True if the magnitude does not fit in 256 bits."""


class CompactTarget(Uint32):
    """A proof-of-work target in the 32-bit compact encoding (`nBits`)."""

    @property
    def exponent(self) -> int:
        """Length of the encoded target in bytes."""
        return int(self) >> 24

    def decode(self) -> DecodedTarget:
        """
        Expand the compact value into a 256-bit target.

        Malformed values are reported through the `negative` and `overflow`
        flags. Nothing is raised, so adversarial input from the network can be
        evaluated along the same code path as honest input.

        A mantissa that is zero (after any right shift) is neither negative
        nor overflowing, whatever the exponent says.
        """
        size = self.exponent
        word = int(self) & MANTISSA_MASK

        if size <= 3:
            # Flags below look at the word after the shift.
            word >>= 8 * (3 - size)
            target = Uint256(word)
        else:
            # Bits pushed past the top of a 256-bit register are lost.
            target = Uint256(word).shift_left_truncating(8 * (size - 3))

        negative = word != 0 and (int(self) & SIGN_BIT) != 0
        overflow = word != 0 and (
            size > 34 or (word > 0xFF and size > 33) or (word > 0xFFFF and size > 32)
        )
        return DecodedTarget(target=target, negative=negative, overflow=overflow)

    @classmethod
    def from_target(cls, target: Uint256, negative: bool = False) -> CompactTarget:
        """
        Encode a 256-bit target into its compact form.

        Picks the smallest exponent whose three-byte mantissa holds the most
        significant bytes of `target`. Lower bytes are truncated.

        Args:
            target: Magnitude to encode.
            negative: Set the sign flag. Only honoured for a non-zero mantissa.

        Returns:
            The compact encoding.
        """
        value = int(target)
        size = (value.bit_length() + 7) // 8

        if size <= 3:
            compact = value << (8 * (3 - size))
        else:
            compact = value >> (8 * (size - 3))

        # The sign bit is reserved: move the mantissa down a byte instead.
        if compact & SIGN_BIT:
            compact >>= 8
            size += 1

        compact |= size << 24
        if negative and (compact & MANTISSA_MASK):
            compact |= SIGN_BIT
        return cls(compact)

    def __repr__(self) -> str:
        """Compact values read best in hex, e.g. `CompactTarget(0x1d00ffff)`."""
        return f"{type(self).__name__}(0x{int(self):08x})"


def get_block_proof(bits: CompactTarget) -> Uint256:
    """
    Expected number of hashes needed to meet the target in `bits`.

    Computed as `2**256 // (target + 1)`. Bits that fail to decode to a
    positive, in-range target carry no work.
    """
    target, negative, overflow = bits.decode()
    if negative or overflow or target == Uint256(0):
        return Uint256(0)
    return Uint256(2**256 // (int(target) + 1))
