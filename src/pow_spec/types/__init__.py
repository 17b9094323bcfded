"""Reusable type definitions for the proof-of-work rules."""

from .base import StrictBaseModel
from .byte_arrays import Bytes32
from .uint import BaseUint, Uint32, Uint64, Uint256, Uint512

__all__ = [
    # Integer types
    "BaseUint",
    "Uint32",
    "Uint64",
    "Uint256",
    "Uint512",
    # Byte arrays
    "Bytes32",
    # Models
    "StrictBaseModel",
]
