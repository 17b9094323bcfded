"""Block height container."""

from __future__ import annotations

from pow_spec.types import Uint64


class Height(Uint64):
    """Distance of a block from genesis, as a 64-bit unsigned integer."""

    def next(self) -> Height:
        """Height of the block that would extend this one."""
        return self + Height(1)

    def is_multiple_of(self, interval: Uint64) -> bool:
        """
        Check whether this height falls on an `interval` boundary.

        Raises:
            AssertionError: If `interval` is zero.
        """
        assert interval != Uint64(0), "Interval must be positive"
        return int(self) % int(interval) == 0
