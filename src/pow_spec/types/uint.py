"""Fixed-Width Unsigned Integer Types."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self


class BaseUint(int):
    """
    A base class for fixed-width unsigned integers that inherits from `int`.

    Arithmetic never wraps. Any result outside [0, 2**BITS - 1] raises
    `OverflowError`, and operands must share the same width.
    """

    BITS: ClassVar[int]
    """The number of bits in the integer (overridden by subclasses)."""

    def __new__(cls, value: Any) -> Self:
        """
        Create and validate a new Uint instance.

        Raises:
            TypeError: If `value` is not an integer (booleans are rejected).
            OverflowError: If `value` is outside the allowed range [0, 2**BITS - 1].
        """
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"Expected int, got {type(value).__name__}")
        int_value = int(value)
        if not (0 <= int_value < (2**cls.BITS)):
            raise OverflowError(f"{int_value} is out of range for {cls.__name__}")
        return super().__new__(cls, int_value)

    @classmethod
    def max_value(cls) -> Self:
        """Return the largest value representable by this type."""
        return cls(2**cls.BITS - 1)

    def as_int(self) -> int:
        """Return the value as a plain Python `int`."""
        return int(self)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Hook into Pydantic's validation system."""

        def validate(value: Any) -> BaseUint:
            """Pydantic validation function that calls the class constructor."""
            try:
                return cls(value)
            except (OverflowError, TypeError) as e:
                raise ValueError(str(e)) from e

        return core_schema.json_or_python_schema(
            json_schema=core_schema.int_schema(ge=0, lt=2**cls.BITS),
            python_schema=core_schema.no_info_plain_validator_function(validate),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda instance: int(instance)
            ),
        )

    def _check_operand(self, other: Any, op_symbol: str) -> None:
        """Reject operands that are not unsigned integers of the same width."""
        if not isinstance(other, BaseUint) or other.BITS != self.BITS:
            raise TypeError(
                f"Unsupported operand type(s) for {op_symbol}: "
                f"'{type(self).__name__}' and '{type(other).__name__}'"
            )

    def __add__(self, other: Any) -> Self:
        """Handle the addition operator (`+`)."""
        self._check_operand(other, "+")
        return type(self)(int(self) + int(other))

    def __sub__(self, other: Any) -> Self:
        """Handle the subtraction operator (`-`)."""
        self._check_operand(other, "-")
        return type(self)(int(self) - int(other))

    def __mul__(self, other: Any) -> Self:
        """Handle the multiplication operator (`*`)."""
        self._check_operand(other, "*")
        return type(self)(int(self) * int(other))

    def __floordiv__(self, other: Any) -> Self:
        """Handle the floor division operator (`//`)."""
        self._check_operand(other, "//")
        return type(self)(int(self) // int(other))

    def __mod__(self, other: Any) -> Self:
        """Handle the modulo operator (`%`)."""
        self._check_operand(other, "%")
        return type(self)(int(self) % int(other))

    def __radd__(self, other: Any) -> Self:
        """Reverse operators only apply between two uints, so mixing with `int` fails."""
        self._check_operand(other, "+")
        return type(self)(int(other) + int(self))

    def __rsub__(self, other: Any) -> Self:
        self._check_operand(other, "-")
        return type(self)(int(other) - int(self))

    def __rmul__(self, other: Any) -> Self:
        self._check_operand(other, "*")
        return type(self)(int(other) * int(self))

    def __rfloordiv__(self, other: Any) -> Self:
        self._check_operand(other, "//")
        return type(self)(int(other) // int(self))

    def __rmod__(self, other: Any) -> Self:
        self._check_operand(other, "%")
        return type(self)(int(other) % int(self))

    def __and__(self, other: Any) -> Self:
        """Handle the bitwise AND operator (`&`)."""
        self._check_operand(other, "&")
        return type(self)(int(self) & int(other))

    def __or__(self, other: Any) -> Self:
        """Handle the bitwise OR operator (`|`)."""
        self._check_operand(other, "|")
        return type(self)(int(self) | int(other))

    def __xor__(self, other: Any) -> Self:
        """Handle the bitwise XOR operator (`^`)."""
        self._check_operand(other, "^")
        return type(self)(int(self) ^ int(other))

    def __lshift__(self, other: Any) -> Self:
        """
        Handle the left bit-shift operator (`<<`).

        The shift amount is a plain `int`. Bits shifted past the width raise
        `OverflowError`; use `shift_left_truncating` for register semantics.
        """
        if not isinstance(other, int) or isinstance(other, bool):
            raise TypeError(f"Shift amount must be int, got {type(other).__name__}")
        return type(self)(int(self) << int(other))

    def __rshift__(self, other: Any) -> Self:
        """Handle the right bit-shift operator (`>>`)."""
        if not isinstance(other, int) or isinstance(other, bool):
            raise TypeError(f"Shift amount must be int, got {type(other).__name__}")
        return type(self)(int(self) >> int(other))

    def shift_left_truncating(self, bits: int) -> Self:
        """Shift left and drop every bit that falls outside the type's width."""
        return type(self)((int(self) << bits) & (2**self.BITS - 1))

    def __eq__(self, other: object) -> bool:
        """Handle the equality operator (`==`)."""
        self._check_operand(other, "==")
        return int(self) == int(other)  # type: ignore[call-overload]

    def __ne__(self, other: object) -> bool:
        """Handle the inequality operator (`!=`)."""
        self._check_operand(other, "!=")
        return int(self) != int(other)  # type: ignore[call-overload]

    def __lt__(self, other: Any) -> bool:
        """Handle the less-than operator (`<`)."""
        self._check_operand(other, "<")
        return int(self) < int(other)

    def __le__(self, other: Any) -> bool:
        """Handle the less-than-or-equal-to operator (`<=`)."""
        self._check_operand(other, "<=")
        return int(self) <= int(other)

    def __gt__(self, other: Any) -> bool:
        """Handle the greater-than operator (`>`)."""
        self._check_operand(other, ">")
        return int(self) > int(other)

    def __ge__(self, other: Any) -> bool:
        """Handle the greater-than-or-equal-to operator (`>=`)."""
        self._check_operand(other, ">=")
        return int(self) >= int(other)

    def __repr__(self) -> str:
        """Return the official string representation of the object."""
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        """Return the informal, user-friendly string representation."""
        return str(int(self))

    def __hash__(self) -> int:
        """Values of the same width hash alike, matching `__eq__`."""
        return hash((self.BITS, int(self)))


class Uint32(BaseUint):
    """A type representing a 32-bit unsigned integer (uint32)."""

    BITS = 32


class Uint64(BaseUint):
    """A type representing a 64-bit unsigned integer (uint64)."""

    BITS = 64


class Uint256(BaseUint):
    """A type representing a 256-bit unsigned integer (uint256)."""

    BITS = 256


class Uint512(BaseUint):
    """
    A type representing a 512-bit unsigned integer (uint512).

    Used for intermediate products of 256-bit targets and timespans.
    """

    BITS = 512
