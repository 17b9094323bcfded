"""Immutable pydantic models keyed by UPPERCASE names in YAML files."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


def to_upper_key(field_name: str) -> str:
    """Map `pow_target_spacing` to the file key `POW_TARGET_SPACING`."""
    return field_name.upper()


class StrictBaseModel(BaseModel):
    """
    A strict, frozen model that rejects unknown keys.

    Fields are read from (and dumped by alias to) UPPERCASE keys, the
    convention of parameter and header files. Python code may still pass
    the snake_case names.
    """

    model_config = ConfigDict(
        alias_generator=to_upper_key,
        populate_by_name=True,
        validate_default=True,
        arbitrary_types_allowed=True,
        extra="forbid",
        frozen=True,
        strict=True,
    )

    def copy(self: Self, **kwargs: Any) -> Self:
        """Derive a revalidated copy with some fields replaced."""
        return self.__class__(**(self.model_dump(exclude_unset=True) | kwargs))
