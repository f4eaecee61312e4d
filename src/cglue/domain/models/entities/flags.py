#!/usr/bin/env python3

"""Entity flags and their validation."""

from collections.abc import Iterable
from enum import Enum

from ..errors import InvalidFlagError


class Flag(str, Enum):
    """Markers attached to entities.

    The values are the spellings used by the declaration text format.
    """

    STATIC = "S"
    EXPLICIT = "explicit"
    READ_WRITE = "RW"
    IN_OUT = "IO"
    OUT = "O"
    EXTERN = "Extern"
    SIMPLE = "Simple"
    MAP = "Map"

    @classmethod
    def parse(cls, value: "Flag | str") -> "Flag":
        """Convert a flag spelling into a Flag.

        Raises:
            InvalidFlagError: If the spelling is unknown
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip())
        except ValueError:
            raise InvalidFlagError(f"unknown flag {value!r}") from None


# Flags that make an attribute or parameter writable through the binding
WRITABLE_FLAGS = frozenset({Flag.READ_WRITE, Flag.IN_OUT, Flag.OUT})


def validate_flags(
    flags: Iterable["Flag | str"], valid: frozenset[Flag], owner: str
) -> tuple[Flag, ...]:
    """Parse flags and check them against the set valid for an entity kind.

    Args:
        flags: Flags or flag spellings
        valid: Flags the entity kind accepts
        owner: Entity description used in error messages

    Returns:
        Parsed flags in the given order, without duplicates

    Raises:
        InvalidFlagError: If a flag is unknown or not valid for the entity
    """
    result: list[Flag] = []
    for value in flags:
        flag = Flag.parse(value)
        if flag not in valid:
            allowed = ", ".join(sorted(f.value for f in valid)) or "none"
            raise InvalidFlagError(
                f"flag {flag.value} is not valid for {owner} (allowed: {allowed})"
            )
        if flag not in result:
            result.append(flag)
    return tuple(result)
