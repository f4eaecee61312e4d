#!/usr/bin/env python3

"""Data members and operation parameters."""

from __future__ import annotations

from .entity import Entity
from .flags import WRITABLE_FLAGS, Flag
from .qualifiers import TypeView


class Attribute(Entity):
    """A typed data member of a struct or class."""

    valid_flags = frozenset({Flag.READ_WRITE})

    def __init__(self, name: str, data_type: TypeView, *flags: Flag | str):
        super().__init__(name, *flags)
        self.type = data_type

    @property
    def is_writable(self) -> bool:
        return any(flag in WRITABLE_FLAGS for flag in self.flags)

    def generate_signatures(self) -> tuple[str, str]:
        return (
            f"{self.type.signature} {self.name}",  # type: ignore[attr-defined]
            f"{self.type.csignature} {self.name}",  # type: ignore[attr-defined]
        )


class Parameter(Attribute):
    """An operation parameter with an optional default value.

    Example:
        >>> int_type = DataType("int")
        >>> Parameter("para", int_type, "123").signature
        'int para = 123'
    """

    valid_flags = frozenset({Flag.IN_OUT, Flag.OUT})

    def __init__(
        self,
        name: str,
        data_type: TypeView,
        default_value: str | None = None,
        *flags: Flag | str,
    ):
        super().__init__(name, data_type, *flags)
        self.default_value = str(default_value).strip() if default_value is not None else None
        if self.default_value == "":
            self.default_value = None

    @property
    def has_default_value(self) -> bool:
        return self.default_value is not None

    def generate_signatures(self) -> tuple[str, str]:
        signature, csignature = super().generate_signatures()
        if self.default_value is not None:
            signature = f"{signature} = {self.default_value}"
        return signature, csignature
