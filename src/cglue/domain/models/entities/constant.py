#!/usr/bin/env python3

"""Named constants and enumerations."""

from __future__ import annotations

import re

from .data_type import DataType
from .flags import Flag
from .naming import map_to_namespace, to_cname

_IDENTIFIER_RE = re.compile(r"\b[A-Za-z_][A-Za-z0-9_]*(?:(?:::|\.)[A-Za-z_][A-Za-z0-9_]*)*\b")


class Const(DataType):
    """A named integral constant such as ``const CV_8U 0``.

    Identifiers inside the value are taken to be other constants of the same
    scope and are mangled the same way in the export signature.
    """

    is_basic_type = False

    def __init__(self, name: str, value: str | int, *flags: Flag | str):
        super().__init__(name, *flags)
        self.value = str(value).strip()

    def export_value(self) -> str:
        prefix = self.context.cprefix

        def mangle(match: re.Match[str]) -> str:
            identifier = match.group(0)
            return to_cname(map_to_namespace(identifier, self.namespace), prefix)

        return _IDENTIFIER_RE.sub(mangle, self.value)

    def generate_signatures(self) -> tuple[str, str]:
        return (
            f"{self.full_name} = {self.value}",
            f"const int {self.cname} = {self.export_value()}",
        )


class Enum(DataType):
    """An enumeration; exported as ``int`` plus one constant per value."""

    def __init__(self, name: str, *flags: Flag | str):
        super().__init__(name, *flags)
        self.values: dict[str, str | None] = {}

    @property
    def cname(self) -> str:
        if self._cname is not None:
            return self._cname
        return to_cname(self.full_name, self.context.cprefix)

    @cname.setter
    def cname(self, value: str | None) -> None:
        self._cname = value or None

    def add_value(self, name: str, value: str | int | None = None) -> Enum:
        self.values[name] = None if value is None else str(value)
        return self

    def value_cname(self, name: str) -> str:
        return f"{self.cname}_{name}"

    def resolved_values(self) -> list[tuple[str, str]]:
        """Enumerators with implicit values filled in."""
        result = []
        next_value = 0
        for name, value in self.values.items():
            if value is None:
                value = str(next_value)
            result.append((name, value))
            next_value = int(value) + 1 if value.lstrip("-").isdigit() else next_value + 1
        return result

    def generate_signatures(self) -> tuple[str, str]:
        enumerators = ", ".join(f"{name} = {value}" for name, value in self.resolved_values())
        return f"enum {self.full_name} {{{enumerators}}}", f"typedef int {self.cname}"
