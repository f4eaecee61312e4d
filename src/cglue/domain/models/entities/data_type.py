#!/usr/bin/env python3

"""Registered (unqualified) data types."""

from __future__ import annotations

from typing import Any

from .entity import Entity
from .flags import Flag
from .qualifiers import QualifierKind, TypeView


class DataType(TypeView, Entity):
    """A type known to a scope, e.g. a builtin like ``int``.

    Builtins are exported under their own name; every other type is exported
    under its mangled, prefixed name.
    """

    valid_flags = frozenset({Flag.EXTERN})
    kind = QualifierKind.RAW

    is_basic_type = True
    is_container = False
    is_struct = False
    is_template = False

    def __init__(self, name: str, *flags: Flag | str):
        super().__init__(name, *flags)
        self.invalid_value: Any = 0
        self.typedef: str | None = None
        self.check_type = True
        self.extern_package_name: str | None = None

    @property
    def cname(self) -> str:
        if self._cname is None and self.is_basic_type:
            return self.name
        return super().cname

    @cname.setter
    def cname(self, value: str | None) -> None:
        self._cname = value or None

    @property
    def is_extern(self) -> bool:
        return Flag.EXTERN in self.flags

    def to_raw(self) -> DataType:
        return self

    @property
    def raw_type(self) -> DataType:
        return self

    def remove_const(self) -> DataType:
        return self
