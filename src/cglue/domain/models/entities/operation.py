#!/usr/bin/env python3

"""Operations (functions, methods, constructors) and attribute accessors."""

from __future__ import annotations

import re
from typing import Any

from .attribute import Attribute, Parameter
from .entity import Entity
from .flags import Flag
from .naming import to_cname
from .qualifiers import TypeView

_OPERATOR_RE = re.compile(r"\boperator(.+)$")

# Call operators are exported as ordinary member calls
_CALL_OPERATORS = ("()", "[]")


class Operation(Entity):
    """A callable entity.

    An operation without return type is a constructor of its owner. The
    first scope an operation is added to becomes its ``base_class``; copies
    that a derived class receives through inheritance keep it, which is how
    the emitter knows to qualify the call with the declaring class.
    """

    valid_flags = frozenset({Flag.STATIC, Flag.EXPLICIT})

    def __init__(
        self,
        name: str,
        return_type: TypeView | None = None,
        *parameters: Parameter,
        flags: tuple[Flag | str, ...] | list[Flag | str] = (),
    ):
        super().__init__(name, *flags)
        self.return_type = return_type
        self.parameters: list[Parameter] = []
        self.base_class: Entity | None = None
        self.ambiguous_name = False
        self.index: int | None = None
        self.cbody: str | None = None
        for parameter in parameters:
            self.add_parameter(parameter)

    @property
    def owner(self) -> Entity | None:
        return self._owner

    @owner.setter
    def owner(self, value: Entity | None) -> None:
        Entity.owner.fset(self, value)  # type: ignore[attr-defined]
        if self.base_class is None and value is not None:
            self.base_class = value

    def add_parameter(self, parameter: Parameter) -> Parameter:
        parameter.owner = self
        self.parameters.append(parameter)
        return parameter

    def parameter(self, index: int) -> Parameter:
        return self.parameters[index]

    def copy_for(self, owner: Entity) -> Operation:
        duplicate = super().copy_for(owner)
        duplicate.ambiguous_name = False
        return duplicate

    # classification

    @property
    def is_constructor(self) -> bool:
        return self.return_type is None

    @property
    def is_static(self) -> bool:
        return Flag.STATIC in self.flags

    @property
    def is_explicit(self) -> bool:
        return Flag.EXPLICIT in self.flags

    @property
    def is_instance_method(self) -> bool:
        owner = self._owner
        return (
            owner is not None
            and getattr(owner, "is_struct", False)
            and not self.is_constructor
            and not self.is_static
        )

    @property
    def is_inherited(self) -> bool:
        return self.base_class is not None and self.base_class is not self._owner

    @property
    def is_abstract(self) -> bool:
        """True if the declaring class cannot be constructed."""
        base = self.base_class
        return base is not None and not getattr(base, "has_constructor", True)

    @property
    def is_attribute_accessor(self) -> bool:
        return False

    @property
    def operator(self) -> str | None:
        """Operator symbol for ``operator==`` style names, else None."""
        match = _OPERATOR_RE.search(self.name)
        return match.group(1) if match else None

    @property
    def is_operator(self) -> bool:
        op = self.operator
        return op is not None and op not in _CALL_OPERATORS

    # naming

    @property
    def export_key(self) -> str:
        """Name the operation is exported under inside its scope (alias or name)."""
        return self.alias or self.name

    @property
    def disambiguated_cname(self) -> str:
        """Export name that also spells the declaring class."""
        base_name = self.base_class.name if self.base_class is not None else ""
        scope = self.namespace
        parts = [part for part in (scope, base_name, self.export_key) if part]
        return to_cname("::".join(parts), self.context.cprefix)

    @property
    def export_name(self) -> str:
        if self.ambiguous_name and not self.has_explicit_cname:
            return self.disambiguated_cname
        return self.cname

    @property
    def call_target(self) -> str:
        """C++ name the wrapper calls.

        Inherited and ambiguous methods are qualified with their declaring
        class (``Base::method``) so the right overload is selected.
        """
        base = self.base_class
        if self.is_instance_method:
            if base is not None and (self.is_inherited or self.ambiguous_name):
                return f"{base.full_name}::{self.name}"
            return self.name
        if base is not None and self.is_inherited:
            return f"{base.full_name}::{self.name}"
        return self.full_name

    # parameters of the exported function

    @property
    def cparameters(self) -> list[Parameter]:
        """Parameters of the exported function, receiver first for instance methods."""
        if self.is_instance_method:
            receiver = Parameter(self.context.receiver, self._owner, None, Flag.IN_OUT)  # type: ignore[arg-type]
            return [receiver, *self.parameters]
        return list(self.parameters)

    @staticmethod
    def export_parameter(parameter: Parameter) -> str:
        data_type: Any = parameter.type
        if data_type.is_basic_type:
            return parameter.csignature
        return f"{data_type.to_single_ptr().csignature} {parameter.name}"

    def export_return_type(self) -> str:
        if self.is_constructor:
            owner: Any = self._owner
            return owner.to_ptr().csignature if owner is not None else "void*"
        return_type: Any = self.return_type
        if return_type.is_basic_type:
            return return_type.csignature
        return return_type.to_single_ptr().csignature

    def generate_signatures(self) -> tuple[str, str]:
        parameters = ", ".join(p.signature for p in self.parameters)
        signature = f"{self.full_name}({parameters})"
        if not self.is_constructor:
            signature = f"{self.return_type.signature} {signature}"  # type: ignore[union-attr]

        cparameters = ", ".join(self.export_parameter(p) for p in self.cparameters)
        csignature = f"{self.export_return_type()} {self.export_name}({cparameters})"
        return signature, csignature

    def _release(self, child: Entity) -> None:
        self.parameters = [p for p in self.parameters if p is not child]

    def _adopt(self, child: Entity) -> None:
        if isinstance(child, Parameter):
            self.add_parameter(child)
        else:
            super()._adopt(child)


class Getter(Operation):
    """Generated read accessor ``get_<attribute>``; returns a const view."""

    def __init__(self, attribute: Attribute):
        super().__init__(f"get_{attribute.name}", attribute.type.to_const())
        self.attribute = attribute

    @property
    def is_attribute_accessor(self) -> bool:
        return True


class Setter(Operation):
    """Generated write accessor ``set_<attribute>`` for writable attributes."""

    def __init__(self, attribute: Attribute, void_type: TypeView):
        super().__init__(f"set_{attribute.name}", void_type, Parameter("value", attribute.type))
        self.attribute = attribute

    @property
    def is_attribute_accessor(self) -> bool:
        return True
