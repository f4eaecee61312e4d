#!/usr/bin/env python3

"""Structs and classes, including multiple-inheritance flattening."""

from __future__ import annotations

from typing import Any

from ....infrastructure.logging import get_logger
from ..errors import DuplicateDeclarationError, SelfInheritanceError
from .attribute import Attribute
from .entity import Entity
from .flags import Flag
from .namespace import Namespace
from .naming import normalize
from .operation import Getter, Operation, Setter

logger = get_logger(__name__)


class Struct(Namespace):
    """A scope with data members.

    Adding an attribute also adds its ``get_<name>`` accessor and, for
    writable attributes, ``set_<name>``.
    """

    valid_flags = frozenset({Flag.EXTERN, Flag.SIMPLE, Flag.MAP})
    is_struct = True

    def __init__(self, name: str, *flags: Flag | str):
        self._attributes: dict[str, Attribute] = {}
        super().__init__(name, *flags)
        self._cdelete_method: str | None = None

    @property
    def is_empty(self) -> bool:
        return super().is_empty and not self._attributes

    @property
    def attributes(self) -> list[Attribute]:
        return list(self._attributes.values())

    def attribute(self, name: str) -> Attribute | None:
        return self._attributes.get(name)

    def add_attribute(self, attribute: Attribute) -> Attribute:
        """Add a data member and its accessors.

        Raises:
            DuplicateDeclarationError: If the struct already has the attribute
        """
        if attribute.owner is None and attribute._namespace:
            scope: Any = self.type(attribute._namespace)
            return scope.add_attribute(attribute)
        if attribute.name in self._attributes:
            raise DuplicateDeclarationError(
                f"{self.full_name} already has an attribute called {attribute.name}"
            )

        getter = Getter(attribute)
        setter = Setter(attribute, self.type("void")) if attribute.is_writable else None

        attribute.owner = self
        self._attributes[attribute.name] = attribute
        self.add_operation(getter)
        if setter is not None:
            self.add_operation(setter)
        return attribute

    @property
    def has_constructor(self) -> bool:
        return any(op.is_constructor for op in self.overloads(self.name))

    @property
    def cdelete_method(self) -> str:
        """Name of the exported destructor function."""
        if self._cdelete_method is not None:
            return self._cdelete_method
        prefix = self.context.cprefix
        cname = self.cname
        if cname.startswith(prefix):
            return f"{prefix}delete_{cname[len(prefix):]}"
        return f"{prefix}delete_{cname}"

    @cdelete_method.setter
    def cdelete_method(self, value: str | None) -> None:
        self._cdelete_method = value or None

    def _release(self, child: Entity) -> None:
        if isinstance(child, Attribute):
            if self._attributes.get(child.name) is child:
                del self._attributes[child.name]
            return
        super()._release(child)

    def _adopt(self, child: Entity) -> None:
        if isinstance(child, Attribute):
            self.add_attribute(child)
        else:
            super()._adopt(child)


class Class(Struct):
    """A struct with (multiple) parent classes.

    ``operations`` and ``attributes`` are flattened on every read: parent
    members are copied into this class, own members hide parent members of
    the same name, and constructors are never inherited. When two parents
    contribute a member under the same export name from different declaring
    classes, both copies are marked ambiguous; the same declaration reached
    twice through a diamond is kept once. Parents are never modified.
    """

    def __init__(self, name: str, *parent_classes: Class, flags: tuple[Flag | str, ...] = ()):
        self._parent_classes: dict[str, Class] = {}
        super().__init__(name, *flags)
        # Set on specializations created by a TemplateClass
        self.template: Class | None = None
        self.template_arguments: tuple[Any, ...] = ()
        for parent in parent_classes:
            self.add_parent(parent)

    @property
    def is_empty(self) -> bool:
        return super().is_empty and not self._parent_classes

    @property
    def parent_classes(self) -> list[Class]:
        return list(self._parent_classes.values())

    def parent_class(self, name: str) -> Class | None:
        return self._parent_classes.get(name)

    def ancestors(self) -> list[Class]:
        """All direct and indirect parents, nearest first, without repeats."""
        result: list[Class] = []
        pending = list(self.parent_classes)
        while pending:
            parent = pending.pop(0)
            if any(parent is seen for seen in result):
                continue
            result.append(parent)
            pending.extend(parent.parent_classes)
        return result

    def add_parent(self, klass: Class) -> Class:
        """Add a parent class.

        Raises:
            SelfInheritanceError: If ``klass`` is this class or derives from it
            DuplicateDeclarationError: If the parent was already added
        """
        if klass is self or klass.full_name == self.full_name:
            raise SelfInheritanceError(f"class {self.full_name} cannot be its own parent")
        if any(ancestor is self for ancestor in klass.ancestors()):
            raise SelfInheritanceError(
                f"class {self.full_name} cannot derive from its descendant {klass.full_name}"
            )
        if klass.name in self._parent_classes:
            raise DuplicateDeclarationError(
                f"class {self.full_name} already derives from {klass.full_name}"
            )
        klass.check_type = False
        self._parent_classes[klass.name] = klass
        return klass

    @property
    def used_namespaces(self) -> list[Namespace]:
        result = super().used_namespaces
        for parent in self.parent_classes:
            result.extend(ns for ns in parent.used_namespaces if ns not in result)
        return result

    @property
    def attributes(self) -> list[Attribute]:
        result = super().attributes
        names = {attribute.name for attribute in result}
        for parent in self.parent_classes:
            for inherited in parent.attributes:
                if inherited.name in names:
                    continue
                names.add(inherited.name)
                result.append(inherited.copy_for(self))
        return result

    def attribute(self, name: str) -> Attribute | None:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None

    @property
    def own_operations(self) -> list[Operation]:
        return super().operations

    @property
    def operations(self) -> list[Operation]:
        own = self.own_operations
        result = list(own)
        own_names = {op.name for op in own}
        own_keys = {op.export_key for op in own}
        inherited_by_key: dict[str, list[Operation]] = {}

        for parent in self.parent_classes:
            for inherited in parent.operations:
                if inherited.is_constructor or inherited.name in own_names:
                    continue
                key = inherited.export_key
                if key in own_keys:
                    logger.debug(f"{self.full_name}: inherited {key} is hidden by an own operation")
                    continue
                siblings = inherited_by_key.setdefault(key, [])
                if any(s.base_class is inherited.base_class for s in siblings):
                    continue
                duplicate = inherited.copy_for(self)
                if siblings:
                    logger.debug(
                        f"{self.full_name}: {key} is inherited from "
                        f"{', '.join(s.base_class.full_name for s in siblings)} "  # type: ignore[union-attr]
                        f"and {inherited.base_class.full_name}"  # type: ignore[union-attr]
                    )
                    duplicate.ambiguous_name = True
                    for sibling in siblings:
                        sibling.ambiguous_name = True
                siblings.append(duplicate)
                result.append(duplicate)
        return result

    def overloads(self, name: str) -> list[Operation]:
        name = normalize(name)
        return [op for op in self.operations if op.name == name]
