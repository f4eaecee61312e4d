#!/usr/bin/env python3

"""Scopes and name resolution.

A namespace owns types, constants and overloaded operations. Type queries
are resolved in this order:

1. exact match in the scope's type or type-alias map
2. ``Base<Args>`` spellings: ``Base`` is looked up like any other name, the
   arguments in this scope, and the template is instantiated
3. scoped names (``a::b::C``): ``a`` is looked up with upward search, the
   rest inside ``a`` only
4. namespaces brought in with ``use_namespace`` (no upward search)
5. the owning scope, when upward search is enabled
6. trailing ``*``/``&`` suffixes, resolved on the unqualified name

The type-not-found hook is consulted last, and only by ``type()``.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol

from ....infrastructure.config.model_config import DEFAULT_MODEL_CONFIG, ModelConfig
from ....infrastructure.logging import get_logger
from ..errors import (
    DuplicateDeclarationError,
    InvalidQualifierCombinationError,
    UnresolvedNameError,
)
from .constant import Const
from .data_type import DataType
from .entity import Entity
from .flags import Flag
from .naming import (
    SCOPE_SEPARATOR,
    normalize,
    split_const,
    split_scope,
    split_template,
    split_template_arguments,
)
from .operation import Operation
from .qualifiers import TypeView

if TYPE_CHECKING:
    from .template import TemplateClass

logger = get_logger(__name__)


class TypeNotFoundHandler(Protocol):
    """Callback consulted when a type query fails everywhere else."""

    def __call__(self, scope: Namespace, name: str) -> TypeView | None: ...


class Namespace(DataType):
    """A scope of the binding model."""

    is_basic_type = False
    is_container = True

    def __init__(
        self,
        name: str = "root",
        *flags: Flag | str,
        context: ModelConfig | None = None,
    ):
        super().__init__(name, *flags)
        self._types: dict[str, DataType] = {}
        self._type_alias: dict[str, DataType] = {}
        self._consts: dict[str, Const] = {}
        self._operations: dict[str, list[Operation]] = {}
        self._operation_alias: dict[str, list[Operation]] = {}
        self._used_namespaces: dict[str, Namespace] = {}
        self.root = False
        self._context = context
        self.type_not_found_handler: TypeNotFoundHandler | None = None

    @classmethod
    def create_root(cls, config: ModelConfig | None = None) -> Namespace:
        """Create a root scope with the builtin types registered."""
        root = cls("root", context=config or DEFAULT_MODEL_CONFIG)
        root.root = True
        root.add_default_types()
        return root

    @property
    def is_root(self) -> bool:  # type: ignore[override]
        return self.root

    def add_default_types(self) -> None:
        config = self.context
        for name in config.default_type_names:
            self.add_type(DataType(name))
        for name, cname in config.builtin_cnames.items():
            builtin = DataType(name)
            builtin.cname = cname
            self.add_type(builtin)

    @property
    def is_empty(self) -> bool:
        return not (self._types or self._consts or self._operations)

    def _root(self) -> Namespace:
        scope: Namespace = self
        while scope.owner is not None:
            scope = scope.owner  # type: ignore[assignment]
        return scope

    # used namespaces

    @property
    def used_namespaces(self) -> list[Namespace]:
        return list(self._used_namespaces.values())

    def use_namespace(self, namespace: Namespace) -> Namespace:
        """Make the types of ``namespace`` visible in this scope."""
        self._used_namespaces[namespace.full_name] = namespace
        return namespace

    # types

    @property
    def types(self) -> list[DataType]:
        return list(self._types.values())

    def add_namespace(self, path: str) -> Namespace:
        """Return the namespace at ``path``, creating missing components."""
        current: Namespace = self
        for part in normalize(path).split(SCOPE_SEPARATOR):
            if not part:
                continue
            found = current._types.get(part)
            if found is None:
                logger.debug(f"Adding missing namespace {part} to {current.full_name}")
                found = current.add_type(Namespace(part))
            elif not found.is_container:
                raise DuplicateDeclarationError(
                    f"{found.full_name} already exists and is not a namespace"
                )
            current = found  # type: ignore[assignment]
        return current

    def _routing_target(self, namespace: str | None) -> Namespace:
        if not namespace:
            return self
        full_name = self.full_name
        if full_name == namespace or full_name.endswith(SCOPE_SEPARATOR + namespace):
            return self
        if namespace.startswith(SCOPE_SEPARATOR):
            return self._root().add_namespace(namespace)
        scope = self._resolve_type(namespace, True)
        if scope is None:
            return self.add_namespace(namespace)
        if not scope.is_container:
            raise UnresolvedNameError(f"{scope.full_name} is not a scope")
        return scope  # type: ignore[return-value]

    @staticmethod
    def _can_reopen(existing: DataType, incoming: DataType) -> bool:
        if type(existing) is not type(incoming) or not incoming.is_container:
            return False
        if not incoming.is_empty:  # type: ignore[attr-defined]
            return False
        if existing.is_struct:
            return existing.is_empty  # type: ignore[attr-defined]
        return True

    def add_type(self, data_type: DataType, check_exists: bool = True) -> DataType:
        """Register a type in this scope (or in the scope its name spells).

        Adding an empty struct, class or namespace whose name already names an
        empty entity of the same kind returns the registered one.

        Args:
            data_type: Type to add
            check_exists: If False, silently replace an existing type

        Returns:
            The registered type

        Raises:
            TypeError: If ``data_type`` is not a data type
            DuplicateDeclarationError: If the name is already taken
        """
        if not isinstance(data_type, DataType):
            raise TypeError(f"add_type expects a DataType, got {data_type!r}")

        if data_type.owner is None:
            target = self._routing_target(data_type._namespace)
            if target is not self:
                return target.add_type(data_type, check_exists)

        existing = self._types.get(data_type.name)
        if existing is data_type:
            return existing
        if existing is not None and check_exists:
            if self._can_reopen(existing, data_type):
                logger.debug(f"Reopening {existing.full_name}")
                return existing
            raise DuplicateDeclarationError(
                f"A type with the name {existing.full_name} already exists"
            )
        if existing is not None:
            self._release(existing)
            existing._owner = None

        data_type.owner = self
        self._types[data_type.name] = data_type
        if data_type.alias:
            self._type_alias[data_type.alias] = data_type
        return data_type

    def delete_type(self, name: str) -> DataType:
        """Remove a type (``a::B`` removes ``B`` from ``a``) and return it.

        Raises:
            UnresolvedNameError: If there is no such type
        """
        name = normalize(name)
        head, tail = split_scope(name)
        if tail is not None:
            scope = self._resolve_type(head, False)
            if scope is None or not scope.is_container:
                raise UnresolvedNameError(f"{self.full_name} has no scope called {head}")
            return scope.delete_type(tail)  # type: ignore[attr-defined]
        data_type = self._types.get(name)
        if data_type is None:
            raise UnresolvedNameError(f"{self.full_name} has no type called {name}")
        self._release(data_type)
        data_type._owner = None
        return data_type

    def type(self, name: str, raise_: bool = True, search_owner: bool = True) -> TypeView | None:
        """Resolve a type query.

        Args:
            name: Type spelling, e.g. ``const a::B*`` or ``std::vector<int>``
            raise_: Raise instead of returning None when nothing is found
            search_owner: Also search enclosing scopes

        Raises:
            UnresolvedNameError: If nothing is found and ``raise_`` is set
            InvalidQualifierCombinationError: For ``*&`` mixes or a (qualified)
                template without arguments
        """
        found = self._find_type(name, search_owner)
        if found is None:
            found = self._run_type_not_found_handler(str(name))
        if found is None:
            if raise_:
                raise UnresolvedNameError(f"{self.full_name} has no type called {name}")
            return None
        return self._check_concrete(found)

    def template(self, name: str, raise_: bool = True) -> TemplateClass | None:
        """Return the class template called ``name`` (without arguments).

        Raises:
            UnresolvedNameError: If there is no such template and ``raise_`` is set
        """
        found = self._find_type(name)
        if found is not None and found.is_template and found.is_raw:  # type: ignore[attr-defined]
            return found  # type: ignore[return-value]
        if raise_:
            raise UnresolvedNameError(f"{self.full_name} has no template called {name}")
        return None

    def find_type(self, name: str, search_owner: bool = True) -> TypeView | None:
        """Resolve a type query without the hook; never raises for unknown names.

        Raises:
            InvalidQualifierCombinationError: For ``*&`` mixes or a (qualified)
                template without arguments
        """
        found = self._find_type(name, search_owner)
        if found is None:
            return None
        return self._check_concrete(found)

    def _find_type(self, name: str, search_owner: bool = True) -> TypeView | None:
        is_const, normalized = split_const(name)
        found = self._resolve_type(normalized, search_owner)
        if found is not None and is_const:
            found = found.to_const()
        return found

    @staticmethod
    def _check_concrete(found: TypeView) -> TypeView:
        raw = found.raw_type
        if raw.is_template:
            raise InvalidQualifierCombinationError(
                f"template {raw.full_name} cannot be used without template arguments"
            )
        return found

    def _resolve_type(self, name: str, search_owner: bool) -> TypeView | None:
        if not name:
            return None
        if name.startswith(SCOPE_SEPARATOR):
            return self._root()._resolve_type(name[len(SCOPE_SEPARATOR):], False)

        found: TypeView | None = self._types.get(name)
        if found is None:
            found = self._type_alias.get(name)
        if found is not None:
            return found
        if split_template(name) is not None:
            return self._resolve_template(name, search_owner)

        found = self._resolve_scoped(name, search_owner)
        if found is None:
            for used in self.used_namespaces:
                found = used._resolve_type(name, False)
                if found is not None:
                    break
        if found is None and search_owner and self.owner is not None:
            found = self.owner._resolve_type(name, True)  # type: ignore[attr-defined]
        if found is None:
            found = self._resolve_qualified(name, search_owner)
        return found

    def _resolve_scoped(self, name: str, search_owner: bool) -> TypeView | None:
        head, tail = split_scope(name)
        if tail is None:
            return None
        scope = self._resolve_type(head, search_owner)
        if scope is None or not scope.is_container or not scope.is_raw:  # type: ignore[attr-defined]
            return None
        return scope._resolve_type(tail, False)  # type: ignore[attr-defined]

    def _resolve_qualified(self, name: str, search_owner: bool) -> TypeView | None:
        stripped = name.rstrip("*&")
        if stripped == name or not stripped:
            return None
        suffix = name[len(stripped):]
        if "*" in suffix and "&" in suffix:
            raise InvalidQualifierCombinationError(
                f"{name}: pointer and reference qualifiers cannot be mixed"
            )
        found = self._resolve_type(stripped, search_owner)
        if found is None:
            return None
        for token in suffix:
            found = found.to_ptr() if token == "*" else found.to_ref()
        return found

    def _resolve_template(self, name: str, search_owner: bool) -> TypeView | None:
        parts = split_template(name)
        if parts is None:
            return None
        base_name, argument_string = parts
        template = self._resolve_type(base_name, search_owner)
        if template is None or not template.is_template or not template.is_raw:  # type: ignore[attr-defined]
            return None
        arguments = []
        for argument in split_template_arguments(argument_string):
            resolved = self._resolve_type(argument, True)
            if resolved is None:
                logger.debug(f"Template argument {argument} of {name} is unknown in {self.full_name}")
                return None
            arguments.append(resolved)
        template_class: TemplateClass = template  # type: ignore[assignment]
        return template_class.instantiate(arguments)

    def on_type_not_found(self, handler: TypeNotFoundHandler | None) -> None:
        """Install the hook consulted when a type query fails in this scope or below."""
        self.type_not_found_handler = handler

    def _run_type_not_found_handler(self, name: str) -> TypeView | None:
        scope: Entity | None = self
        handler = None
        while scope is not None:
            handler = getattr(scope, "type_not_found_handler", None)
            if handler is not None:
                break
            scope = scope.owner
        if handler is None:
            return None

        logger.debug(f"Type {name} not found in {self.full_name}, calling handler")
        result = handler(self, name)
        if result is None:
            return None
        if not isinstance(result, TypeView):
            logger.warning(f"Type-not-found handler returned {result!r} for {name}, ignoring it")
            return None
        return result

    def each_type(
        self,
        recursive: bool = True,
        include_ignored: bool = False,
        include_extern: bool = False,
    ) -> Iterator[DataType]:
        """Yield registered types; optionally descend into nested scopes."""
        for data_type in list(self._types.values()):
            if data_type.ignore and not include_ignored:
                continue
            if data_type.is_extern and not include_extern:
                continue
            yield data_type
            if recursive and data_type.is_container:
                yield from data_type.each_type(  # type: ignore[attr-defined]
                    True, include_ignored, include_extern
                )

    def each_container(
        self,
        recursive: bool = True,
        include_ignored: bool = False,
        include_extern: bool = False,
    ) -> Iterator[Namespace]:
        """Yield this scope and then every nested scope."""
        yield self
        for data_type in self.each_type(recursive, include_ignored, include_extern):
            if data_type.is_container:
                yield data_type  # type: ignore[misc]

    # constants

    @property
    def consts(self) -> list[Const]:
        return list(self._consts.values())

    def add_const(self, const: Const) -> Const:
        """Register a constant in this scope (or in the scope its name spells).

        Raises:
            TypeError: If ``const`` is not a constant
            DuplicateDeclarationError: If the name is already taken
        """
        if not isinstance(const, Const):
            raise TypeError(f"add_const expects a Const, got {const!r}")
        if const.owner is None:
            target = self._routing_target(const._namespace)
            if target is not self:
                return target.add_const(const)
        if const.name in self._consts:
            raise DuplicateDeclarationError(
                f"A constant with the name {self._consts[const.name].full_name} already exists"
            )
        const.owner = self
        self._consts[const.name] = const
        return const

    def const(self, name: str, raise_: bool = True, search_owner: bool = True) -> Const | None:
        """Resolve a constant by (scoped) name.

        Raises:
            UnresolvedNameError: If nothing is found and ``raise_`` is set
        """
        found = self._resolve_const(normalize(name), search_owner)
        if found is None and raise_:
            raise UnresolvedNameError(f"{self.full_name} has no constant called {name}")
        return found

    def _resolve_const(self, name: str, search_owner: bool) -> Const | None:
        found = self._consts.get(name)
        if found is None:
            head, tail = split_scope(name)
            if tail is not None:
                scope = self._resolve_type(head, search_owner)
                if scope is not None and scope.is_container and scope.is_raw:  # type: ignore[attr-defined]
                    found = scope._resolve_const(tail, False)  # type: ignore[attr-defined]
        if found is None:
            for used in self.used_namespaces:
                found = used._resolve_const(name, False)
                if found is not None:
                    break
        if found is None and search_owner and self.owner is not None:
            found = self.owner._resolve_const(name, True)  # type: ignore[attr-defined]
        return found

    def each_const(
        self,
        recursive: bool = False,
        include_ignored: bool = False,
        include_extern: bool = False,
    ) -> Iterator[Const]:
        containers = (
            self.each_container(True, include_ignored, include_extern) if recursive else [self]
        )
        for container in containers:
            for const in container.consts:
                if const.ignore and not include_ignored:
                    continue
                if const.is_extern and not include_extern:
                    continue
                yield const

    # operations

    @property
    def operations(self) -> list[Operation]:
        return [op for overloads in self._operations.values() for op in overloads]

    def _export_name_taken(self, cname: str, operation: Operation) -> bool:
        return any(
            other is not operation and other.cname == cname
            for overloads in self._operations.values()
            for other in overloads
        )

    def add_operation(self, operation: Operation) -> Operation:
        """Register an operation, renaming it until its export name is unique.

        Overloads keep their C++ name; the n-th overload whose export name
        collides gets the alias ``<name or alias><n>`` (``foo``, ``foo2``,
        ``foo3``...). Adding an operation that is already registered here
        returns it unchanged.

        Returns:
            The registered operation
        """
        if operation.owner is None:
            target = self._routing_target(operation._namespace)
            if target is not self:
                return target.add_operation(operation)
        elif operation.owner is self and any(
            other is operation for other in self._operations.get(operation.name, [])
        ):
            return operation

        operation.owner = self
        overloads = self._operations.setdefault(operation.name, [])
        operation.index = len(overloads)

        if self._export_name_taken(operation.cname, operation):
            self._make_export_name_unique(operation, len(overloads))

        overloads.append(operation)
        if operation.alias:
            self._operation_alias.setdefault(operation.alias, []).append(operation)
        return operation

    def _make_export_name_unique(self, operation: Operation, count: int) -> None:
        previous = operation.cname
        number = count + 1
        if operation.has_explicit_cname:
            explicit = operation.cname
            while self._export_name_taken(f"{explicit}{number}", operation):
                number += 1
            operation.cname = f"{explicit}{number}"
        else:
            base = operation.alias or operation.name
            operation.auto_alias = not operation.alias
            operation.alias = f"{base}{number}"
            while self._export_name_taken(operation.cname, operation):
                number += 1
                operation.alias = f"{base}{number}"
        logger.debug(f"Name clash: aliasing {previous} --> {operation.cname}")

    def overloads(self, name: str) -> list[Operation]:
        return list(self._operations.get(normalize(name), []))

    def operation(
        self, name: str, raise_: bool = True
    ) -> Operation | list[Operation] | None:
        """Look up operations by exact name.

        Returns:
            The operation, or the list of overloads if there are several

        Raises:
            UnresolvedNameError: If there is none and ``raise_`` is set
        """
        overloads = self.overloads(name)
        if len(overloads) == 1:
            return overloads[0]
        if overloads:
            return overloads
        if raise_:
            raise UnresolvedNameError(f"{self.full_name} has no operation called {name}")
        return None

    def has_operation(self, name: str) -> bool:
        return bool(self.overloads(name))

    def each_operation(
        self,
        recursive: bool = False,
        include_ignored: bool = False,
        include_extern: bool = False,
    ) -> Iterator[Operation]:
        """Yield registered operations; extern scopes are skipped unless requested."""
        containers = (
            self.each_container(True, include_ignored, include_extern) if recursive else [self]
        )
        for container in containers:
            for operation in container.operations:
                if operation.ignore and not include_ignored:
                    continue
                yield operation

    # generic access

    def get(self, name: str) -> Entity | list[Operation] | None:
        """Return the type, operation(s) or constant called ``name``, if any."""
        found = self._find_type(name)
        if found is not None:
            return found  # type: ignore[return-value]
        operations = self.operation(name, raise_=False)
        if operations is not None:
            return operations
        return self.const(name, raise_=False)

    def _release(self, child: Entity) -> None:
        if isinstance(child, Operation):
            for table in (self._operations, self._operation_alias):
                for key in list(table):
                    table[key] = [op for op in table[key] if op is not child]
                    if not table[key]:
                        del table[key]
        elif isinstance(child, Const):
            if self._consts.get(child.name) is child:
                del self._consts[child.name]
        elif isinstance(child, DataType):
            if self._types.get(child.name) is child:
                del self._types[child.name]
            for alias in [a for a, t in self._type_alias.items() if t is child]:
                del self._type_alias[alias]

    def _adopt(self, child: Entity) -> None:
        if isinstance(child, Operation):
            self.add_operation(child)
        elif isinstance(child, Const):
            self.add_const(child)
        elif isinstance(child, DataType):
            existing = self._types.get(child.name)
            if existing is not None and existing is not child:
                raise DuplicateDeclarationError(
                    f"A type with the name {existing.full_name} already exists"
                )
            self.add_type(child)
        else:
            super()._adopt(child)
