#!/usr/bin/env python3

"""Base class of every named element of the binding model."""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from ....infrastructure.config.model_config import DEFAULT_MODEL_CONFIG, ModelConfig
from ..errors import BindgenError
from .flags import Flag, validate_flags
from .naming import map_to_namespace, normalize, rsplit_scope, to_cname

if TYPE_CHECKING:
    from .namespace import Namespace


class Entity:
    """A named element that may live in a scope.

    The namespace of an owned entity is derived from its owner, so moving a
    scope moves everything inside it. An unowned entity keeps the namespace
    spelled in its name (``a::b::C``) until a scope adopts it; adding such an
    entity to a scope routes it into ``a::b``.
    """

    valid_flags: frozenset[Flag] = frozenset()
    is_root = False
    is_container = False

    def __init__(self, name: str, *flags: Flag | str):
        name = normalize(name)
        if not name:
            raise ValueError("entity name must not be empty")
        self._namespace, self.name = rsplit_scope(name)
        self._owner: Entity | None = None
        self._context: ModelConfig | None = None
        self._alias: str | None = None
        self._cname: str | None = None
        self._signature: str | None = None
        self._csignature: str | None = None
        self._flags: tuple[Flag, ...] = ()
        self.flags = flags
        self.auto_alias = False
        self.version = 1
        self.ignore = False
        self.doc: str | None = None

    # flags

    @property
    def flags(self) -> tuple[Flag, ...]:
        return self._flags

    @flags.setter
    def flags(self, flags: Iterable[Flag | str]) -> None:
        self._flags = validate_flags(flags, self.valid_flags, self._describe())

    def add_flag(self, *flags: Flag | str) -> Entity:
        self.flags = (*self._flags, *flags)
        return self

    def has_flag(self, flag: Flag | str) -> bool:
        return Flag.parse(flag) in self._flags

    def _describe(self) -> str:
        return f"{type(self).__name__.lower()} {self.name}"

    # ownership

    @property
    def owner(self) -> Entity | None:
        return self._owner

    @owner.setter
    def owner(self, value: Entity | None) -> None:
        previous = self._owner
        if previous is not None and previous is not value:
            previous._release(self)
        self._owner = value
        if value is not None:
            self._namespace = None

    def _release(self, child: Entity) -> None:
        """Forget ``child`` (matched by identity). Scopes override this."""

    def delete(self) -> None:
        """Remove this entity from its owner.

        Raises:
            BindgenError: If the entity has no owner
        """
        if self._owner is None:
            raise BindgenError(f"{self.full_name} has no owner")
        self._owner._release(self)
        self._owner = None

    def copy_for(self, owner: Entity) -> Any:
        """Return a shallow copy that reports ``owner`` as its owner.

        The copy is not registered anywhere and the original is untouched.
        """
        duplicate = copy.copy(self)
        duplicate._owner = owner
        duplicate._namespace = None
        return duplicate

    @property
    def context(self) -> ModelConfig:
        """Model configuration of the root this entity belongs to."""
        if self._context is not None:
            return self._context
        if self._owner is not None:
            return self._owner.context
        return DEFAULT_MODEL_CONFIG

    # naming

    @property
    def namespace(self) -> str | None:
        owner = self._owner
        if owner is not None:
            if owner.is_container and not owner.is_root:
                return owner.full_name
            return None
        return self._namespace

    @property
    def full_name(self) -> str:
        return map_to_namespace(self.name, self.namespace)

    def map_to_namespace(self, name: str) -> str:
        return map_to_namespace(name, self.namespace)

    @property
    def alias(self) -> str | None:
        return self._alias

    @alias.setter
    def alias(self, value: str | None) -> None:
        self._alias = normalize(value) if value else None

    @property
    def cname(self) -> str:
        """Exported C identifier: override, else mangled alias, else mangled full name."""
        if self._cname is not None:
            return self._cname
        prefix = self.context.cprefix
        if self._alias:
            return to_cname(self.map_to_namespace(self._alias), prefix)
        return to_cname(self.full_name, prefix)

    @cname.setter
    def cname(self, value: str | None) -> None:
        self._cname = value or None

    @property
    def has_explicit_cname(self) -> bool:
        return self._cname is not None

    def rename(self, new_name: str) -> Entity:
        """Give the entity a new name and re-register it with its owner.

        If re-registration fails the old name is restored and the error is
        re-raised.
        """
        new_name = normalize(new_name)
        owner = self._owner
        old = (self._namespace, self.name)
        if owner is not None:
            owner._release(self)
        self._namespace, self.name = rsplit_scope(new_name)
        if owner is not None:
            try:
                owner._adopt(self)
            except BindgenError:
                self._namespace, self.name = old
                owner._adopt(self)
                raise
        self.version += 1
        return self

    def _adopt(self, child: Entity) -> None:
        raise BindgenError(f"{self.full_name} cannot own {child.full_name}")

    # signatures

    def generate_signatures(self) -> tuple[str, str]:
        """Return (human readable signature, export signature)."""
        return self.full_name, self.cname

    @property
    def signature(self) -> str:
        if self._signature is not None:
            return self._signature
        return self.generate_signatures()[0]

    @signature.setter
    def signature(self, value: str | None) -> None:
        self._signature = value

    @property
    def csignature(self) -> str:
        if self._csignature is not None:
            return self._csignature
        return self.generate_signatures()[1]

    @csignature.setter
    def csignature(self, value: str | None) -> None:
        self._csignature = value

    def __str__(self) -> str:
        return self.signature

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.full_name}>"


def root_of(entity: Entity) -> Namespace | None:
    """Walk the owner chain up to the root scope, if there is one."""
    current: Entity | None = entity
    while current is not None:
        if current.is_root:
            return current  # type: ignore[return-value]
        current = current.owner
    return None
