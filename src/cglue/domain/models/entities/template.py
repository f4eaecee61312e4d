#!/usr/bin/env python3

"""Class templates and their instantiation cache."""

from __future__ import annotations

from collections.abc import Sequence

from ....infrastructure.logging import get_logger
from ..errors import BindgenError, TemplateArgumentError, UnresolvedNameError
from .flags import Flag
from .qualifiers import TypeView
from .struct import Class

logger = get_logger(__name__)


class TemplateClass(Class):
    """A class template such as ``std::vector``.

    The template itself is never exported. ``instantiate`` registers one
    specialization per argument list in the template's owning scope, under
    the rendered name (``vector<int>``); asking again returns that same node.
    Subclasses fill specializations in ``specialize``.
    """

    is_template = True

    # (minimum, maximum) number of template arguments; None for no limit
    argument_count: tuple[int, int | None] = (1, None)

    def __init__(self, name: str, *flags: Flag | str):
        super().__init__(name, flags=flags)
        self.ignore = True

    def specialization_name(self, arguments: Sequence[TypeView]) -> str:
        rendered = ",".join(argument.full_name for argument in arguments)  # type: ignore[attr-defined]
        return f"{self.name}<{rendered}>"

    def check_arguments(self, arguments: Sequence[TypeView]) -> None:
        minimum, maximum = self.argument_count
        count = len(arguments)
        if count < minimum or (maximum is not None and count > maximum):
            expected = str(minimum) if minimum == maximum else f"{minimum}..{maximum or 'n'}"
            raise TemplateArgumentError(
                f"template {self.full_name} expects {expected} arguments, got {count}"
            )

    def instantiate(self, arguments: Sequence[TypeView]) -> Class:
        """Return the specialization for ``arguments``, creating it on first use.

        Raises:
            TemplateArgumentError: If the argument count does not fit
            UnresolvedNameError: If the template is not registered in a scope
        """
        scope = self.owner
        if scope is None:
            raise UnresolvedNameError(f"template {self.full_name} is not registered in a scope")

        name = self.specialization_name(arguments)
        cached = scope._types.get(name)  # type: ignore[attr-defined]
        if cached is not None:
            return cached

        self.check_arguments(arguments)
        logger.debug(f"Instantiating {self.full_name} as {name}")

        klass = Class(name)
        klass.template = self
        klass.template_arguments = tuple(arguments)
        scope.add_type(klass)  # type: ignore[attr-defined]
        try:
            self.specialize(klass, list(arguments))
        except BindgenError:
            scope._release(klass)
            klass._owner = None
            raise
        return klass

    def specialize(self, klass: Class, arguments: list[TypeView]) -> Class:
        """Fill a fresh specialization. The default adds nothing."""
        return klass
