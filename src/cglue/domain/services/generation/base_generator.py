#!/usr/bin/env python3

"""Base class of the C emitters."""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from ...models.entities import Namespace, Operation, Struct


class BaseGenerator(ABC):
    """Walks a root scope for the emitters.

    Subclasses render one output file from the scopes, types and operations
    yielded here.
    """

    def __init__(self, root: Namespace):
        """Initialize generator with the scope to export.

        Args:
            root: Root scope of the binding model

        Raises:
            TypeError: If root is not a namespace
        """
        if not isinstance(root, Namespace):
            raise TypeError(f"expected a Namespace, got {root!r}")
        self.root = root

    @property
    def cprefix(self) -> str:
        return self.root.context.cprefix

    def exported_structs(self) -> Iterator[Struct]:
        """Structs and classes that get an opaque C handle."""
        for data_type in self.root.each_type():
            if data_type.is_struct and not data_type.is_template:
                yield data_type  # type: ignore[misc]

    def exported_operations(self) -> Iterator[tuple[Namespace, list[Operation]]]:
        """(scope, operations) for every scope that exports operations."""
        for container in self.root.each_container():
            operations = list(container.each_operation())
            if operations:
                yield container, operations

    @staticmethod
    def scope_label(scope: Namespace) -> str:
        return "global scope" if scope.is_root else scope.full_name

    @abstractmethod
    def generate(self, *args: object, **kwargs: object) -> str:
        """Render the output file."""
