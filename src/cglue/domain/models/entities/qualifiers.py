#!/usr/bin/env python3

"""Qualified views over data types.

A qualified view (pointer, reference or const) wraps exactly one other type
and leaves it untouched, so ``int`` and ``const int*`` share the single
registered ``int`` node. Layers nest without limit; ``to_raw`` removes the
outermost one and ``raw_type`` removes all of them.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ....infrastructure.config.model_config import ModelConfig
    from .data_type import DataType


class QualifierKind(Enum):
    RAW = "raw"
    POINTER = "pointer"
    REFERENCE = "reference"
    CONST = "const"


class TypeView:
    """Operations shared by registered types and qualified views.

    Two views compare equal when their signatures match.
    """

    kind: QualifierKind = QualifierKind.RAW

    def to_ptr(self) -> PointerType:
        return PointerType(self)

    def to_ref(self) -> ReferenceType:
        return ReferenceType(self)

    def to_const(self) -> TypeView:
        if self.kind is QualifierKind.CONST:
            return self
        return ConstType(self)

    def to_single_ptr(self) -> PointerType:
        """Collapse all layers into exactly one pointer, keeping constness."""
        target: TypeView = self.raw_type
        if self.is_const:
            target = target.to_const()
        return target.to_ptr()

    @property
    def raw_type(self) -> DataType:
        raise NotImplementedError

    @property
    def is_ptr(self) -> bool:
        return False

    @property
    def is_ref(self) -> bool:
        return False

    @property
    def is_const(self) -> bool:
        return False

    @property
    def is_raw(self) -> bool:
        return self.kind is QualifierKind.RAW

    def layers(self) -> list[QualifierKind]:
        """Qualifier kinds from the outermost layer inwards."""
        result = []
        current: Any = self
        while current.kind is not QualifierKind.RAW:
            result.append(current.kind)
            current = current.inner
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeView):
            return NotImplemented
        return self.signature == other.signature  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(self.signature)  # type: ignore[attr-defined]


class QualifiedType(TypeView):
    """One qualifier layer over an inner type.

    Everything that is not about the qualifier itself is read from the
    wrapped type.
    """

    def __init__(self, inner: TypeView):
        self.inner = inner

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.signature}>"

    def __str__(self) -> str:
        return self.signature

    def to_raw(self) -> TypeView:
        return self.inner

    @property
    def raw_type(self) -> DataType:
        return self.inner.raw_type

    def remove_const(self) -> TypeView:
        return self

    @property
    def is_ptr(self) -> bool:
        return self.inner.is_ptr

    @property
    def is_ref(self) -> bool:
        return self.inner.is_ref

    @property
    def is_const(self) -> bool:
        return self.inner.is_const

    # Spelling; layers decorate these

    @property
    def name(self) -> str:
        return self.inner.name  # type: ignore[attr-defined]

    @property
    def full_name(self) -> str:
        return self.inner.full_name  # type: ignore[attr-defined]

    @property
    def signature(self) -> str:
        return self.inner.signature  # type: ignore[attr-defined]

    @property
    def csignature(self) -> str:
        return self.inner.csignature  # type: ignore[attr-defined]

    # Read through to the wrapped type

    @property
    def cname(self) -> str:
        return self.inner.cname  # type: ignore[attr-defined]

    @property
    def owner(self) -> Any:
        return self.inner.owner  # type: ignore[attr-defined]

    @property
    def namespace(self) -> str | None:
        return self.inner.namespace  # type: ignore[attr-defined]

    @property
    def context(self) -> ModelConfig:
        return self.inner.context  # type: ignore[attr-defined]

    @property
    def is_basic_type(self) -> bool:
        return self.inner.is_basic_type  # type: ignore[attr-defined]

    @property
    def is_container(self) -> bool:
        return self.inner.is_container  # type: ignore[attr-defined]

    @property
    def is_struct(self) -> bool:
        return self.inner.is_struct  # type: ignore[attr-defined]

    @property
    def is_template(self) -> bool:
        return self.inner.is_template  # type: ignore[attr-defined]

    @property
    def is_extern(self) -> bool:
        return self.inner.is_extern  # type: ignore[attr-defined]

    @property
    def invalid_value(self) -> Any:
        return self.inner.invalid_value  # type: ignore[attr-defined]

    @property
    def typedef(self) -> str | None:
        return self.inner.typedef  # type: ignore[attr-defined]

    @property
    def ignore(self) -> bool:
        return self.inner.ignore  # type: ignore[attr-defined]


class PointerType(QualifiedType):
    kind = QualifierKind.POINTER

    @property
    def is_ptr(self) -> bool:
        return True

    @property
    def name(self) -> str:
        return f"{self.inner.name}*"  # type: ignore[attr-defined]

    @property
    def full_name(self) -> str:
        return f"{self.inner.full_name}*"  # type: ignore[attr-defined]

    @property
    def signature(self) -> str:
        return f"{self.inner.signature}*"  # type: ignore[attr-defined]

    @property
    def csignature(self) -> str:
        return f"{self.inner.csignature}*"  # type: ignore[attr-defined]


class ReferenceType(QualifiedType):
    kind = QualifierKind.REFERENCE

    @property
    def is_ref(self) -> bool:
        return True

    @property
    def name(self) -> str:
        return f"{self.inner.name}&"  # type: ignore[attr-defined]

    @property
    def full_name(self) -> str:
        return f"{self.inner.full_name}&"  # type: ignore[attr-defined]

    @property
    def signature(self) -> str:
        return f"{self.inner.signature}&"  # type: ignore[attr-defined]

    @property
    def csignature(self) -> str:
        return f"{self.inner.csignature}&"  # type: ignore[attr-defined]


class ConstType(QualifiedType):
    """Const layer. It binds to the layer it wraps and renders as a prefix."""

    kind = QualifierKind.CONST

    def remove_const(self) -> TypeView:
        return self.inner

    @property
    def is_const(self) -> bool:
        return True

    @property
    def signature(self) -> str:
        return f"const {self.inner.signature}"  # type: ignore[attr-defined]

    @property
    def csignature(self) -> str:
        return f"const {self.inner.csignature}"  # type: ignore[attr-defined]
