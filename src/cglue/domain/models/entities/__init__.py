#!/usr/bin/env python3

"""Entities of the binding model."""

from .attribute import Attribute, Parameter
from .constant import Const, Enum
from .data_type import DataType
from .entity import Entity, root_of
from .flags import WRITABLE_FLAGS, Flag
from .namespace import Namespace, TypeNotFoundHandler
from .naming import normalize, to_cname
from .operation import Getter, Operation, Setter
from .qualifiers import ConstType, PointerType, QualifiedType, QualifierKind, ReferenceType, TypeView
from .struct import Class, Struct
from .template import TemplateClass

__all__ = [
    "Attribute",
    "Class",
    "Const",
    "ConstType",
    "DataType",
    "Entity",
    "Enum",
    "Flag",
    "Getter",
    "Namespace",
    "Operation",
    "Parameter",
    "PointerType",
    "QualifiedType",
    "QualifierKind",
    "ReferenceType",
    "Setter",
    "Struct",
    "TemplateClass",
    "TypeNotFoundHandler",
    "TypeView",
    "WRITABLE_FLAGS",
    "normalize",
    "root_of",
    "to_cname",
]
