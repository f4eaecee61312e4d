"""Domain models: the binding entities and their errors."""

from .entities import (
    Attribute,
    Class,
    Const,
    DataType,
    Enum,
    Flag,
    Namespace,
    Operation,
    Parameter,
    Struct,
    TemplateClass,
)
from .errors import (
    BindgenError,
    DeclarationParseError,
    DuplicateDeclarationError,
    InvalidFlagError,
    InvalidQualifierCombinationError,
    MisparsedDefaultValueError,
    SelfInheritanceError,
    TemplateArgumentError,
    UnresolvedNameError,
)

__all__ = [
    "Attribute",
    "BindgenError",
    "Class",
    "Const",
    "DataType",
    "DeclarationParseError",
    "DuplicateDeclarationError",
    "Enum",
    "Flag",
    "InvalidFlagError",
    "InvalidQualifierCombinationError",
    "MisparsedDefaultValueError",
    "Namespace",
    "Operation",
    "Parameter",
    "SelfInheritanceError",
    "Struct",
    "TemplateArgumentError",
    "TemplateClass",
    "UnresolvedNameError",
]
