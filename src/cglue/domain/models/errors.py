#!/usr/bin/env python3

"""Exceptions raised by the binding model and its front ends.

Every model error derives from :class:`BindgenError`, so callers that drive a
whole declaration file can catch one type. Checks run before any container is
mutated; a raised error never leaves a half-registered entity behind.
"""


class BindgenError(Exception):
    """Base class for all binding model errors."""


class DuplicateDeclarationError(BindgenError):
    """A name is already registered in the target scope."""


class UnresolvedNameError(BindgenError, LookupError):
    """A type, constant or operation could not be found."""


class InvalidQualifierCombinationError(BindgenError):
    """A type spelling that the qualifier model cannot express.

    Raised for pointer/reference suffix mixes such as ``int*&`` and for
    templates used without template arguments.
    """


class TemplateArgumentError(InvalidQualifierCombinationError):
    """A template was instantiated with the wrong number of arguments."""


class InvalidFlagError(BindgenError, ValueError):
    """A flag that is not valid for the entity kind it was given to."""


class SelfInheritanceError(BindgenError):
    """A class was made its own (direct or indirect) parent."""


class MisparsedDefaultValueError(BindgenError):
    """A parameter default value with unbalanced brackets."""


class DeclarationParseError(BindgenError):
    """A declaration block of the text front end could not be applied.

    Attributes:
        line_number: First line of the failing block (1-based)
        block: Raw text of the failing block
        source: Name of the input the block came from
    """

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        block: str | None = None,
        source: str | None = None,
    ):
        super().__init__(message)
        self.line_number = line_number
        self.block = block
        self.source = source

    def __str__(self) -> str:
        message = super().__str__()
        if self.line_number is None:
            return message
        return f"{self.source or '<input>'}:{self.line_number}: {message}"
