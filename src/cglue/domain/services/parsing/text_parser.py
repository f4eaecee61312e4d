#!/usr/bin/env python3

"""Front end for the line based declaration format.

A declaration block starts at a line without leading whitespace; the
indented lines that follow belong to it::

    const cv.CV_8U 0
    const cv.CV_16U /Extern
    class cv.Mat : cv.Base
     int rows /RW
    struct cv.Point /Simple
     int x /RW
    enum cv.Color
     RED 0
    cv.Mat.Mat
     int rows
     int cols
    cv.Mat.at double =at_double /S
     int row 0

Operation headers read ``name [return_type] [=alias] [/flag ...]``; a
missing return type declares a constructor and ``explicit`` in its place an
explicit constructor. A final line holding only a number (a declaration
count some producers append) is ignored.
"""

import re
from pathlib import Path

from ....infrastructure.config.model_config import ModelConfig
from ....infrastructure.logging import ProgressTracker, get_logger, log_timing
from ...models.entities import (
    Attribute,
    Class,
    Const,
    Enum,
    Flag,
    Namespace,
    Operation,
    Parameter,
    Struct,
    TypeNotFoundHandler,
)
from ...models.entities.naming import normalize, rsplit_scope
from ...models.entities.qualifiers import TypeView
from ...models.errors import (
    BindgenError,
    DeclarationParseError,
    DuplicateDeclarationError,
    MisparsedDefaultValueError,
    UnresolvedNameError,
)

logger = get_logger(__name__)

_FLAG_RE = re.compile(r"(\w*)(.*)")
_STD_VECTOR_RE = re.compile(r"(.?)std::vector<(.*)>")
_BRACKETS = {")": "(", "]": "[", "}": "{"}
_CONST_FLAG_RE = re.compile(r" /(?=\w)")


class TextParser:
    """Reads declaration text into a root scope.

    A block that cannot be applied is logged and recorded in ``errors``;
    parsing continues with the next block unless ``strict`` is set.
    """

    def __init__(
        self,
        root: Namespace | None = None,
        config: ModelConfig | None = None,
        strict: bool = False,
    ):
        """Initialize the parser.

        Args:
            root: Scope to parse into (a fresh root when omitted)
            config: Model configuration for a fresh root
            strict: Raise on the first failing block instead of recording it
        """
        self.root = root if root is not None else Namespace.create_root(config)
        self.strict = strict
        self.errors: list[DeclarationParseError] = []
        self.progress = ProgressTracker(logger)

    def on_type_not_found(self, handler: TypeNotFoundHandler | None) -> None:
        self.root.on_type_not_found(handler)

    @log_timing
    def parse_file(self, path: Path) -> Namespace:
        return self.parse(path.read_text(encoding="utf-8"), source=str(path))

    @log_timing
    def parse(self, text: str, source: str = "<string>") -> Namespace:
        """Apply every declaration block of ``text`` to the root scope.

        Returns:
            The root scope

        Raises:
            DeclarationParseError: On the first failing block, in strict mode
        """
        blocks = self.split(text)
        if blocks and blocks[-1][1].strip().isdigit():
            blocks.pop()

        with self.progress.track_source(source):
            for line_number, block in blocks:
                try:
                    self.parse_block(line_number, block)
                except (BindgenError, ValueError) as error:
                    self._record_failure(error, line_number, block, source)
                else:
                    self.progress.count_declaration()
        return self.root

    def _record_failure(
        self, error: Exception, line_number: int, block: str, source: str
    ) -> None:
        if isinstance(error, DeclarationParseError) and error.line_number is not None:
            failure = error
            failure.source = source
            failure.block = failure.block or block
        else:
            failure = DeclarationParseError(str(error), line_number, block, source)
        self.progress.count_failure()
        if self.strict:
            raise failure from error
        logger.error(f"Parsing error: {failure}")
        logger.debug(f"Failing block:\n{block}")
        self.errors.append(failure)

    @staticmethod
    def split(text: str) -> list[tuple[int, str]]:
        """Split text into (first line number, block) pairs; blank lines are skipped."""
        blocks: list[tuple[int, list[str]]] = []
        for line_number, line in enumerate(text.splitlines(), 1):
            if not line.strip():
                continue
            if line[0] in " \t" and blocks:
                blocks[-1][1].append(line)
            else:
                blocks.append((line_number, [line]))
        return [(number, "\n".join(lines)) for number, lines in blocks]

    def parse_block(self, line_number: int, block: str) -> object:
        first = block.split(None, 1)[0]
        if first == "const":
            return self.parse_const(line_number, block)
        if first == "class":
            return self.parse_class(line_number, block)
        if first == "struct":
            return self.parse_struct(line_number, block)
        if first == "enum":
            return self.parse_enum(line_number, block)
        return self.parse_operation(line_number, block)

    # helpers

    @staticmethod
    def normalize_flags(line_number: int, flags: list[str]) -> list[str]:
        result = []
        for flag in flags:
            match = _FLAG_RE.match(flag.strip())
            if match is None or not match.group(1):
                raise DeclarationParseError(f"cannot parse flag {flag!r}", line_number)
            if match.group(2).strip():
                logger.debug(f"input line {line_number}: ignoring flag suffix {match.group(2)}")
            result.append(match.group(1))
        return result

    @staticmethod
    def normalize_default_value(value: str) -> str:
        """Rewrite ``std::vector<T>`` into ``vector_T``.

        Raises:
            MisparsedDefaultValueError: If the brackets of the value are unbalanced
        """
        stack: list[str] = []
        for char in value:
            if char in "([{":
                stack.append(char)
            elif char in _BRACKETS:
                if not stack or stack.pop() != _BRACKETS[char]:
                    raise MisparsedDefaultValueError(f"unbalanced default value {value!r}")
        if stack:
            raise MisparsedDefaultValueError(f"unbalanced default value {value!r}")

        while True:
            rewritten = _STD_VECTOR_RE.sub(r"\1vector_\2", value)
            if rewritten == value:
                return value
            value = rewritten

    def find_type(self, owner: Namespace, type_name: str) -> TypeView:
        """Resolve a type spelled by the declaration format.

        Underscores may stand for scope separators (``cv_Mat`` for
        ``cv::Mat``); each split position is tried from the left.

        Raises:
            UnresolvedNameError: If the type cannot be found
            InvalidQualifierCombinationError: If it names a template without arguments
        """
        found = owner.find_type(type_name)
        if found is not None:
            return found

        parts = type_name.split("_")
        name = parts.pop(0)
        while parts:
            name = f"{name}::{parts.pop(0)}"
            candidate = f"{name}_{'_'.join(parts)}" if parts else name
            found = owner.find_type(candidate)
            if found is not None:
                return found

        return owner.type(type_name)  # type: ignore[return-value]

    def parameter(self, line_number: int, text: str, owner: Namespace) -> Parameter:
        fields, *flags = text.split(" /")
        elements = fields.split()
        if len(elements) < 2:
            raise DeclarationParseError(f"cannot parse parameter {text.strip()!r}", line_number)
        type_name, name, *default = elements
        default_value = self.normalize_default_value(" ".join(default))
        data_type = self.find_type(owner, type_name)
        return Parameter(
            name, data_type, default_value or None, *self.normalize_flags(line_number, flags)
        )

    def attribute(self, line_number: int, text: str, owner: Namespace) -> Attribute:
        fields, *flags = text.split(" /")
        elements = fields.split()
        if len(elements) < 2:
            raise DeclarationParseError(f"cannot parse attribute {text.strip()!r}", line_number)
        data_type = self.find_type(owner, elements[0])
        return Attribute(elements[1], data_type, *self.normalize_flags(line_number, flags))

    def _add_attributes(self, line_number: int, lines: list[str], owner: Struct) -> None:
        for offset, line in enumerate(lines, 1):
            owner.add_attribute(self.attribute(line_number + offset, line, owner))

    # declarations

    def parse_const(self, line_number: int, block: str) -> Const:
        if "\n" in block:
            raise DeclarationParseError(
                f"multi line constants are not supported: {block!r}", line_number
            )
        head, *flags = _CONST_FLAG_RE.split(block)
        flags = self.normalize_flags(line_number, flags)
        elements = head.split()
        extern = Flag.EXTERN.value in flags
        if len(elements) < 2 or (len(elements) < 3 and not extern):
            raise DeclarationParseError(f"not a constant: {block!r}", line_number)
        return self.root.add_const(Const(elements[1], " ".join(elements[2:]), *flags))

    def parse_class(self, line_number: int, block: str) -> Class:
        header, *lines = block.split("\n")
        declaration, _, parents = header.rstrip().partition(" : ")
        head, *flags = declaration.split(" /")
        name = head.split()[1]

        parent_classes = []
        for parent_name in (p.strip() for p in parents.split(",")):
            if not parent_name:
                continue
            parent = self.root.find_type(parent_name)
            if parent is None:
                logger.debug(f"input line {line_number}: adding unknown parent class {parent_name}")
                parent = self.root.add_type(Class(parent_name))
            elif not isinstance(parent, Class):
                raise UnresolvedNameError(f"parent {parent_name} of {name} is not a class")
            parent_classes.append(parent)

        existing = self.root.find_type(name, search_owner=False)
        if existing is None:
            klass = self.root.add_type(
                Class(name, flags=tuple(self.normalize_flags(line_number, flags)))
            )
        elif isinstance(existing, Class):
            declared = [p.full_name for p in existing.parent_classes]
            requested = [p.full_name for p in parent_classes]  # type: ignore[attr-defined]
            if declared and declared != requested:
                raise DuplicateDeclarationError(
                    f"Cannot add class {existing.full_name}; it is already registered "
                    f"with the parents {', '.join(declared)}"
                )
            klass = existing
            if flags:
                klass.add_flag(*self.normalize_flags(line_number, flags))
        else:
            raise DuplicateDeclarationError(
                f"Cannot add class {name}. A different type {existing.full_name} "  # type: ignore[attr-defined]
                "is already registered"
            )

        for parent in parent_classes:
            if klass.parent_class(parent.name) is None:  # type: ignore[attr-defined]
                klass.add_parent(parent)  # type: ignore[attr-defined, arg-type]
        self._add_attributes(line_number, lines, klass)  # type: ignore[arg-type]
        return klass  # type: ignore[return-value]

    def parse_struct(self, line_number: int, block: str) -> Struct:
        header, *lines = block.split("\n")
        head, *flags = header.split(" /")
        name = head.split()[1]
        struct = self.root.add_type(Struct(name, *self.normalize_flags(line_number, flags)))
        self._add_attributes(line_number, lines, struct)  # type: ignore[arg-type]
        return struct  # type: ignore[return-value]

    def parse_enum(self, line_number: int, block: str) -> Enum:
        header, *lines = block.split("\n")
        enum = Enum(header.split()[1])
        for line in lines:
            elements = line.split()
            enum.add_value(elements[0], " ".join(elements[1:]) or None)
        return self.root.add_type(enum)  # type: ignore[return-value]

    def parse_operation(self, line_number: int, block: str) -> Operation:
        header, *lines = block.split("\n")
        head, *flags = header.split(" /")
        elements = head.split()
        name = elements.pop(0)
        return_type_name = elements.pop(0) if elements else None
        if return_type_name == "()":
            name += return_type_name
            return_type_name = elements.pop(0) if elements else None

        alias_name = elements.pop(0) if elements else None
        if alias_name is not None:
            if not alias_name.startswith("="):
                raise DeclarationParseError(f"cannot parse {header!r}", line_number)
            alias_name = alias_name.lstrip("=")

        flags = self.normalize_flags(line_number, flags)
        if return_type_name == "explicit":
            flags.append(Flag.EXPLICIT.value)
            return_type_name = None

        scope_name, _ = rsplit_scope(normalize(name))
        owner: Namespace = self.root.type(scope_name) if scope_name else self.root  # type: ignore[assignment]
        return_type = self.find_type(owner, return_type_name) if return_type_name else None
        parameters = [
            self.parameter(line_number + offset, line, owner) for offset, line in enumerate(lines, 1)
        ]

        operation = Operation(name, return_type, *parameters, flags=flags)
        if alias_name:
            operation.alias = alias_name
        return owner.add_operation(operation)
