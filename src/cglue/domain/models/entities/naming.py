#!/usr/bin/env python3

"""Name handling for model entities.

Names are stored in C++ spelling (``a::b::C``); dotted paths such as
``a.b.C`` are accepted wherever a name is. The helpers here only split at
the top level, so ``std::map<a::K,b::V>`` has the basename
``map<a::K,b::V>`` and the namespace ``std``. Everything after the
``operator`` keyword is treated as opaque, which keeps ``operator<`` from
being read as a template bracket.
"""

import re

SCOPE_SEPARATOR = "::"

# Longest tokens first; the first match at a position wins.
OPERATOR_TOKENS: tuple[tuple[str, str], ...] = (
    ("()", "_fct"),
    ("[]", "_array"),
    ("<<=", "_lshift_set"),
    (">>=", "_rshift_set"),
    ("!=", "_unequal"),
    ("==", "_equal"),
    ("<=", "_less_equal"),
    (">=", "_greater_equal"),
    ("&&", "_logical_and"),
    ("||", "_logical_or"),
    ("&=", "_and_set"),
    ("|=", "_or_set"),
    ("^=", "_xor_set"),
    ("+=", "_add"),
    ("-=", "_sub"),
    ("*=", "_mult_set"),
    ("/=", "_div_set"),
    ("%=", "_mod_set"),
    ("<<", "_lshift"),
    (">>", "_rshift"),
    ("++", "_inc"),
    ("--", "_dec"),
    ("->", "_arrow"),
    ("+", "_plus"),
    ("-", "_minus"),
    ("*", "_mult"),
    ("/", "_div"),
    ("%", "_mod"),
    ("!", "_not"),
    ("&", "_and"),
    ("|", "_or"),
    ("^", "_xor"),
    ("~", "_compl"),
    ("<", "_less"),
    (">", "_greater"),
    ("=", "_assign"),
    (",", "_comma"),
)

TYPE_TOKENS: tuple[tuple[str, str], ...] = (
    ("::", "_"),
    ("<", "_T_"),
    (">", "_E"),
    (",", "_C_"),
    ("*", "_ptr"),
    ("&", "_ref"),
)

_OPERATOR_RE = re.compile(r"\boperator\b")
_OPERATOR_SYMBOLS_RE = re.compile(r"\boperator([^\w]+)")
_UNSIGNED_RE = re.compile(r"\bunsigned\s+")
_LEADING_CONST_RE = re.compile(r"^const\b\s*")
_CONST_RE = re.compile(r"\bconst\b\s*")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize(name: str) -> str:
    """Bring a user supplied name into canonical form.

    Dots become ``::``, ``unsigned X`` becomes ``uX`` and all whitespace is
    removed (``operator ==`` becomes ``operator==``).

    Raises:
        ValueError: If the name spans more than one line
    """
    name = str(name).strip()
    if "\n" in name:
        raise ValueError(f"name {name!r} spans multiple lines")
    name = _UNSIGNED_RE.sub("u", name)
    name = name.replace(".", SCOPE_SEPARATOR)
    return _WHITESPACE_RE.sub("", name)


def split_const(name: str) -> tuple[bool, str]:
    """Split a type query into its leading ``const`` and the normalized rest.

    A ``const`` anywhere else in the spelling is dropped.

    Returns:
        Tuple of (leading const present, normalized name)
    """
    text = str(name).strip()
    match = _LEADING_CONST_RE.match(text)
    if match:
        text = text[match.end():]
    text = _CONST_RE.sub("", text)
    return match is not None, normalize(text)


def _opaque_start(name: str) -> int:
    match = _OPERATOR_RE.search(name)
    return match.end() if match else len(name)


def _top_level_positions(name: str, token: str) -> list[int]:
    positions = []
    depth = 0
    end = _opaque_start(name)
    index = 0
    while index < end:
        char = name[index]
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        elif depth == 0 and name.startswith(token, index):
            positions.append(index)
            index += len(token)
            continue
        index += 1
    return positions


def split_scope(name: str) -> tuple[str, str | None]:
    """Split at the first top-level ``::``.

    Returns:
        (head, tail); tail is None when the name is not scoped
    """
    positions = _top_level_positions(name, SCOPE_SEPARATOR)
    if not positions:
        return name, None
    first = positions[0]
    return name[:first], name[first + len(SCOPE_SEPARATOR):]


def rsplit_scope(name: str) -> tuple[str | None, str]:
    """Split at the last top-level ``::``.

    Returns:
        (namespace, basename); namespace is None when the name is not scoped
    """
    positions = _top_level_positions(name, SCOPE_SEPARATOR)
    if not positions:
        return None, name
    last = positions[-1]
    return name[:last] or None, name[last + len(SCOPE_SEPARATOR):]


def basename(name: str) -> str:
    return rsplit_scope(normalize(name))[1]


def namespace_of(name: str) -> str | None:
    return rsplit_scope(normalize(name))[0]


def map_to_namespace(name: str, namespace: str | None) -> str:
    if namespace:
        return f"{namespace}{SCOPE_SEPARATOR}{name}"
    return name


def split_template(name: str) -> tuple[str, str] | None:
    """Split ``Base<Args>`` into ``("Base", "Args")``.

    Returns None unless the first ``<`` is closed by the final ``>``.
    """
    if _opaque_start(name) < len(name) or not name.endswith(">"):
        return None
    start = name.find("<")
    if start <= 0:
        return None
    depth = 0
    for index in range(start, len(name)):
        if name[index] == "<":
            depth += 1
        elif name[index] == ">":
            depth -= 1
            if depth == 0 and index != len(name) - 1:
                return None
    if depth != 0:
        return None
    return name[:start], name[start + 1:-1]


def split_template_arguments(arguments: str) -> list[str]:
    positions = _top_level_positions(arguments, ",")
    parts = []
    begin = 0
    for position in positions:
        parts.append(arguments[begin:position])
        begin = position + 1
    parts.append(arguments[begin:])
    return [part.strip() for part in parts if part.strip()]


def _replace_tokens(text: str, table: tuple[tuple[str, str], ...]) -> str:
    result = []
    index = 0
    while index < len(text):
        for token, replacement in table:
            if text.startswith(token, index):
                result.append(replacement)
                index += len(token)
                break
        else:
            result.append(text[index])
            index += 1
    return "".join(result)


def to_cname(name: str, prefix: str = "") -> str:
    """Mangle a (scoped, templated or operator) name into a C identifier.

    Examples:
        >>> to_cname("std::vector<MStruct*>", "cglue_")
        'cglue_std_vector_T_MStruct_ptr_E'
        >>> to_cname("Mat::operator==", "cglue_")
        'cglue_Mat_operator_equal'
    """
    name = normalize(name)
    match = _OPERATOR_SYMBOLS_RE.search(name)
    if match:
        symbols = _replace_tokens(match.group(1), OPERATOR_TOKENS)
        name = name[: match.start(1)] + symbols + name[match.end(1):]
    return prefix + _replace_tokens(name, TYPE_TOKENS)
