"""Path utilities for generated file names and identifiers."""

import re
import string

_VALID_FILE_CHARS = set(string.ascii_letters + string.digits + "_-.")
_VALID_IDENTIFIER_CHARS = set(string.ascii_letters + string.digits + "_")


def sanitize_for_filesystem(name: str, replacement: str = "_") -> str:
    """Sanitize a string to be safe for use as a filename."""
    if not name:
        return "unnamed"

    # C++ scope and template syntax first
    sanitized = name.replace("::", "__").replace("<", "_").replace(">", "_")
    sanitized = "".join(c if c in _VALID_FILE_CHARS else replacement for c in sanitized)

    if replacement:
        sanitized = re.sub(re.escape(replacement) + "{2,}", replacement * 2, sanitized)
        sanitized = sanitized.strip(replacement)

    if not sanitized:
        sanitized = "unnamed"

    if len(sanitized) > 200:
        sanitized = sanitized[:200].rstrip(replacement)

    return sanitized


def sanitize_identifier(name: str) -> str:
    """Turn an arbitrary name into a C identifier (for include guards)."""
    sanitized = "".join(c if c in _VALID_IDENTIFIER_CHARS else "_" for c in name.strip())
    sanitized = re.sub(r"_+", "_", sanitized).strip("_")
    if not sanitized:
        return "unnamed"
    if sanitized[0].isdigit():
        sanitized = f"_{sanitized}"
    return sanitized


def create_header_filename(library_name: str) -> str:
    """Create a safe header filename for a binding library."""
    return f"{sanitize_for_filesystem(library_name)}.h"


def create_source_filename(library_name: str) -> str:
    """Create a safe C++ source filename for a binding library."""
    return f"{sanitize_for_filesystem(library_name)}.cc"


def create_extern_filename(library_name: str) -> str:
    """Create a safe filename for the extern declarations of a binding library."""
    return f"{sanitize_for_filesystem(library_name)}_extern.txt"
