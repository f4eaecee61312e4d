"""Utility helpers."""

from .path_utils import (
    create_header_filename,
    create_source_filename,
    sanitize_for_filesystem,
    sanitize_identifier,
)

__all__ = [
    "create_header_filename",
    "create_source_filename",
    "sanitize_for_filesystem",
    "sanitize_identifier",
]
