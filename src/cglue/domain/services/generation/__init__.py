#!/usr/bin/env python3

"""Generation services for the C binding files."""

from .base_generator import BaseGenerator
from .c_header_generator import CHeaderGenerator
from .c_source_generator import CSourceGenerator
from .extern_generator import ExternGenerator

__all__ = [
    "BaseGenerator",
    "CHeaderGenerator",
    "CSourceGenerator",
    "ExternGenerator",
]
