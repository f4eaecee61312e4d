#!/usr/bin/env python3

"""Parsing services for declaration text."""

from .text_parser import TextParser

__all__ = [
    "TextParser",
]
