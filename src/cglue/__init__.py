"""cglue - C glue code generator for C++ libraries.

Builds a model of a C++ API (scopes, classes, overloads, templates) and
emits a flat C interface for it.
"""

__version__ = "0.3.0"
