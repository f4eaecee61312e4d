"""Ready-made bindings for standard library types."""

from .std_types import StdMap, StdString, StdVector, register_std_types

__all__ = ["StdMap", "StdString", "StdVector", "register_std_types"]
