"""Shared fixtures for the emitter tests."""

import pytest

from cglue.domain.models.entities import (
    Attribute,
    Class,
    Const,
    Enum,
    Namespace,
    Operation,
    Parameter,
    Struct,
)


@pytest.fixture
def model(root: Namespace) -> Namespace:
    """Root scope with a struct, a class hierarchy, constants and free functions."""
    double = root.type("double")
    int_type = root.type("int")

    point = root.add_type(Struct("Point"))
    point.add_attribute(Attribute("x", int_type, "RW"))
    point.add_operation(Operation("Point", None, Parameter("x", int_type)))
    point.add_operation(Operation("norm", double))
    point.add_operation(
        Operation("operator==", root.type("bool"), Parameter("other", root.type("const Point&")))
    )
    point.add_operation(Operation("copy", point))
    point.add_operation(Operation("origin", point, flags=("S",)))
    point.add_operation(Operation("ref", int_type.to_ref()))

    shape = root.add_type(Class("Shape"))
    shape.add_operation(Operation("area", double))
    root.add_type(Class("Circle", shape))

    root.add_operation(Operation("foo", int_type, Parameter("a", int_type)))
    root.add_operation(Operation("reset", root.type("void")))
    root.add_const(Const("ANSWER", 42))
    root.add_type(Enum("Color").add_value("RED").add_value("GREEN"))
    return root
