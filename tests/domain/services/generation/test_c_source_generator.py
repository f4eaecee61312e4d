#!/usr/bin/env python3

"""Tests for the C++ wrapper emitter."""

import pytest

from cglue.domain.models.entities import Namespace
from cglue.domain.services.generation import CSourceGenerator


@pytest.fixture
def generator(model: Namespace) -> CSourceGenerator:
    return CSourceGenerator(model)


def body_of(generator: CSourceGenerator, operation) -> list[str]:
    """Wrapper lines without indentation."""
    return [line.strip() for line in generator.operation_wrapper(operation)]


class TestSourceLayout:
    """Includes, error buffer, conversions and destructors."""

    @pytest.mark.unit
    def test_includes(self, generator: CSourceGenerator):
        source = generator.generate_source("shapes.h", ["<opencv2/core.hpp>", "extra.h"])
        lines = source.splitlines()
        assert lines[0] == '#include "shapes.h"'
        assert "#include <opencv2/core.hpp>" in lines
        assert '#include "extra.h"' in lines

    @pytest.mark.unit
    def test_error_buffer(self, generator: CSourceGenerator):
        source = generator.generate("shapes.h")
        assert "static char last_error_message[255] = {0};" in source
        assert "const char* cglue_get_last_error() { return last_error_message; }" in source
        assert "void cglue_clear_error() { last_error_message[0] = '\\0'; }" in source

    @pytest.mark.unit
    def test_conversions(self, generator: CSourceGenerator):
        source = generator.generate_source("shapes.h")
        assert (
            "inline Point* fromC(cglue_Point* ptr) { return reinterpret_cast<Point*>(ptr); }"
            in source
        )
        assert (
            "inline const cglue_Circle* toC(const Circle* ptr) "
            "{ return reinterpret_cast<const cglue_Circle*>(ptr); }" in source
        )

    @pytest.mark.unit
    def test_delete_functions(self, generator: CSourceGenerator):
        source = generator.generate_source("shapes.h")
        assert "void cglue_delete_Point(cglue_Point* obj)\n{\n    delete fromC(obj);\n}" in source

    @pytest.mark.unit
    def test_every_operation_is_wrapped(self, generator: CSourceGenerator):
        source = generator.generate_source("shapes.h")
        for _scope, operations in generator.exported_operations():
            for operation in operations:
                assert f"\n{operation.csignature}\n{{" in source

    @pytest.mark.unit
    def test_wrap_include(self):
        assert CSourceGenerator.wrap_include("<vector>") == "#include <vector>"
        assert CSourceGenerator.wrap_include("a/b.h") == '#include "a/b.h"'


class TestOperationWrapper:
    """Wrapper bodies per kind of operation."""

    @pytest.mark.unit
    def test_instance_method(self, generator: CSourceGenerator, model: Namespace):
        lines = generator.operation_wrapper(model.type("Point").operation("norm"))
        assert lines == [
            "// operation wrapper for double Point::norm()",
            "double cglue_Point_norm(cglue_Point* cglue_obj)",
            "{",
            "    try",
            "    {",
            "        Point *cglue_obj_ = fromC(cglue_obj);",
            "        return cglue_obj_->norm();",
            "    }",
            "    catch(std::exception &error)",
            "    { strncpy(&last_error_message[0], error.what(), 254); }",
            "    catch(...)",
            '    { strncpy(&last_error_message[0], "Unknown Exception", 254); }',
            "    return (double) 0;",
            "}",
        ]

    @pytest.mark.unit
    def test_free_function(self, generator: CSourceGenerator, model: Namespace):
        lines = body_of(generator, model.operation("foo"))
        assert "return foo(a);" in lines
        assert lines[-2:] == ["return (int) 0;", "}"]

    @pytest.mark.unit
    def test_void_function(self, generator: CSourceGenerator, model: Namespace):
        lines = body_of(generator, model.operation("reset"))
        assert "reset();" in lines
        assert not any(line.startswith("return") for line in lines)

    @pytest.mark.unit
    def test_constructor(self, generator: CSourceGenerator, model: Namespace):
        lines = body_of(generator, model.type("Point").operation("Point"))
        assert "return toC(new Point(x));" in lines
        assert "return NULL;" in lines

    @pytest.mark.unit
    def test_attribute_accessors(self, generator: CSourceGenerator, model: Namespace):
        point = model.type("Point")
        getter = body_of(generator, point.operation("get_x"))
        assert getter[0] == "// operation wrapper for Point.x"
        assert "return cglue_obj_->x;" in getter

        setter = body_of(generator, point.operation("set_x"))
        assert "cglue_obj_->x = value;" in setter
        assert setter[-1] == "}"
        assert not any(line.startswith("return") for line in setter)

    @pytest.mark.unit
    def test_binary_operator(self, generator: CSourceGenerator, model: Namespace):
        lines = body_of(generator, model.type("Point").operation("operator=="))
        assert "const Point *other_ = fromC(other);" in lines
        assert "return *cglue_obj_ == *other_;" in lines

    @pytest.mark.unit
    def test_struct_returned_by_value(self, generator: CSourceGenerator, model: Namespace):
        lines = body_of(generator, model.type("Point").operation("copy"))
        assert "return toC(new Point(cglue_obj_->copy()));" in lines
        assert lines[-2] == "return NULL;"

    @pytest.mark.unit
    def test_static_method(self, generator: CSourceGenerator, model: Namespace):
        lines = body_of(generator, model.type("Point").operation("origin"))
        assert "return toC(new Point(Point::origin()));" in lines
        assert not any("fromC" in line for line in lines)

    @pytest.mark.unit
    def test_basic_reference_return(self, generator: CSourceGenerator, model: Namespace):
        lines = body_of(generator, model.type("Point").operation("ref"))
        assert "return cglue_obj_->ref();" in lines
        assert lines[-3:] == ["static int invalid;", "return invalid;", "}"]

    @pytest.mark.unit
    def test_inherited_method_calls_declaring_class(
        self, generator: CSourceGenerator, model: Namespace
    ):
        lines = body_of(generator, model.type("Circle").operation("area"))
        assert lines[1] == "double cglue_Circle_area(cglue_Circle* cglue_obj)"
        assert "Circle *cglue_obj_ = fromC(cglue_obj);" in lines
        assert "return cglue_obj_->Shape::area();" in lines

    @pytest.mark.unit
    def test_custom_invalid_value(self, generator: CSourceGenerator, model: Namespace):
        model.type("double").invalid_value = "NAN"
        lines = body_of(generator, model.type("Point").operation("norm"))
        assert lines[-2] == "return (double) NAN;"

    @pytest.mark.unit
    def test_custom_body(self, std_root: Namespace):
        mapping = std_root.type("std::map<int,float>")
        generator = CSourceGenerator(std_root)
        get_keys = mapping.operation("getKeys")
        lines = generator.operation_wrapper(get_keys)
        for statement in get_keys.cbody.splitlines():
            assert f"        {statement}" in lines
