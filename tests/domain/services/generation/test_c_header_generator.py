#!/usr/bin/env python3

"""Tests for the C header emitter."""

import pytest

from cglue.domain.models.entities import Namespace
from cglue.domain.services.generation import CHeaderGenerator
from cglue.infrastructure.config import ModelConfig


class TestCHeaderGenerator:
    """Header layout and declarations."""

    @pytest.fixture
    def header(self, model: Namespace) -> str:
        return CHeaderGenerator(model).generate_header("my-lib")

    @pytest.fixture
    def header_lines(self, header: str) -> list[str]:
        return header.splitlines()

    @pytest.mark.unit
    def test_rejects_non_namespace_root(self):
        with pytest.raises(TypeError):
            CHeaderGenerator("root")  # type: ignore[arg-type]

    @pytest.mark.unit
    def test_include_guard(self, header_lines: list[str]):
        assert header_lines[0] == "#ifndef MY_LIB_H"
        assert header_lines[1] == "#define MY_LIB_H"
        assert header_lines[-1] == "#endif // MY_LIB_H"

    @pytest.mark.unit
    def test_extern_c_block(self, header: str):
        assert '#ifdef __cplusplus\nextern "C"\n{\n#endif' in header
        assert "#ifdef __cplusplus\n}\n#endif" in header

    @pytest.mark.unit
    def test_error_api(self, header_lines: list[str]):
        assert "const char* cglue_get_last_error();" in header_lines
        assert "bool cglue_has_error();" in header_lines
        assert "void cglue_clear_error();" in header_lines

    @pytest.mark.unit
    def test_opaque_handles(self, header_lines: list[str]):
        assert "typedef struct cglue_Point cglue_Point;" in header_lines
        assert "void cglue_delete_Point(cglue_Point* obj);" in header_lines
        assert "typedef struct cglue_Circle cglue_Circle;" in header_lines
        assert not any("typedef struct cglue_int" in line for line in header_lines)

    @pytest.mark.unit
    def test_enums(self, header_lines: list[str]):
        index = header_lines.index("// enum Color")
        assert header_lines[index + 1 : index + 4] == [
            "typedef int cglue_Color;",
            "static const int cglue_Color_RED = 0;",
            "static const int cglue_Color_GREEN = 1;",
        ]

    @pytest.mark.unit
    def test_constants(self, header_lines: list[str]):
        index = header_lines.index("// constants for global scope")
        assert header_lines[index + 1] == "static const int cglue_ANSWER = 42;"

    @pytest.mark.unit
    def test_operations_grouped_by_scope(self, header_lines: list[str]):
        index = header_lines.index("// methods for global scope")
        assert header_lines[index + 1 : index + 3] == [
            "int cglue_foo(int a);",
            "void cglue_reset();",
        ]
        point = header_lines.index("// methods for Point")
        assert point > index
        assert "double cglue_Point_norm(cglue_Point* cglue_obj);" in header_lines
        assert "cglue_Point* cglue_Point_Point(int x);" in header_lines
        assert "void cglue_Point_set_x(cglue_Point* cglue_obj, int value);" in header_lines

    @pytest.mark.unit
    def test_inherited_operations_are_exported_per_class(self, header_lines: list[str]):
        circle = header_lines.index("// methods for Circle")
        assert header_lines[circle + 1] == "double cglue_Circle_area(cglue_Circle* cglue_obj);"

    @pytest.mark.unit
    def test_templates_are_skipped(self, std_root: Namespace):
        std_root.type("std::vector<int>")
        header = CHeaderGenerator(std_root).generate_header("std")
        assert "typedef struct cglue_std_vector_T_int_E cglue_std_vector_T_int_E;" in header
        assert "typedef struct cglue_std_string cglue_std_string;" in header
        assert "// methods for std::vector<int>" in header
        assert "cglue_std_vector " not in header

    @pytest.mark.unit
    def test_custom_prefix(self, model_config: ModelConfig):
        root = Namespace.create_root(model_config)
        root.add_type(Namespace("cv"))
        header = CHeaderGenerator(root).generate("ocv")
        assert "const char* ocv_get_last_error();" in header
        assert "// methods for" not in header

    @pytest.mark.unit
    def test_generate_is_generate_header(self, model: Namespace):
        generator = CHeaderGenerator(model)
        assert generator.generate("my-lib") == generator.generate_header("my-lib")
