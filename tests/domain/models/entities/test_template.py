#!/usr/bin/env python3

"""Unit tests for class templates and their instantiation cache."""

import pytest

from cglue.domain.models.entities import Class, Namespace, Operation, Struct, TemplateClass
from cglue.domain.models.errors import (
    BindgenError,
    InvalidQualifierCombinationError,
    TemplateArgumentError,
    UnresolvedNameError,
)


class Pair(TemplateClass):
    argument_count = (2, 2)

    def specialize(self, klass, arguments):
        first, second = arguments
        klass.add_operation(Operation("first", first))
        klass.add_operation(Operation("second", second))
        return klass


class Broken(TemplateClass):
    def specialize(self, klass, arguments):
        raise BindgenError("cannot specialize")


class TestTemplateClass:
    """Instantiation through type queries."""

    @pytest.fixture
    def pair(self, root: Namespace) -> Pair:
        return root.add_type(Pair("Pair"))

    @pytest.mark.unit
    def test_instantiation_is_cached(self, root: Namespace, pair: Pair):
        first = root.type("Pair<int,float>")
        assert isinstance(first, Class)
        assert root.type("Pair< int, float >") is first
        assert first.template is pair
        assert first.template_arguments == (root.type("int"), root.type("float"))
        assert first.full_name == "Pair<int,float>"
        assert first.cname == "cglue_Pair_T_int_C_float_E"

    @pytest.mark.unit
    def test_specializations_are_filled(self, root: Namespace, pair: Pair):
        klass = root.type("Pair<int,double*>")
        assert klass.operation("first").return_type.name == "int"
        assert klass.operation("second").return_type.signature == "double*"

    @pytest.mark.unit
    def test_bare_template_is_rejected(self, root: Namespace, pair: Pair):
        with pytest.raises(InvalidQualifierCombinationError):
            root.type("Pair")
        assert root.template("Pair") is pair

    @pytest.mark.unit
    @pytest.mark.parametrize("spelling", ["Pair*", "Pair&", "const Pair", "const Pair&", "Pair**"])
    def test_qualified_bare_template_is_rejected(self, root: Namespace, pair: Pair, spelling):
        with pytest.raises(InvalidQualifierCombinationError):
            root.type(spelling)
        with pytest.raises(InvalidQualifierCombinationError):
            root.find_type(spelling)
        with pytest.raises(InvalidQualifierCombinationError):
            root.type(spelling, raise_=False)

    @pytest.mark.unit
    def test_template_lookup(self, root: Namespace):
        assert root.template("int", raise_=False) is None
        with pytest.raises(UnresolvedNameError):
            root.template("int")

    @pytest.mark.unit
    def test_argument_count(self, root: Namespace, pair: Pair):
        with pytest.raises(TemplateArgumentError):
            root.type("Pair<int>")
        # Count errors are still qualifier errors
        with pytest.raises(InvalidQualifierCombinationError):
            root.type("Pair<int,int,int>")
        assert [t.name for t in root.types if t.name.startswith("Pair<")] == []

    @pytest.mark.unit
    def test_unknown_arguments(self, root: Namespace, pair: Pair):
        assert root.find_type("Pair<int,Nope>") is None
        with pytest.raises(UnresolvedNameError):
            root.type("Pair<int,Nope>")

    @pytest.mark.unit
    def test_failed_specialization_is_rolled_back(self, root: Namespace):
        root.add_type(Broken("Broken"))
        with pytest.raises(BindgenError, match="cannot specialize"):
            root.type("Broken<int>")
        assert "Broken<int>" not in [t.name for t in root.types]

    @pytest.mark.unit
    def test_unregistered_template(self, root: Namespace):
        loose = Pair("Loose")
        with pytest.raises(UnresolvedNameError):
            loose.instantiate([root.type("int"), root.type("int")])

    @pytest.mark.unit
    def test_templates_are_not_exported(self, root: Namespace, pair: Pair):
        klass = root.type("Pair<int,int>")
        exported = list(root.each_type())
        assert pair.ignore
        assert pair not in exported
        assert klass in exported

    @pytest.mark.unit
    def test_qualified_specializations(self, root: Namespace, pair: Pair):
        view = root.type("const Pair<int,int>&")
        assert view.is_const
        assert view.is_ref
        assert view.raw_type is root.type("Pair<int,int>")


class TestStdTypes:
    """Bindings for std::vector, std::map and std::string."""

    @pytest.mark.unit
    def test_vector(self, std_root: Namespace):
        vector = std_root.type("std::vector<int>")
        assert vector is std_root.type("std.vector<int>")
        assert vector.full_name == "std::vector<int>"
        names = {op.name for op in vector.operations}
        assert {"size", "push_back", "operator[]", "data", "swap", "resize"} <= names
        assert vector.has_constructor
        push_back = vector.operation("push_back")
        assert push_back.csignature == (
            "void cglue_std_vector_T_int_E_push_back(cglue_std_vector_T_int_E* cglue_obj, int other)"
        )

    @pytest.mark.unit
    def test_vector_argument_count(self, std_root: Namespace):
        with pytest.raises(TemplateArgumentError):
            std_root.type("std::vector<int,float>")

    @pytest.mark.unit
    def test_nested_vectors(self, std_root: Namespace):
        nested = std_root.type("std::vector<std::vector<int>>")
        assert nested.cname == "cglue_std_vector_T_std_vector_T_int_E_E"
        assert nested.operation("front").return_type is std_root.type("std::vector<int>")

    @pytest.mark.unit
    def test_arguments_resolve_in_the_querying_scope(self, std_root: Namespace):
        mat = std_root.add_type(Struct("cv::Mat"))
        cv = std_root.type("cv")
        vector = cv.type("std::vector<Mat>")
        assert vector.template_arguments == (mat,)
        assert vector is std_root.type("std::vector<cv::Mat>")
        assert cv.type("std::vector<Mat>*").raw_type is vector

    @pytest.mark.unit
    def test_used_std_namespace(self, std_root: Namespace):
        std_root.use_namespace(std_root.type("std"))
        assert std_root.type("vector<int>") is std_root.type("std::vector<int>")

    @pytest.mark.unit
    def test_map(self, std_root: Namespace):
        mapping = std_root.type("std::map<int,float>")
        get_keys = mapping.operation("getKeys")
        assert get_keys.return_type is std_root.type("std::vector<int>")
        assert "new std::vector<int>()" in get_keys.cbody
        assert mapping.operation("at").return_type.name == "float"
        with pytest.raises(TemplateArgumentError):
            std_root.type("std::map<int>")

    @pytest.mark.unit
    def test_string(self, std_root: Namespace):
        string = std_root.type("std::string")
        assert not string.is_template
        assert string.cname == "cglue_std_string"
        c_str = string.operation("c_str")
        assert c_str.csignature == "const char * cglue_std_string_c_str(cglue_std_string* cglue_obj)"
        assert len(string.overloads("string")) == 3
