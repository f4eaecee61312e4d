#!/usr/bin/env python3

"""Unit tests for the entity base class and model errors."""

import pytest

from cglue.domain.models.entities import DataType, Namespace, Operation, Struct, root_of
from cglue.domain.models.errors import DeclarationParseError
from cglue.infrastructure.config import DEFAULT_MODEL_CONFIG, ModelConfig


class TestEntity:
    """Names, ownership and context of model entities."""

    @pytest.mark.unit
    def test_unowned_entities_keep_their_namespace(self):
        entity = DataType("cv.Mat")
        assert entity.name == "Mat"
        assert entity.namespace == "cv"
        assert entity.full_name == "cv::Mat"

    @pytest.mark.unit
    def test_empty_names_are_rejected(self):
        with pytest.raises(ValueError):
            DataType("  ")

    @pytest.mark.unit
    def test_namespace_follows_the_owner(self, root: Namespace):
        inner = root.add_type(Struct("a::Inner"))
        a = root.type("a")
        a.rename("b")
        assert inner.full_name == "b::Inner"
        assert root.type("b::Inner") is inner

    @pytest.mark.unit
    def test_context_comes_from_the_root(self, model_config: ModelConfig):
        root = Namespace.create_root(model_config)
        inner = root.add_type(Struct("a::Inner"))
        assert inner.context is model_config
        assert DataType("loose").context is DEFAULT_MODEL_CONFIG
        assert root_of(inner) is root
        assert root_of(DataType("loose")) is None

    @pytest.mark.unit
    def test_copy_for(self, root: Namespace):
        point = root.add_type(Struct("Point"))
        other = root.add_type(Struct("Other"))
        operation = point.add_operation(Operation("norm", root.type("double")))
        copy = operation.copy_for(other)
        assert copy.owner is other
        assert copy.full_name == "Other::norm"
        assert operation.owner is point
        assert not other.has_operation("norm")

    @pytest.mark.unit
    def test_flags(self):
        data_type = DataType("Ext")
        assert not data_type.is_extern
        data_type.add_flag("Extern")
        assert data_type.is_extern
        assert data_type.has_flag("Extern")

    @pytest.mark.unit
    def test_str_and_repr(self, root: Namespace):
        operation = root.add_operation(Operation("foo", root.type("int")))
        assert str(operation) == "int foo()"
        assert repr(operation) == "<Operation foo>"


class TestDeclarationParseError:
    """Error locations of the text front end."""

    @pytest.mark.unit
    def test_location_in_message(self):
        error = DeclarationParseError("bad block", 12, "foo bar", "api.txt")
        assert str(error) == "api.txt:12: bad block"
        assert error.block == "foo bar"

    @pytest.mark.unit
    def test_without_location(self):
        assert str(DeclarationParseError("bad block")) == "bad block"
        assert str(DeclarationParseError("bad", 3)) == "<input>:3: bad"
