#!/usr/bin/env python3

"""Bindings for ``std::vector``, ``std::map`` and ``std::string``."""

from ....infrastructure.logging import get_logger
from ...models.entities import Class, Flag, Namespace, Operation, Parameter, TemplateClass
from ...models.entities.qualifiers import TypeView

logger = get_logger(__name__)


class StdVector(TemplateClass):
    """``std::vector<T>`` with the usual sequence operations."""

    argument_count = (1, 1)

    def specialize(self, klass: Class, arguments: list[TypeView]) -> Class:
        (element,) = arguments
        size_t = self.type("size_t")
        void = self.type("void")

        klass.add_operation(Operation(klass.name))
        klass.add_operation(Operation(klass.name, None, Parameter("other", klass)))
        klass.add_operation(
            Operation(
                "resize",
                void,
                Parameter("size", size_t),
                Parameter("val", element, f"{element.full_name}()"),  # type: ignore[attr-defined]
            )
        )
        klass.add_operation(Operation("size", size_t))
        klass.add_operation(Operation("capacity", size_t))
        klass.add_operation(Operation("empty", self.type("bool")))
        klass.add_operation(Operation("reserve", void, Parameter("size", size_t)))
        klass.add_operation(Operation("operator[]", element, Parameter("size", size_t)))
        klass.add_operation(Operation("at", element, Parameter("size", size_t)))
        klass.add_operation(Operation("front", element))
        klass.add_operation(Operation("back", element))
        klass.add_operation(Operation("data", self.type("void*")))
        klass.add_operation(Operation("push_back", void, Parameter("other", element)))
        klass.add_operation(Operation("pop_back", void))
        klass.add_operation(
            Operation("swap", void, Parameter("other", klass, None, Flag.IN_OUT))
        )
        return klass


class StdMap(TemplateClass):
    """``std::map<K, V[, Compare]>``; ``getKeys`` returns a ``std::vector<K>``."""

    argument_count = (2, 3)

    def specialize(self, klass: Class, arguments: list[TypeView]) -> Class:
        key, value = arguments[0], arguments[1]
        void = self.type("void")

        klass.add_operation(Operation(klass.name))
        klass.add_operation(Operation(klass.name, None, Parameter("other", klass.to_const())))
        klass.add_operation(Operation("size", self.type("size_t")))
        klass.add_operation(Operation("clear", void))
        klass.add_operation(Operation("empty", self.type("bool")))
        klass.add_operation(Operation("operator[]", value, Parameter("key_type", key)))
        klass.add_operation(Operation("at", value, Parameter("key_type", key)))
        klass.add_operation(Operation("erase", void, Parameter("key_type", key)))

        key_name = key.full_name  # type: ignore[attr-defined]
        value_name = value.full_name  # type: ignore[attr-defined]
        get_keys = klass.add_operation(
            Operation("getKeys", self.type(f"std::vector<{key_name}>"))
        )
        receiver = f"{self.context.receiver}_"
        get_keys.cbody = "\n".join(
            [
                f"auto keys = new std::vector<{key_name}>();",
                f"std::transform(std::begin(*{receiver}), std::end(*{receiver}), "
                "std::back_inserter(*keys),",
                f"    [](std::pair<{key_name},{value_name}> const& pair) {{ return pair.first; }});",
                "return toC(keys);",
            ]
        )
        return klass


class StdString(Class):
    """``std::string``; builtin types are looked up in ``root``."""

    def __init__(self, name: str, root: Namespace):
        super().__init__(name)
        size_t = root.type("size_t")
        void = root.type("void")

        self.add_operation(Operation(self.name))
        self.add_operation(Operation(self.name, None, Parameter("other", self)))
        self.add_operation(
            Operation(
                self.name,
                None,
                Parameter("str", root.type("c_string")),
                Parameter("size", size_t),
            )
        )
        self.add_operation(Operation("size", size_t))
        self.add_operation(Operation("length", size_t))
        self.add_operation(Operation("operator[]", root.type("char"), Parameter("idx", size_t)))
        self.add_operation(Operation("c_str", root.type("const_c_string")))
        self.add_operation(Operation("empty", root.type("bool")))
        self.add_operation(Operation("clear", void))
        self.add_operation(Operation("compare", root.type("int"), Parameter("other", self)))
        self.add_operation(Operation("swap", void, Parameter("other", self, None, Flag.IN_OUT)))


def register_std_types(root: Namespace) -> Namespace:
    """Register ``std::vector``, ``std::map`` and ``std::string`` below ``root``.

    Returns:
        The ``std`` namespace
    """
    std = root.add_namespace("std")
    std.add_type(StdVector("vector"))
    std.add_type(StdMap("map"))
    std.add_type(StdString("string", root))
    logger.debug("Registered std::vector, std::map and std::string")
    return std
