#!/usr/bin/env python3

"""C++ source emission: the wrapper functions behind the C header.

Every exported operation becomes one ``extern "C"`` function that converts
its handle parameters back to C++ objects, performs the call inside a
try block and stores exception messages in a last-error buffer. On failure
the wrapper returns NULL for handles and the return type's invalid value
otherwise.
"""

from collections.abc import Sequence
from typing import Any

from ....infrastructure.logging import get_logger, log_timing
from ...models.entities import Operation, Parameter, Setter
from .base_generator import BaseGenerator

logger = get_logger(__name__)

ERROR_BUFFER_SIZE = 255


class CSourceGenerator(BaseGenerator):
    """Generates the C++ translation unit of a binding library."""

    def generate(self, header_name: str, includes: Sequence[str] = ()) -> str:  # type: ignore[override]
        return self.generate_source(header_name, includes)

    @log_timing
    def generate_source(self, header_name: str, includes: Sequence[str] = ()) -> str:
        """Generate the C++ source.

        Args:
            header_name: File name of the generated header
            includes: Headers of the wrapped library (``<a.h>`` or ``a.h``)

        Returns:
            Complete source file as string
        """
        prefix = self.cprefix
        lines = [
            f'#include "{header_name}"',
            "",
            "#include <algorithm>",
            "#include <cstring>",
            "#include <exception>",
            "#include <iterator>",
        ]
        lines.extend(self.wrap_include(include) for include in includes)
        lines.extend(
            [
                "",
                f"static char last_error_message[{ERROR_BUFFER_SIZE}] = {{0}};",
                "",
                f"const char* {prefix}get_last_error() {{ return last_error_message; }}",
                f"bool {prefix}has_error() {{ return last_error_message[0] != '\\0'; }}",
                f"void {prefix}clear_error() {{ last_error_message[0] = '\\0'; }}",
            ]
        )
        lines.extend(self._generate_conversions())
        lines.extend(self._generate_deletes())
        for _container, operations in self.exported_operations():
            for operation in operations:
                lines.append("")
                lines.extend(self.operation_wrapper(operation))
        lines.append("")
        return "\n".join(lines)

    @staticmethod
    def wrap_include(include: str) -> str:
        if include.startswith("<"):
            return f"#include {include}"
        return f'#include "{include}"'

    def _generate_conversions(self) -> list[str]:
        lines = []
        for struct in self.exported_structs():
            full, cname = struct.full_name, struct.cname
            lines.extend(
                [
                    "",
                    f"// conversions for {full}",
                    f"inline {full}* fromC({cname}* ptr) {{ return reinterpret_cast<{full}*>(ptr); }}",
                    f"inline const {full}* fromC(const {cname}* ptr) "
                    f"{{ return reinterpret_cast<const {full}*>(ptr); }}",
                    f"inline {cname}* toC({full}* ptr) {{ return reinterpret_cast<{cname}*>(ptr); }}",
                    f"inline const {cname}* toC(const {full}* ptr) "
                    f"{{ return reinterpret_cast<const {cname}*>(ptr); }}",
                ]
            )
        return lines

    def _generate_deletes(self) -> list[str]:
        lines = []
        for struct in self.exported_structs():
            lines.extend(
                [
                    "",
                    f"void {struct.cdelete_method}({struct.cname}* obj)",
                    "{",
                    "    delete fromC(obj);",
                    "}",
                ]
            )
        return lines

    # operation wrappers

    def operation_wrapper(self, operation: Operation) -> list[str]:
        """Render the wrapper function of one operation."""
        description = operation.signature
        if operation.is_attribute_accessor:
            description = f"{operation.owner.full_name}.{operation.attribute.name}"  # type: ignore[union-attr, attr-defined]
        body = [*self.wrap_parameters(operation), *self.wrap_call(operation)]
        lines = [
            f"// operation wrapper for {description}",
            operation.csignature,
            "{",
            "    try",
            "    {",
        ]
        lines.extend(f"        {line}" for line in body)
        lines.extend(
            [
                "    }",
                "    catch(std::exception &error)",
                f"    {{ strncpy(&last_error_message[0], error.what(), {ERROR_BUFFER_SIZE - 1}); }}",
                "    catch(...)",
                f'    {{ strncpy(&last_error_message[0], "Unknown Exception", {ERROR_BUFFER_SIZE - 1}); }}',
            ]
        )
        lines.extend(f"    {line}" for line in self.fallback_return(operation))
        lines.append("}")
        return lines

    @staticmethod
    def wrap_parameters(operation: Operation) -> list[str]:
        """Convert handle parameters back into C++ pointers."""
        lines = []
        for parameter in operation.cparameters:
            data_type: Any = parameter.type
            if data_type.is_basic_type:
                continue
            const = "const " if data_type.is_const else ""
            lines.append(
                f"{const}{data_type.raw_type.full_name} *{parameter.name}_ = fromC({parameter.name});"
            )
        return lines

    @staticmethod
    def call_arguments(parameters: Sequence[Parameter]) -> str:
        arguments = []
        for parameter in parameters:
            data_type: Any = parameter.type
            if data_type.is_basic_type:
                arguments.append(parameter.name)
            elif data_type.is_ptr:
                arguments.append(f"{parameter.name}_")
            else:
                arguments.append(f"*{parameter.name}_")
        return ", ".join(arguments)

    def wrap_call(self, operation: Operation) -> list[str]:
        """Statement(s) performing the wrapped call."""
        if operation.cbody is not None:
            return operation.cbody.splitlines()

        receiver = f"{operation.context.receiver}_"
        arguments = self.call_arguments(operation.parameters)
        return_type: Any = operation.return_type

        if operation.is_attribute_accessor:
            member = f"{receiver}->{operation.attribute.name}"  # type: ignore[attr-defined]
            if isinstance(operation, Setter):
                return [f"{member} = {arguments};"]
            if return_type.is_basic_type:
                return [f"return {member};"]
            if return_type.is_ptr:
                return [f"return toC({member});"]
            return [f"return toC(&{member});"]

        if operation.is_constructor:
            return [f"return toC(new {operation.owner.full_name}({arguments}));"]  # type: ignore[union-attr]

        if operation.is_instance_method and operation.is_operator and len(operation.parameters) == 1:
            expression = f"*{receiver} {operation.operator} {arguments}"
        elif operation.is_instance_method:
            expression = f"{receiver}->{operation.call_target}({arguments})"
        else:
            expression = f"{operation.call_target}({arguments})"

        if return_type.name == "void" and not return_type.is_ptr:
            return [f"{expression};"]
        if return_type.is_basic_type:
            return [f"return {expression};"]
        if return_type.is_ptr:
            return [f"return toC({expression});"]
        if return_type.is_ref:
            return [f"return toC(&{expression});"]
        return [f"return toC(new {return_type.raw_type.full_name}({expression}));"]

    @staticmethod
    def fallback_return(operation: Operation) -> list[str]:
        """Return statement reached after an exception was caught."""
        return_type: Any = operation.return_type
        if return_type is None or return_type.is_ptr or not return_type.is_basic_type:
            return ["return NULL;"]
        if return_type.is_ref:
            return [f"static {return_type.raw_type.cname} invalid;", "return invalid;"]
        if return_type.name == "void":
            return []
        return [f"return ({return_type.cname}) {return_type.invalid_value};"]
