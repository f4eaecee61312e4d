#!/usr/bin/env python3

"""C header emission.

The header declares an opaque handle per exported struct or class, its
delete function, the constants and enumerations, and the export signature
of every operation, grouped by scope.
"""

from ....infrastructure.logging import get_logger, log_timing
from ....utils.path_utils import sanitize_identifier
from ...models.entities import Enum
from .base_generator import BaseGenerator

logger = get_logger(__name__)


class CHeaderGenerator(BaseGenerator):
    """Generates the C header of a binding library."""

    def generate(self, library_name: str) -> str:  # type: ignore[override]
        return self.generate_header(library_name)

    @log_timing
    def generate_header(self, library_name: str) -> str:
        """Generate the C header.

        Args:
            library_name: Library name, used for the include guard

        Returns:
            Complete header file as string
        """
        guard = f"{sanitize_identifier(library_name).upper()}_H"
        prefix = self.cprefix
        lines = [
            f"#ifndef {guard}",
            f"#define {guard}",
            "",
            "#include <stdbool.h>",
            "#include <stddef.h>",
            "",
            "#ifdef __cplusplus",
            'extern "C"',
            "{",
            "#endif",
            "",
            "// error handling",
            f"const char* {prefix}get_last_error();",
            f"bool {prefix}has_error();",
            f"void {prefix}clear_error();",
        ]

        lines.extend(self._generate_types())
        lines.extend(self._generate_enums())
        lines.extend(self._generate_consts())
        lines.extend(self._generate_operations())

        lines.extend(
            [
                "",
                "#ifdef __cplusplus",
                "}",
                "#endif",
                "",
                f"#endif // {guard}",
                "",
            ]
        )
        logger.debug(f"Generated header for {library_name} ({len(lines)} lines)")
        return "\n".join(lines)

    def _generate_types(self) -> list[str]:
        lines = []
        for data_type in self.root.each_type():
            if data_type.typedef:
                lines.append(f"typedef {data_type.typedef} {data_type.cname};")
        for struct in self.exported_structs():
            lines.extend(
                [
                    "",
                    f"// wrapper for {struct.full_name}",
                    f"typedef struct {struct.cname} {struct.cname};",
                    f"void {struct.cdelete_method}({struct.cname}* obj);",
                ]
            )
        return lines

    def _generate_enums(self) -> list[str]:
        lines = []
        for data_type in self.root.each_type():
            if not isinstance(data_type, Enum):
                continue
            lines.extend(["", f"// enum {data_type.full_name}", f"{data_type.csignature};"])
            for name, value in data_type.resolved_values():
                lines.append(f"static const int {data_type.value_cname(name)} = {value};")
        return lines

    def _generate_consts(self) -> list[str]:
        lines = []
        for container in self.root.each_container():
            consts = list(container.each_const())
            if not consts:
                continue
            lines.extend(["", f"// constants for {self.scope_label(container)}"])
            lines.extend(f"static {const.csignature};" for const in consts)
        return lines

    def _generate_operations(self) -> list[str]:
        lines = []
        for container, operations in self.exported_operations():
            lines.extend(["", f"// methods for {self.scope_label(container)}"])
            lines.extend(f"{operation.csignature};" for operation in operations)
        return lines
