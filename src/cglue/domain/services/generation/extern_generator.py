#!/usr/bin/env python3

"""Extern declaration emission.

The output lists the structs, classes and constants of a binding model in
the declaration text format, each marked ``/Extern``. A second library
parses it first so it can use these types without exporting them again::

    class cv.Mat /Extern
    struct cv.Point /Extern
    const cv.CV_8U /Extern
"""

from ....infrastructure.logging import get_logger, log_timing
from ...models.entities import Class, Flag
from ...models.entities.naming import SCOPE_SEPARATOR
from .base_generator import BaseGenerator

logger = get_logger(__name__)


class ExternGenerator(BaseGenerator):
    """Generates the extern declarations of a binding library."""

    def generate(self) -> str:  # type: ignore[override]
        return self.generate_extern()

    @staticmethod
    def declaration_name(full_name: str) -> str:
        return full_name.replace(SCOPE_SEPARATOR, ".")

    @log_timing
    def generate_extern(self) -> str:
        """Generate the extern declarations.

        Template specializations are left out; a library using them
        instantiates its own from the registered templates.

        Returns:
            Declaration text, one line per type or constant
        """
        lines = []
        for struct in self.exported_structs():
            if getattr(struct, "template", None) is not None:
                continue
            keyword = "class" if isinstance(struct, Class) else "struct"
            lines.append(
                f"{keyword} {self.declaration_name(struct.full_name)} /{Flag.EXTERN.value}"
            )

        for const in self.root.each_const(recursive=True):
            lines.append(f"const {self.declaration_name(const.full_name)} /{Flag.EXTERN.value}")

        logger.debug(f"Collected {len(lines)} extern declarations")
        return "\n".join(lines) + "\n" if lines else ""
