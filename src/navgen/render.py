"""Render generation units as Kotlin source files."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from navgen.model import Annotation, FunctionSpec, GenerationUnit, ParameterSpec
from navgen.types import TargetType


INDENT = "    "
MAX_LINE_WIDTH = 100
IMPORTABLE_NAME_REGEX = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Packages Kotlin imports implicitly on the JVM.
DEFAULT_IMPORT_PACKAGES = frozenset({
    "kotlin",
    "kotlin.annotation",
    "kotlin.collections",
    "kotlin.comparisons",
    "kotlin.io",
    "kotlin.jvm",
    "kotlin.ranges",
    "kotlin.sequences",
    "kotlin.text",
    "java.lang",
})


# ============================================================
# Imports
# ============================================================

@dataclass
class ImportTable:
    """Tracks which simple names are imported; a clashing simple name is written fully qualified."""
    package_name: str
    imported_by_simple_name: dict[str, str] = field(default_factory=dict)

    def claim(self, target_type: TargetType) -> None:
        """Reserve the simple name of a type (and its type argument) for this file."""
        if target_type.verbatim:
            return
        # Only plain class names can be imported; anything else is written out in full.
        if target_type.namespace and IMPORTABLE_NAME_REGEX.match(target_type.simple_name):
            self.imported_by_simple_name.setdefault(target_type.simple_name, target_type.raw_qualified_name)
        if target_type.argument is not None:
            self.claim(target_type.argument)

    def name_of(self, target_type: TargetType) -> str:
        """Render a type using its simple name when it is not shadowed by another import."""
        if target_type.verbatim:
            return target_type.qualified_name

        owner = self.imported_by_simple_name.get(target_type.simple_name)
        if owner == target_type.raw_qualified_name or (owner is None and not target_type.namespace):
            rendered = target_type.simple_name
        else:
            rendered = target_type.raw_qualified_name

        if target_type.argument is not None:
            rendered = f"{rendered}<{self.name_of(target_type.argument)}>"
        if target_type.variance:
            rendered = f"{target_type.variance} {rendered}"
        return rendered

    def import_lines(self) -> list[str]:
        """Sorted `import` statements for names outside the default and current packages."""
        imports: set[str] = set()
        for qualified_name in self.imported_by_simple_name.values():
            namespace = qualified_name.rsplit(".", 1)[0] if "." in qualified_name else ""
            if not namespace or namespace == self.package_name or namespace in DEFAULT_IMPORT_PACKAGES:
                continue
            imports.add(qualified_name)
        return [f"import {qualified_name}" for qualified_name in sorted(imports)]


def referenced_types(unit: GenerationUnit) -> Iterable[TargetType]:
    """All types a unit mentions, in declaration order."""
    for function in unit.functions:
        yield function.receiver
        for annotation in function.annotations:
            yield annotation.target_type
        for parameter in function.parameters:
            for annotation in parameter.annotations:
                yield annotation.target_type
            yield parameter.type
        if function.returns is not None:
            yield function.returns


# ============================================================
# Emit helpers
# ============================================================

def render_annotation(annotation: Annotation, import_table: ImportTable) -> str:
    rendered_name = import_table.name_of(annotation.target_type)
    if not annotation.members:
        return f"@{rendered_name}"
    return f"@{rendered_name}({', '.join(annotation.members)})"


def render_parameter(parameter: ParameterSpec, import_table: ImportTable) -> str:
    rendered_annotations = [render_annotation(annotation, import_table) for annotation in parameter.annotations]
    declaration = f"{parameter.name}: {import_table.name_of(parameter.type)}"
    return " ".join([*rendered_annotations, declaration])


def render_kdoc(kdoc_lines: tuple[str, ...]) -> list[str]:
    if not kdoc_lines:
        return []
    output_lines = ["/**"]
    for kdoc_line in kdoc_lines:
        output_lines.append(f" * {kdoc_line}".rstrip())
    output_lines.append(" */")
    return output_lines


def render_function(function: FunctionSpec, import_table: ImportTable) -> list[str]:
    """Render one extension function with an expression body."""
    output_lines = render_kdoc(function.kdoc)
    for annotation in function.annotations:
        output_lines.append(render_annotation(annotation, import_table))

    rendered_parameters = [render_parameter(parameter, import_table) for parameter in function.parameters]
    returns_suffix = f": {import_table.name_of(function.returns)}" if function.returns is not None else ""
    header_prefix = f"fun {import_table.name_of(function.receiver)}.{function.name}"

    single_line_header = f"{header_prefix}({', '.join(rendered_parameters)}){returns_suffix} ="
    if len(single_line_header) <= MAX_LINE_WIDTH:
        output_lines.append(single_line_header)
    else:
        output_lines.append(f"{header_prefix}(")
        output_lines.append(",\n".join(f"{INDENT}{rendered}" for rendered in rendered_parameters))
        output_lines.append(f"){returns_suffix} =")

    output_lines.append(f"{INDENT}{function.body}")
    return output_lines


# ============================================================
# File
# ============================================================

def render_unit(unit: GenerationUnit) -> str:
    """Render a full Kotlin file for one generation unit."""
    import_table = ImportTable(package_name=unit.package_name)
    for target_type in referenced_types(unit):
        import_table.claim(target_type)

    output_lines: list[str] = []
    output_lines.append(f'@file:JvmName(name = "{unit.jvm_name}")')
    output_lines.append("")

    if unit.package_name:
        output_lines.append(f"package {unit.package_name}")
        output_lines.append("")

    import_lines = import_table.import_lines()
    if import_lines:
        output_lines.extend(import_lines)
        output_lines.append("")

    for function in unit.functions:
        output_lines.extend(render_function(function, import_table))
        output_lines.append("")

    return "\n".join(output_lines).rstrip() + "\n"
