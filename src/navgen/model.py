"""Inputs (class descriptors) and outputs (generation units) of the extension generator."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from navgen.types import TargetType, TypeDescriptor, split_qualified_name


# ============================================================
# Inputs
# ============================================================

@dataclass(frozen=True)
class Annotation:
    """A source-level annotation attached to a constructor parameter."""
    qualified_name: str
    members: tuple[str, ...] = ()

    @property
    def simple_name(self) -> str:
        return split_qualified_name(self.qualified_name)[1]

    @property
    def target_type(self) -> TargetType:
        return TargetType.of(self.qualified_name)


@dataclass(frozen=True)
class ConstructorParam:
    """One injectable parameter: name, platform type, and its annotations in source order."""
    name: str
    type: TypeDescriptor
    annotations: tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class ClassDescriptor:
    """A class that declares extras, with its constructor parameters in declared order."""
    qualified_name: str
    params: tuple[ConstructorParam, ...] = ()

    @property
    def package_name(self) -> str:
        return split_qualified_name(self.qualified_name)[0]

    @property
    def simple_name(self) -> str:
        return split_qualified_name(self.qualified_name)[1]

    @property
    def target_type(self) -> TargetType:
        return TargetType.of(self.qualified_name)

    def sibling(self, suffix: str) -> TargetType:
        """Return the companion type `<SimpleName><suffix>` in the same package."""
        return TargetType(simple_name=f"{self.simple_name}{suffix}", namespace=self.package_name)


# ============================================================
# Outputs
# ============================================================

@dataclass(frozen=True)
class ParameterSpec:
    """A generated function parameter."""
    name: str
    type: TargetType
    annotations: tuple[Annotation, ...] = ()

    def declaration(self) -> str:
        """Render `name: Type` using simple names."""
        return f"{self.name}: {render_simple(self.type)}"


@dataclass(frozen=True)
class FunctionSpec:
    """A generated top-level extension function with an expression body."""
    name: str
    receiver: TargetType
    body: str
    parameters: tuple[ParameterSpec, ...] = ()
    returns: Optional[TargetType] = None
    annotations: tuple[Annotation, ...] = ()

    # Each entry is one KDoc line; "" renders as an empty KDoc line.
    kdoc: tuple[str, ...] = ()

    @property
    def parameter_list(self) -> str:
        """Parameters as `a: A, b: B` (empty string when there are none)."""
        return ", ".join(parameter.declaration() for parameter in self.parameters)


@dataclass(frozen=True)
class GenerationUnit:
    """One output file: the three extension functions generated for a single class."""
    package_name: str
    file_name: str
    jvm_name: str
    functions: tuple[FunctionSpec, ...] = field(default_factory=tuple)

    @property
    def relative_path(self) -> str:
        """Output path relative to the destination root, e.g. `com/example/FooNavigatorExtensions.kt`."""
        package_path = self.package_name.replace(".", "/")
        if not package_path:
            return f"{self.file_name}.kt"
        return f"{package_path}/{self.file_name}.kt"


def render_simple(target_type: TargetType) -> str:
    """Render a type by simple name (verbatim types keep their full spelling)."""
    if target_type.verbatim:
        return target_type.qualified_name
    rendered = target_type.simple_name
    if target_type.argument is not None:
        rendered = f"{rendered}<{render_simple(target_type.argument)}>"
    if target_type.variance:
        rendered = f"{target_type.variance} {rendered}"
    return rendered
