"""Assemble Kotlin extension units for classes that declare extras."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Protocol

from navgen.introspection import CapabilityChecker, DeclaredCapabilities
from navgen.model import Annotation, ClassDescriptor, FunctionSpec, GenerationUnit, ParameterSpec
from navgen.resolver import BUILTIN_TYPES, TypeResolver
from navgen.types import TargetType, TypeDescriptor


DEFAULT_NAVIGATOR_CLASS = "com.shaishavgandhi.navigator.Navigator"
EXTRA_ANNOTATION = "com.shaishavgandhi.navigator.Extra"

ANY_TYPE = TargetType(simple_name="Any", namespace="kotlin")
CHECK_RESULT = Annotation("androidx.annotation.CheckResult")

# Source-level nullability hint; matched by simple name only.
NON_NULL_MARKER = "NonNull"


class UnitWriter(Protocol):
    """File-emission collaborator."""

    def write(self, unit: GenerationUnit) -> object:
        ...


def decapitalize(name: str) -> str:
    """Lower-case the first character only: "SampleActivity" -> "sampleActivity"."""
    return name[:1].lower() + name[1:]


def keep_annotation(annotation: Annotation) -> bool:
    """Drop the NonNull marker; every other annotation is carried to the generated parameter."""
    return annotation.simple_name != NON_NULL_MARKER


@dataclass
class ExtensionGenerator:
    """Generates `<SimpleName>NavigatorExtensions` units from class descriptors."""
    output_dir: Optional[str]
    capabilities: CapabilityChecker = field(default_factory=DeclaredCapabilities)
    base_types: Mapping[TypeDescriptor, TargetType] = field(default_factory=lambda: BUILTIN_TYPES)
    navigator_class: str = DEFAULT_NAVIGATOR_CLASS

    @property
    def is_enabled(self) -> bool:
        return bool(self.output_dir and self.output_dir.strip())

    def generate(self, class_descriptors: Iterable[ClassDescriptor]) -> list[GenerationUnit]:
        """Return one unit per class, in input order, or nothing when generation is not requested."""
        if not self.is_enabled:
            return []

        class_descriptors = list(class_descriptors)
        if not class_descriptors:
            return []

        type_resolver = TypeResolver.for_run(class_descriptors, self.capabilities, base=self.base_types)
        return [self.build_unit(class_descriptor, type_resolver) for class_descriptor in class_descriptors]

    def generate_and_write(self, class_descriptors: Iterable[ClassDescriptor], writer: UnitWriter) -> list[GenerationUnit]:
        """Generate units and hand each to the writer; writer failures propagate."""
        units = self.generate(class_descriptors)
        for unit in units:
            writer.write(unit)
        return units

    # ------------------------------------------------------------
    # Per-class assembly
    # ------------------------------------------------------------

    def build_unit(self, class_descriptor: ClassDescriptor, type_resolver: TypeResolver) -> GenerationUnit:
        simple_name = class_descriptor.simple_name
        return GenerationUnit(
            package_name=class_descriptor.package_name,
            file_name=f"{simple_name}NavigatorExtensions",
            jvm_name=f"{simple_name}Navigator",
            functions=(
                self.build_navigator_bind(class_descriptor),
                self.build_receiver_bind(class_descriptor),
                self.build_builder_preparer(class_descriptor, type_resolver),
            ),
        )

    def build_navigator_bind(self, class_descriptor: ClassDescriptor) -> FunctionSpec:
        """`fun Navigator.bind(binder: Foo) = FooBinder.bind(binder)`"""
        binder_type = class_descriptor.sibling("Binder")
        return FunctionSpec(
            name="bind",
            receiver=TargetType.of(self.navigator_class),
            parameters=(ParameterSpec(name="binder", type=class_descriptor.target_type),),
            body=f"{binder_type.simple_name}.bind(binder)",
        )

    def build_receiver_bind(self, class_descriptor: ClassDescriptor) -> FunctionSpec:
        """`fun Foo.bind() = FooBinder.bind(this)`"""
        binder_type = class_descriptor.sibling("Binder")
        return FunctionSpec(
            name="bind",
            receiver=class_descriptor.target_type,
            body=f"{binder_type.simple_name}.bind(this)",
            kdoc=(
                f"Extension method on [{class_descriptor.simple_name}] that binds the variables",
                f"in the class annotated with [{EXTRA_ANNOTATION}]",
                "",
                f"@see {binder_type.simple_name}",
            ),
        )

    def build_builder_preparer(self, class_descriptor: ClassDescriptor, type_resolver: TypeResolver) -> FunctionSpec:
        """`@CheckResult fun Any.fooBuilder(a: A, b: B): FooBuilder = FooBuilder.builder(a, b)`"""
        builder_type = class_descriptor.sibling("Builder")

        parameters = tuple(
            ParameterSpec(
                name=param.name,
                type=type_resolver.resolve(param.type),
                annotations=tuple(annotation for annotation in param.annotations if keep_annotation(annotation)),
            )
            for param in class_descriptor.params
        )
        arguments = ", ".join(parameter.name for parameter in parameters)

        return FunctionSpec(
            name=f"{decapitalize(class_descriptor.simple_name)}Builder",
            receiver=ANY_TYPE,
            parameters=parameters,
            returns=builder_type,
            annotations=(CHECK_RESULT,),
            body=f"{builder_type.simple_name}.builder({arguments})",
        )
