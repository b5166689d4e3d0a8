"""Java type -> Kotlin type resolution."""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from navgen.introspection import CapabilityChecker
from navgen.model import ClassDescriptor
from navgen.types import TargetType, TypeDescriptor, array_component, split_generic


# ============================================================
# Built-in table
# ============================================================

def _kotlin(simple_name: str) -> TargetType:
    return TargetType(simple_name=simple_name, namespace="kotlin")


KOTLIN_ARRAY = _kotlin("Array")
KOTLIN_ARRAY_LIST = TargetType(simple_name="ArrayList", namespace="kotlin.collections")

KOTLIN_STRING = _kotlin("String")
KOTLIN_CHAR_SEQUENCE = _kotlin("CharSequence")

KOTLIN_BYTE = _kotlin("Byte")
KOTLIN_SHORT = _kotlin("Short")
KOTLIN_INT = _kotlin("Int")
KOTLIN_LONG = _kotlin("Long")
KOTLIN_BOOLEAN = _kotlin("Boolean")
KOTLIN_CHAR = _kotlin("Char")
KOTLIN_FLOAT = _kotlin("Float")
KOTLIN_DOUBLE = _kotlin("Double")


# Boxed arrays map to Array<T>, never to the primitive array, so element nullability survives.
BUILTIN_TYPES: Mapping[TypeDescriptor, TargetType] = MappingProxyType({
    "java.lang.String": KOTLIN_STRING,
    "java.lang.String[]": KOTLIN_ARRAY.parameterized_by(KOTLIN_STRING),

    "byte": KOTLIN_BYTE,
    "java.lang.Byte": KOTLIN_BYTE,
    "byte[]": _kotlin("ByteArray"),
    "java.lang.Byte[]": KOTLIN_ARRAY.parameterized_by(KOTLIN_BYTE),

    "short": KOTLIN_SHORT,
    "java.lang.Short": KOTLIN_SHORT,
    "short[]": _kotlin("ShortArray"),
    "java.lang.Short[]": KOTLIN_ARRAY.parameterized_by(KOTLIN_SHORT),

    "int": KOTLIN_INT,
    "java.lang.Integer": KOTLIN_INT,
    "int[]": _kotlin("IntArray"),
    "java.lang.Integer[]": KOTLIN_ARRAY.parameterized_by(KOTLIN_INT),

    "long": KOTLIN_LONG,
    "java.lang.Long": KOTLIN_LONG,
    "long[]": _kotlin("LongArray"),
    "java.lang.Long[]": KOTLIN_ARRAY.parameterized_by(KOTLIN_LONG),

    "boolean": KOTLIN_BOOLEAN,
    "java.lang.Boolean": KOTLIN_BOOLEAN,
    "boolean[]": _kotlin("BooleanArray"),
    "java.lang.Boolean[]": KOTLIN_ARRAY.parameterized_by(KOTLIN_BOOLEAN),

    "char": KOTLIN_CHAR,
    "java.lang.Character": KOTLIN_CHAR,
    "char[]": _kotlin("CharArray"),
    "java.lang.Character[]": KOTLIN_ARRAY.parameterized_by(KOTLIN_CHAR),

    "float": KOTLIN_FLOAT,
    "java.lang.Float": KOTLIN_FLOAT,
    "float[]": _kotlin("FloatArray"),
    "java.lang.Float[]": KOTLIN_ARRAY.parameterized_by(KOTLIN_FLOAT),

    "double": KOTLIN_DOUBLE,
    "java.lang.Double": KOTLIN_DOUBLE,
    "double[]": _kotlin("DoubleArray"),
    "java.lang.Double[]": KOTLIN_ARRAY.parameterized_by(KOTLIN_DOUBLE),

    "java.lang.CharSequence": KOTLIN_CHAR_SEQUENCE,
    "java.lang.CharSequence[]": KOTLIN_ARRAY.parameterized_by(KOTLIN_CHAR_SEQUENCE),

    "java.util.ArrayList<java.lang.CharSequence>": KOTLIN_ARRAY_LIST.parameterized_by(KOTLIN_CHAR_SEQUENCE),
    "java.util.ArrayList<java.lang.String>": KOTLIN_ARRAY_LIST.parameterized_by(KOTLIN_STRING),
    "java.util.ArrayList<java.lang.Integer>": KOTLIN_ARRAY_LIST.parameterized_by(KOTLIN_INT),
})


# ============================================================
# Overrides file
# ============================================================

def load_type_mapping(path: Path) -> dict[TypeDescriptor, TargetType]:
    """
    Load descriptor -> Kotlin type overrides from a YAML-like file:

      # comment
      java.util.Date: kotlin.Long
      com.example.Money: com.example.kotlin.Money

    A missing file yields no overrides.
    """
    if not path.exists():
        return {}

    overrides: dict[TypeDescriptor, TargetType] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if ":" not in stripped:
            continue
        key, value = stripped.split(":", 1)
        key = key.strip()
        value = value.strip()
        if not key or not value:
            continue
        overrides[key] = TargetType.best_guess(value)
    return overrides


# ============================================================
# Resolver
# ============================================================

class StructuralCategory(Enum):
    """Derived Parcelable categories that need an overlay entry."""
    PARCELABLE_LIST = "parcelable_list"
    SPARSE_PARCELABLE_ARRAY = "sparse_parcelable_array"
    PARCELABLE_ARRAY = "parcelable_array"


class TypeResolver:
    """
    Resolves platform descriptors to Kotlin types for a single generation run.

    Lookup order: the run's overlay, then the base table, then a best-guess
    passthrough of the descriptor itself. Build a new resolver per run.
    """

    def __init__(self, base: Mapping[TypeDescriptor, TargetType] = BUILTIN_TYPES) -> None:
        self._base = base
        self._overlay: dict[TypeDescriptor, TargetType] = {}

    @classmethod
    def for_run(
        cls,
        class_descriptors: Iterable[ClassDescriptor],
        capabilities: CapabilityChecker,
        *,
        base: Mapping[TypeDescriptor, TargetType] = BUILTIN_TYPES,
    ) -> "TypeResolver":
        """Build a fresh resolver and preprocess every constructor parameter of the run."""
        resolver = cls(base)
        for class_descriptor in class_descriptors:
            for param in class_descriptor.params:
                resolver.preprocess(param.type, capabilities)
        return resolver

    @property
    def overlay(self) -> Mapping[TypeDescriptor, TargetType]:
        return MappingProxyType(self._overlay)

    def register(self, descriptor: TypeDescriptor, target_type: TargetType) -> None:
        self._overlay[descriptor] = target_type

    def preprocess(
        self,
        descriptor: TypeDescriptor,
        capabilities: CapabilityChecker,
    ) -> Optional[StructuralCategory]:
        """Register an overlay entry for the first derived category the descriptor falls in."""
        _raw_name, arguments = split_generic(descriptor)
        if len(arguments) == 1 and capabilities.is_parcelable_list(descriptor):
            # java.util.ArrayList is kotlin.collections.ArrayList on the JVM either way.
            element_type = self.resolve(arguments[0])
            self.register(descriptor, KOTLIN_ARRAY_LIST.parameterized_by(element_type))
            return StructuralCategory.PARCELABLE_LIST

        if capabilities.is_sparse_parcelable_array(descriptor):
            self.register(descriptor, TargetType.literal(descriptor))
            return StructuralCategory.SPARSE_PARCELABLE_ARRAY

        if capabilities.is_parcelable_array(descriptor):
            # Parcelable[] is Array<Parcelable> in Kotlin; the component keeps its platform name.
            component = array_component(descriptor) or descriptor
            self.register(descriptor, KOTLIN_ARRAY.parameterized_by(TargetType.literal(component)))
            return StructuralCategory.PARCELABLE_ARRAY

        return None

    def resolve(self, descriptor: TypeDescriptor) -> TargetType:
        """Return the Kotlin type for a descriptor; unknown descriptors pass through."""
        overlay_type = self._overlay.get(descriptor)
        if overlay_type is not None:
            return overlay_type
        base_type = self._base.get(descriptor)
        if base_type is not None:
            return base_type
        return TargetType.best_guess(descriptor)
