"""Kotlin navigator extension generator."""
from __future__ import annotations

from navgen.generator import ExtensionGenerator
from navgen.introspection import CapabilityChecker, DeclaredCapabilities
from navgen.model import Annotation, ClassDescriptor, ConstructorParam, GenerationUnit
from navgen.resolver import BUILTIN_TYPES, TypeResolver
from navgen.types import TargetType

__all__ = [
    "Annotation",
    "BUILTIN_TYPES",
    "CapabilityChecker",
    "ClassDescriptor",
    "ConstructorParam",
    "DeclaredCapabilities",
    "ExtensionGenerator",
    "GenerationUnit",
    "TargetType",
    "TypeResolver",
]
