"""Load class descriptors from a JSON manifest produced by the annotation scanner."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from navgen.introspection import DeclaredCapabilities
from navgen.model import Annotation, ClassDescriptor, ConstructorParam


class ManifestError(ValueError):
    """Raised when a manifest file is missing or malformed."""


@dataclass(frozen=True)
class Manifest:
    """Flattened manifest: classes in declaration order plus declared Parcelable types."""
    class_descriptors: list[ClassDescriptor]
    parcelable_types: frozenset[str]

    @property
    def capabilities(self) -> DeclaredCapabilities:
        return DeclaredCapabilities(self.parcelable_types)


def parse_annotation(raw_annotation: Any, *, where: str) -> Annotation:
    """Accept "pkg.Name" or {"name": "pkg.Name", "members": ["value = 1"]}."""
    if isinstance(raw_annotation, str) and raw_annotation.strip():
        return Annotation(raw_annotation.strip())
    if isinstance(raw_annotation, dict) and isinstance(raw_annotation.get("name"), str):
        raw_members = raw_annotation.get("members", [])
        if not isinstance(raw_members, list) or not all(isinstance(member, str) for member in raw_members):
            raise ManifestError(f"{where}: annotation members must be a list of strings.")
        return Annotation(raw_annotation["name"].strip(), tuple(raw_members))
    raise ManifestError(f"{where}: unsupported annotation entry {raw_annotation!r}.")


def parse_param(raw_param: Any, *, where: str) -> ConstructorParam:
    if not isinstance(raw_param, dict):
        raise ManifestError(f"{where}: expected an object, got {type(raw_param).__name__}.")

    param_name = raw_param.get("name")
    param_type = raw_param.get("type")
    if not isinstance(param_name, str) or not param_name:
        raise ManifestError(f"{where}: missing parameter name.")
    if not isinstance(param_type, str) or not param_type.strip():
        raise ManifestError(f"{where}: parameter {param_name!r} has no type.")

    raw_annotations = raw_param.get("annotations", [])
    if not isinstance(raw_annotations, list):
        raise ManifestError(f"{where}: annotations of {param_name!r} must be a list.")

    return ConstructorParam(
        name=param_name,
        type=param_type.strip(),
        annotations=tuple(
            parse_annotation(raw_annotation, where=f"{where}.{param_name}")
            for raw_annotation in raw_annotations
        ),
    )


def parse_manifest(document: Any, *, source: str = "<manifest>") -> Manifest:
    """Flatten the `extras` mapping (class -> params) into ordered class descriptors."""
    if not isinstance(document, dict):
        raise ManifestError(f"{source}: top level must be an object.")

    raw_extras = document.get("extras", {})
    if not isinstance(raw_extras, dict):
        raise ManifestError(f"{source}: 'extras' must map class names to parameter lists.")

    raw_parcelables = document.get("parcelables", [])
    if not isinstance(raw_parcelables, list) or not all(isinstance(name, str) for name in raw_parcelables):
        raise ManifestError(f"{source}: 'parcelables' must be a list of type names.")

    class_descriptors: list[ClassDescriptor] = []
    for class_name, raw_params in raw_extras.items():
        if not isinstance(raw_params, list):
            raise ManifestError(f"{source}: extras of {class_name} must be a list.")
        params = tuple(
            parse_param(raw_param, where=f"{source}:{class_name}[{param_index}]")
            for param_index, raw_param in enumerate(raw_params)
        )
        class_descriptors.append(ClassDescriptor(qualified_name=class_name, params=params))

    return Manifest(class_descriptors=class_descriptors, parcelable_types=frozenset(raw_parcelables))


def load_manifest(path: Path) -> Manifest:
    """Read and parse a manifest file."""
    if not path.is_file():
        raise ManifestError(f"Manifest not found: {path}")
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ManifestError(f"{path}: invalid JSON ({exc})") from exc
    return parse_manifest(document, source=str(path))
