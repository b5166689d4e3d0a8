"""Capability checks answered from the platform type hierarchy."""
from __future__ import annotations

from typing import Iterable, Protocol

from navgen.types import TypeDescriptor, array_component, split_generic


PARCELABLE = "android.os.Parcelable"
SPARSE_ARRAY = "android.util.SparseArray"
LIST_CONTAINERS = frozenset({"java.util.ArrayList"})


class CapabilityChecker(Protocol):
    """Answers whether a descriptor belongs to one of the derived Parcelable categories."""

    def is_parcelable_list(self, descriptor: TypeDescriptor) -> bool:
        """Single-argument list whose element type is Parcelable."""
        ...

    def is_sparse_parcelable_array(self, descriptor: TypeDescriptor) -> bool:
        """SparseArray of Parcelable values."""
        ...

    def is_parcelable_array(self, descriptor: TypeDescriptor) -> bool:
        """Array whose component type is Parcelable."""
        ...


class DeclaredCapabilities:
    """
    CapabilityChecker backed by an explicit set of Parcelable type names.

    The annotation scanner knows the full type hierarchy; outside of it the
    manifest declares which types implement android.os.Parcelable.
    """

    def __init__(self, parcelable_types: Iterable[str] = ()) -> None:
        self.parcelable_types: frozenset[str] = frozenset(
            type_name.strip() for type_name in parcelable_types if type_name.strip()
        ) | {PARCELABLE}

    def is_parcelable(self, descriptor: TypeDescriptor) -> bool:
        return descriptor.strip() in self.parcelable_types

    def is_parcelable_list(self, descriptor: TypeDescriptor) -> bool:
        raw_name, arguments = split_generic(descriptor)
        return raw_name in LIST_CONTAINERS and len(arguments) == 1 and self.is_parcelable(arguments[0])

    def is_sparse_parcelable_array(self, descriptor: TypeDescriptor) -> bool:
        raw_name, arguments = split_generic(descriptor)
        return raw_name == SPARSE_ARRAY and len(arguments) == 1 and self.is_parcelable(arguments[0])

    def is_parcelable_array(self, descriptor: TypeDescriptor) -> bool:
        component = array_component(descriptor)
        return component is not None and self.is_parcelable(component)
