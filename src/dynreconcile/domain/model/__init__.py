"""Object model shared by the reconciler and store adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Self, runtime_checkable

from .generic import AttributeMap, GenericList, GenericObject
from .identity import GroupVersionKind, GroupVersionResource, ObjectKey, guess_resource
from .registry import TypeRegistry
from .typed import ObjectMeta, TypedObject, WireModel


@runtime_checkable
class DomainObject(Protocol):
    """Capabilities every object variant provides to the reconciler."""

    @property
    def key(self) -> ObjectKey: ...

    def to_generic(self) -> GenericObject: ...

    def load_generic(self, generic: GenericObject) -> None: ...

    def new_empty(self) -> Self: ...


if TYPE_CHECKING:
    _generic_check: DomainObject = GenericObject()
    _typed_check: DomainObject = TypedObject()


__all__ = [
    "AttributeMap",
    "DomainObject",
    "GenericList",
    "GenericObject",
    "GroupVersionKind",
    "GroupVersionResource",
    "ObjectKey",
    "ObjectMeta",
    "TypeRegistry",
    "TypedObject",
    "WireModel",
    "guess_resource",
]
