"""Conversion between typed objects and their generic wire representation.

Stores only speak the generic attribute-map form, while callers may hold
either variant. The bridge hides that duality: each variant carries its own
conversion, the bridge only validates what it is handed and delegates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dynreconcile.domain.model import DomainObject

if TYPE_CHECKING:
    from dynreconcile.domain.model import GenericObject


def _require_instance(obj: object, operation: str) -> DomainObject:
    if isinstance(obj, type):
        raise TypeError(f"{operation} requires an object instance, got class {obj.__name__}")
    if not isinstance(obj, DomainObject):
        raise TypeError(f"{operation} requires a domain object, got {type(obj).__name__}")
    return obj


class RepresentationBridge:
    """Stateless converter used by the reconciler."""

    __slots__ = ()

    def to_generic(self, obj: DomainObject) -> GenericObject:
        """Return ``obj`` in generic form; generic input is returned as is, not copied."""

        return _require_instance(obj, "to_generic").to_generic()

    def from_generic(self, generic: GenericObject, target: DomainObject) -> None:
        """Overwrite ``target`` in place with the content of ``generic``.

        A generic target takes over ``generic``'s backing map. A typed target has
        every schema field replaced; fields unknown to the schema are dropped.
        """

        _require_instance(target, "from_generic").load_generic(generic)

    def new_empty_like[T: DomainObject](self, obj: T) -> T:
        """Allocate a zero-value instance of the same concrete class as ``obj``."""

        _require_instance(obj, "new_empty_like")
        return obj.new_empty()
