"""Schema-less attribute-map representation of store objects."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Self, cast

from .identity import GroupVersionKind, ObjectKey

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

type AttributeMap = dict[str, Any]


def _is_mapping(value: object) -> bool:
    return isinstance(value, dict)


def get_nested(data: Mapping[str, Any], *fields: str) -> Any:
    """Return the value at ``fields`` or ``None`` when any step is missing."""

    current: Any = data
    for name in fields:
        if not _is_mapping(current) or name not in current:
            return None
        current = current[name]
    return current


def set_nested(data: AttributeMap, value: object, *fields: str) -> None:
    """Set ``value`` at ``fields``, creating intermediate maps as needed."""

    if not fields:
        raise ValueError("at least one field is required")
    current = data
    for name in fields[:-1]:
        child = current.get(name)
        if not _is_mapping(child):
            child = {}
            current[name] = child
        current = cast("AttributeMap", child)
    current[fields[-1]] = value


def remove_nested(data: AttributeMap, *fields: str) -> None:
    """Remove the value at ``fields``; missing paths are ignored."""

    if not fields:
        return
    parent = get_nested(data, *fields[:-1]) if len(fields) > 1 else data
    if _is_mapping(parent):
        parent.pop(fields[-1], None)


class GenericObject:
    """Ordered attribute map carrying identity under ``metadata``."""

    __slots__ = ("data",)

    def __init__(self, data: AttributeMap | None = None) -> None:
        self.data: AttributeMap = data if data is not None else {}

    def __repr__(self) -> str:
        return f"GenericObject({self.data!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GenericObject):
            return NotImplemented
        return self.data == other.data

    __hash__ = None  # type: ignore[assignment]

    def get_nested(self, *fields: str) -> Any:
        return get_nested(self.data, *fields)

    def set_nested(self, value: object, *fields: str) -> None:
        set_nested(self.data, value, *fields)

    def remove_nested(self, *fields: str) -> None:
        remove_nested(self.data, *fields)

    def _get_str(self, *fields: str) -> str:
        value = self.get_nested(*fields)
        return value if isinstance(value, str) else ""

    def _set_str(self, value: str, *fields: str) -> None:
        if not value:
            self.remove_nested(*fields)
            return
        self.set_nested(value, *fields)

    @property
    def name(self) -> str:
        return self._get_str("metadata", "name")

    @name.setter
    def name(self, value: str) -> None:
        self._set_str(value, "metadata", "name")

    @property
    def namespace(self) -> str:
        return self._get_str("metadata", "namespace")

    @namespace.setter
    def namespace(self, value: str) -> None:
        self._set_str(value, "metadata", "namespace")

    @property
    def resource_version(self) -> str:
        return self._get_str("metadata", "resourceVersion")

    @resource_version.setter
    def resource_version(self, value: str) -> None:
        self._set_str(value, "metadata", "resourceVersion")

    @property
    def api_version(self) -> str:
        return self._get_str("apiVersion")

    @api_version.setter
    def api_version(self, value: str) -> None:
        self._set_str(value, "apiVersion")

    @property
    def kind(self) -> str:
        return self._get_str("kind")

    @kind.setter
    def kind(self, value: str) -> None:
        self._set_str(value, "kind")

    @property
    def group_version_kind(self) -> GroupVersionKind:
        return GroupVersionKind.from_api_version(self.api_version, self.kind)

    @group_version_kind.setter
    def group_version_kind(self, gvk: GroupVersionKind) -> None:
        self.api_version = gvk.api_version
        self.kind = gvk.kind

    # DomainObject capabilities

    @property
    def key(self) -> ObjectKey:
        return ObjectKey(name=self.name, namespace=self.namespace)

    def to_generic(self) -> GenericObject:
        return self

    def load_generic(self, generic: GenericObject) -> None:
        self.data = generic.data

    def new_empty(self) -> Self:
        return type(self)()

    def deep_copy(self) -> Self:
        return type(self)(copy.deepcopy(self.data))


@dataclass(slots=True)
class GenericList:
    """List envelope returned by store listings."""

    api_version: str
    kind: str
    resource_version: str = ""
    items: list[GenericObject] = field(default_factory=list["GenericObject"])

    def __iter__(self) -> Iterator[GenericObject]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def group_version_kind(self) -> GroupVersionKind:
        return GroupVersionKind.from_api_version(self.api_version, self.kind)
