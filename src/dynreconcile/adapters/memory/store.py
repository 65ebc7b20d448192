"""In-memory object store for tests and dry runs.

The store is seeded from typed or generic fixtures plus a :class:`TypeRegistry`.
Everything is held in generic form, so the registry only matters for working
out kinds: fixtures without ``apiVersion``/``kind`` get them from the registry,
and every seeded kind gets a ``<Kind>List`` so listing works even for kinds the
registry never heard of.
"""

from __future__ import annotations

import itertools
import uuid
from collections import Counter
from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from dynreconcile.domain.errors import (
    AlreadyExistsError,
    ConflictError,
    ConversionError,
    ObjectNotFoundError,
    StoreError,
    UnregisteredKindError,
)
from dynreconcile.domain.model import (
    DomainObject,
    GenericList,
    GenericObject,
    GroupVersionKind,
    GroupVersionResource,
    ObjectKey,
    TypeRegistry,
    guess_resource,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

log = getLogger(__name__)

type _ObjectsByKey = dict[ObjectKey, GenericObject]


def _generic_registry(registry: TypeRegistry) -> TypeRegistry:
    generic = TypeRegistry()
    for gvk in registry.known_kinds():
        generic.register(gvk, GenericList if gvk.is_list() else GenericObject)
    return generic


def to_generic_fixture(registry: TypeRegistry, obj: object) -> GenericObject:
    """Convert one fixture to an independent generic copy with its kind filled in."""

    if not isinstance(obj, DomainObject):
        raise ConversionError(f"cannot use {type(obj).__name__} as a store fixture")
    generic = obj.to_generic().deep_copy()
    if generic.kind and generic.api_version:
        return generic
    try:
        gvk = registry.kind_for(obj)
    except UnregisteredKindError as exc:
        raise ConversionError(
            f"cannot determine kind of fixture {generic.key}: {exc}",
            key=generic.key,
        ) from exc
    generic.group_version_kind = gvk
    return generic


def _utcnow() -> str:
    return datetime.now(UTC).replace(microsecond=0).isoformat().replace("+00:00", "Z")


@dataclass(slots=True)
class InMemoryNamespacedClient:
    store: InMemoryObjectStore
    resource: GroupVersionResource
    namespace: str

    async def get(self, name: str) -> GenericObject:
        return self.store.get(self.resource, ObjectKey(name=name, namespace=self.namespace))

    async def create(self, obj: GenericObject) -> GenericObject:
        return self.store.create(self.resource, self.namespace, obj)

    async def update(self, obj: GenericObject) -> GenericObject:
        return self.store.update(self.resource, self.namespace, obj)

    async def list(self) -> GenericList:
        return self.store.list(self.resource, self.namespace)


@dataclass(slots=True)
class InMemoryResourceClient:
    store: InMemoryObjectStore
    resource: GroupVersionResource

    def namespace(self, namespace: str) -> InMemoryNamespacedClient:
        return InMemoryNamespacedClient(self.store, self.resource, namespace)


class InMemoryObjectStore:
    """Object store keeping generic copies of every object in process memory.

    Reads and writes hand out deep copies, so callers never share state with the
    store. ``calls`` counts invocations per verb.
    """

    def __init__(self, registry: TypeRegistry, *fixtures: object) -> None:
        self.registry = _generic_registry(registry)
        self.calls: Counter[str] = Counter()
        self._objects: dict[GroupVersionResource, _ObjectsByKey] = {}
        self._resource_versions = itertools.count(1)

        for fixture in fixtures:
            generic = to_generic_fixture(registry, fixture)
            gvk = generic.group_version_kind
            if not self.registry.recognizes(gvk):
                self.registry.register(gvk, GenericObject)
            list_gvk = gvk.list_kind()
            if not self.registry.recognizes(list_gvk):
                self.registry.register(list_gvk, GenericList)
            self._seed(guess_resource(gvk), generic)

    def _seed(self, resource: GroupVersionResource, obj: GenericObject) -> None:
        objects = self._objects.setdefault(resource, {})
        if obj.key in objects:
            raise AlreadyExistsError(
                f"{resource.resource} {obj.key} already exists",
                status_code=409,
                reason="AlreadyExists",
            )
        objects[obj.key] = obj

    def _next_resource_version(self) -> str:
        return str(next(self._resource_versions))

    def _list_kind(self, resource: GroupVersionResource) -> GroupVersionKind:
        for gvk in self.registry.known_kinds():
            if gvk.is_list() and guess_resource(gvk.item_kind()) == resource:
                return gvk
        raise StoreError(f"no list kind registered for {resource}", reason="NotRegistered")

    def resource(self, resource: GroupVersionResource) -> InMemoryResourceClient:
        return InMemoryResourceClient(self, resource)

    def get(self, resource: GroupVersionResource, key: ObjectKey) -> GenericObject:
        self.calls["get"] += 1
        stored = self._objects.get(resource, {}).get(key)
        if stored is None:
            raise ObjectNotFoundError(
                f'{resource.resource} "{key}" not found',
                status_code=404,
                reason="NotFound",
            )
        return stored.deep_copy()

    def create(
        self, resource: GroupVersionResource, namespace: str, obj: GenericObject
    ) -> GenericObject:
        self.calls["create"] += 1
        stored = self._admit(namespace, obj)
        if not stored.name:
            raise StoreError("name is required", status_code=422, reason="Invalid")
        stored.resource_version = self._next_resource_version()
        stored.set_nested(str(uuid.uuid4()), "metadata", "uid")
        stored.set_nested(1, "metadata", "generation")
        stored.set_nested(_utcnow(), "metadata", "creationTimestamp")
        self._seed(resource, stored)
        log.debug(f"Created {resource.resource} {stored.key}")
        return stored.deep_copy()

    def update(
        self, resource: GroupVersionResource, namespace: str, obj: GenericObject
    ) -> GenericObject:
        self.calls["update"] += 1
        stored = self._admit(namespace, obj)
        objects = self._objects.get(resource, {})
        previous = objects.get(stored.key)
        if previous is None:
            raise ObjectNotFoundError(
                f'{resource.resource} "{stored.key}" not found',
                status_code=404,
                reason="NotFound",
            )
        if stored.resource_version and stored.resource_version != previous.resource_version:
            raise ConflictError(
                f'Operation cannot be fulfilled on {resource.resource} "{stored.key}": '
                "the object has been modified",
                status_code=409,
                reason="Conflict",
            )

        for field_name in ("uid", "creationTimestamp"):
            server_value = previous.get_nested("metadata", field_name)
            if server_value is not None:
                stored.set_nested(server_value, "metadata", field_name)
        generation = previous.get_nested("metadata", "generation") or 1
        if stored.get_nested("spec") != previous.get_nested("spec"):
            generation += 1
        stored.set_nested(generation, "metadata", "generation")
        stored.resource_version = self._next_resource_version()

        objects[stored.key] = stored
        log.debug(f"Updated {resource.resource} {stored.key}")
        return stored.deep_copy()

    def list(self, resource: GroupVersionResource, namespace: str) -> GenericList:
        self.calls["list"] += 1
        list_gvk = self._list_kind(resource)
        items = [
            obj.deep_copy()
            for key, obj in sorted(self._objects.get(resource, {}).items(), key=_sort_key)
            if not namespace or key.namespace == namespace
        ]
        return GenericList(api_version=list_gvk.api_version, kind=list_gvk.kind, items=items)

    def objects(self, resource: GroupVersionResource) -> Iterable[GenericObject]:
        """Snapshot of every stored object of ``resource``, for assertions."""

        return [obj.deep_copy() for obj in self._objects.get(resource, {}).values()]

    @staticmethod
    def _admit(namespace: str, obj: GenericObject) -> GenericObject:
        stored = obj.deep_copy()
        if stored.namespace and stored.namespace != namespace:
            raise StoreError(
                f"the namespace of the object ({stored.namespace}) does not match "
                f"the namespace on the request ({namespace})",
                status_code=400,
                reason="BadRequest",
            )
        if namespace:
            stored.namespace = namespace
        return stored


def _sort_key(item: tuple[ObjectKey, GenericObject]) -> tuple[str, str]:
    key, _ = item
    return key.namespace, key.name


def new_simple_store(registry: TypeRegistry, *fixtures: object) -> InMemoryObjectStore:
    """Build an in-memory store from a registry and seed fixtures."""

    return InMemoryObjectStore(registry, *fixtures)
