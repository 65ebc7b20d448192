"""Ports for reading and writing objects in a declarative object store.

Adapters signal a missing object with
:class:`~dynreconcile.domain.errors.ObjectNotFoundError` and every other failure
with another :class:`~dynreconcile.domain.errors.StoreError`. Calls are
coroutines; cancelling the awaiting task cancels the request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from dynreconcile.domain.model import GenericList, GenericObject, GroupVersionResource


@runtime_checkable
class NamespacedResourceClient(Protocol):
    """Access to one resource type within one namespace."""

    async def get(self, name: str) -> GenericObject: ...

    async def create(self, obj: GenericObject) -> GenericObject: ...

    async def update(self, obj: GenericObject) -> GenericObject: ...

    async def list(self) -> GenericList: ...


@runtime_checkable
class ResourceClient(Protocol):
    """Access to one resource type, scoped to a namespace on demand."""

    def namespace(self, namespace: str) -> NamespacedResourceClient: ...


@runtime_checkable
class ObjectStore(Protocol):
    """Entry point handing out per-resource clients."""

    def resource(self, resource: GroupVersionResource) -> ResourceClient: ...
