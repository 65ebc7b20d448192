"""Create-or-update reconciliation of a single object.

``create_or_update`` fetches the object addressed by the desired object's key,
lets the caller's mutate callback bring the desired object into shape, and
writes back only when the result differs from what the store already holds:

* not found: mutate, create, report ``created``
* found and equal after mutation: report ``unchanged``, no write
* found and different: mutate, replace, report ``updated``

At most one write is issued per call and nothing is retried. A failed fetch
aborts before the callback runs. Concurrent calls for the same key are not
coordinated here; enable ``optimistic_lock`` to let the store detect lost
updates.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .bridge import RepresentationBridge
from .equality import semantically_equal
from .errors import (
    FetchError,
    IdentityViolationError,
    MutationError,
    ObjectNotFoundError,
    WriteError,
)
from .model import DomainObject
from .model.generic import get_nested, remove_nested, set_nested
from .options import ReconcileOptions
from .outcome import OperationResult, ReconcileResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from .model import GenericObject, ObjectKey
    from .ports import NamespacedResourceClient, ResourceClient

log = getLogger(__name__)

type MutateFn = Callable[[], None]


def _describe(obj: DomainObject, key: ObjectKey) -> str:
    kind = getattr(obj, "kind", "") or type(obj).__name__
    return f"{kind} {key}"


@dataclass(slots=True)
class Reconciler:
    """Reconciles desired objects against one resource type of an object store."""

    client: ResourceClient
    options: ReconcileOptions = field(default_factory=ReconcileOptions)
    bridge: RepresentationBridge = field(default_factory=RepresentationBridge)

    async def create_or_update[T: DomainObject](
        self,
        desired: T,
        mutate: MutateFn,
    ) -> ReconcileResult[T]:
        """Ensure the store holds ``desired`` as shaped by ``mutate``.

        ``desired`` must carry at least its name and namespace. It is refreshed in
        place with the stored result and also returned in the result, so server
        populated fields are visible to the caller either way.

        Raises a :class:`~dynreconcile.domain.errors.ReconcileError` subclass on
        failure.
        """

        if isinstance(desired, type) or not isinstance(desired, DomainObject):
            raise TypeError(f"create_or_update requires a domain object, got {desired!r}")

        key = desired.key
        client = self.client.namespace(key.namespace)

        try:
            current = await client.get(key.name)
        except ObjectNotFoundError:
            log.debug(f"{_describe(desired, key)} not found, creating")
            return await self._create(client, key, desired, mutate)
        except Exception as exc:
            log.warning(f"Fetching {_describe(desired, key)} failed: {exc}")
            raise FetchError(f"fetching {key} failed: {exc}", key=key) from exc

        return await self._update(client, key, desired, current, mutate)

    async def _create[T: DomainObject](
        self,
        client: NamespacedResourceClient,
        key: ObjectKey,
        desired: T,
        mutate: MutateFn,
    ) -> ReconcileResult[T]:
        self._mutate(mutate, key, desired)

        payload = self.bridge.to_generic(desired)
        try:
            created = await client.create(payload)
        except Exception as exc:
            raise WriteError(f"creating {key} failed: {exc}", key=key) from exc

        self.bridge.from_generic(created, desired)
        log.info(f"{_describe(desired, key)} has been {OperationResult.CREATED}")
        return ReconcileResult(OperationResult.CREATED, desired)

    async def _update[T: DomainObject](
        self,
        client: NamespacedResourceClient,
        key: ObjectKey,
        desired: T,
        current: GenericObject,
        mutate: MutateFn,
    ) -> ReconcileResult[T]:
        existing = self.bridge.new_empty_like(desired)
        self.bridge.from_generic(current, existing)

        self._mutate(mutate, key, desired)

        before = self.bridge.to_generic(existing)
        payload = self.bridge.to_generic(desired)
        if semantically_equal(before.data, payload.data, ignore=self.options.ignored_paths):
            log.debug(f"{_describe(desired, key)} is up to date")
            return ReconcileResult(OperationResult.UNCHANGED, desired)

        payload = self._prepare_update(payload, current)
        try:
            updated = await client.update(payload)
        except Exception as exc:
            raise WriteError(f"updating {key} failed: {exc}", key=key) from exc

        self.bridge.from_generic(updated, desired)
        log.info(f"{_describe(desired, key)} has been {OperationResult.UPDATED}")
        return ReconcileResult(OperationResult.UPDATED, desired)

    def _prepare_update(self, payload: GenericObject, current: GenericObject) -> GenericObject:
        preserve = self.options.preserve_ignored and bool(self.options.ignore_fields)
        if not preserve and not self.options.optimistic_lock:
            return payload

        # generic payloads are the caller's own object, never edit them in place
        payload = payload.deep_copy()
        if preserve:
            for path in self.options.ignored_paths:
                stored = get_nested(current.data, *path)
                if stored is None:
                    remove_nested(payload.data, *path)
                else:
                    set_nested(payload.data, copy.deepcopy(stored), *path)
        if self.options.optimistic_lock and current.resource_version:
            payload.resource_version = current.resource_version
        return payload

    @staticmethod
    def _mutate(mutate: MutateFn, key: ObjectKey, obj: DomainObject) -> None:
        try:
            mutate()
        except Exception as exc:
            raise MutationError(f"mutating {key} failed: {exc}", key=key) from exc

        new_key = obj.key
        if new_key != key:
            raise IdentityViolationError(
                f"mutate callback cannot change object name and/or namespace "
                f"({key} -> {new_key})",
                key=key,
            )


async def create_or_update[T: DomainObject](
    client: ResourceClient,
    desired: T,
    mutate: MutateFn,
    *,
    options: ReconcileOptions | None = None,
) -> ReconcileResult[T]:
    """Create or update ``desired`` through ``client``; see :class:`Reconciler`."""

    reconciler = Reconciler(client, options=options or ReconcileOptions())
    return await reconciler.create_or_update(desired, mutate)
