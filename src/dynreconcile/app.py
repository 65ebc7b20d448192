"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from dynreconcile.adapters.kubernetes import HttpObjectStore
from dynreconcile.config import get_reconcile_options, get_store_config
from dynreconcile.domain.reconciler import Reconciler

if TYPE_CHECKING:
    from dynreconcile.config import StoreConfig
    from dynreconcile.domain.model import DomainObject, GroupVersionResource
    from dynreconcile.domain.options import ReconcileOptions
    from dynreconcile.domain.outcome import ReconcileResult
    from dynreconcile.domain.ports import ObjectStore
    from dynreconcile.domain.reconciler import MutateFn


log = getLogger(__name__)


def build_object_store(config: StoreConfig | None = None) -> HttpObjectStore:
    """Create the HTTP object store from explicit or environment configuration."""

    return HttpObjectStore(config=config or get_store_config())


async def apply_object[T: DomainObject](
    resource: GroupVersionResource,
    desired: T,
    mutate: MutateFn,
    *,
    store: ObjectStore | None = None,
    options: ReconcileOptions | None = None,
) -> ReconcileResult[T]:
    """Create or update ``desired`` in ``resource``.

    Without an explicit ``store`` an HTTP store is built from the environment and
    closed again afterwards. Options default to :func:`get_reconcile_options`.
    """

    effective_options = options or get_reconcile_options()
    if store is None:
        async with build_object_store() as http_store:
            result = await _apply(http_store, resource, desired, mutate, effective_options)
    else:
        result = await _apply(store, resource, desired, mutate, effective_options)

    log.info(f"Reconciled {resource.resource} {desired.key}: {result.operation}")
    return result


async def _apply[T: DomainObject](
    store: ObjectStore,
    resource: GroupVersionResource,
    desired: T,
    mutate: MutateFn,
    options: ReconcileOptions,
) -> ReconcileResult[T]:
    reconciler = Reconciler(store.resource(resource), options=options)
    return await reconciler.create_or_update(desired, mutate)
