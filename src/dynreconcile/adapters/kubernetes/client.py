"""HTTP object store speaking a Kubernetes-style REST API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from dynreconcile.adapters.http_resilience import ResilienceConfig, ResilientClient
from dynreconcile.config.store import StoreConfig, get_store_config
from dynreconcile.domain.errors import (
    AlreadyExistsError,
    ConflictError,
    ObjectNotFoundError,
    StoreError,
)
from dynreconcile.domain.model import GenericList, GenericObject, GroupVersionResource

from .schema import ListPayload, StatusPayload

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from dynreconcile.domain.ports import ObjectStore

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def collection_path(resource: GroupVersionResource, namespace: str) -> str:
    """URL path of a resource collection; core group objects live under ``/api``."""

    prefix = f"/api/{resource.version}" if not resource.group else f"/apis/{resource.api_version}"
    if namespace:
        prefix = f"{prefix}/namespaces/{quote(namespace, safe='')}"
    return f"{prefix}/{resource.resource}"


def object_path(resource: GroupVersionResource, namespace: str, name: str) -> str:
    if not name:
        raise StoreError("object name must not be empty", reason="BadRequest")
    return f"{collection_path(resource, namespace)}/{quote(name, safe='')}"


def _parse_status(response: httpx.Response) -> StatusPayload:
    try:
        return StatusPayload.model_validate(response.json())
    except (ValueError, ValidationError):
        return StatusPayload(message=response.text.strip(), code=response.status_code)


def raise_for_status(response: httpx.Response) -> None:
    """Translate a non-2xx response into the matching store error."""

    if response.is_success:
        return

    status = _parse_status(response)
    code = response.status_code
    message = status.message or f"{code} {response.reason_phrase}"
    if code == httpx.codes.NOT_FOUND:
        raise ObjectNotFoundError(message, status_code=code, reason=status.reason or "NotFound")
    if code == httpx.codes.CONFLICT:
        if status.reason == "AlreadyExists":
            raise AlreadyExistsError(message, status_code=code, reason=status.reason)
        raise ConflictError(message, status_code=code, reason=status.reason or "Conflict")
    request = response.request
    log.error(f"Object store request {request.method} {request.url} failed with {code}: {message}")
    raise StoreError(message, status_code=code, reason=status.reason)


def _object_from_response(response: httpx.Response) -> GenericObject:
    payload = response.json()
    if not isinstance(payload, dict):
        raise StoreError("Unexpected object store response payload")
    return GenericObject(payload)


@dataclass(slots=True)
class HttpNamespacedClient:
    store: HttpObjectStore
    resource: GroupVersionResource
    namespace: str

    async def get(self, name: str) -> GenericObject:
        path = object_path(self.resource, self.namespace, name)
        response = await self.store.send("GET", path)
        return _object_from_response(response)

    async def create(self, obj: GenericObject) -> GenericObject:
        path = collection_path(self.resource, self.namespace)
        response = await self.store.send("POST", path, json=obj.data)
        return _object_from_response(response)

    async def update(self, obj: GenericObject) -> GenericObject:
        path = object_path(self.resource, self.namespace, obj.name)
        response = await self.store.send("PUT", path, json=obj.data)
        return _object_from_response(response)

    async def list(self) -> GenericList:
        path = collection_path(self.resource, self.namespace)
        response = await self.store.send("GET", path)
        try:
            payload = ListPayload.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise StoreError(f"Unexpected list payload for {self.resource}") from exc
        return GenericList(
            api_version=payload.api_version,
            kind=payload.kind,
            resource_version=payload.metadata.resource_version,
            items=[GenericObject(item) for item in payload.items],
        )


@dataclass(slots=True)
class HttpResourceClient:
    store: HttpObjectStore
    resource: GroupVersionResource

    def namespace(self, namespace: str) -> HttpNamespacedClient:
        return HttpNamespacedClient(self.store, self.resource, namespace)


@dataclass(slots=True)
class HttpObjectStore:
    """Object store backed by HTTP; use as ``async with`` to share one connection pool.

    Outside of a context block every request opens and closes its own client.
    """

    config: StoreConfig = field(default_factory=get_store_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> HttpObjectStore:
        if self._client is None:
            self._client = self.client_factory(self.config.resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            client, self._client = self._client, None
            await client.aclose()

    def resource(self, resource: GroupVersionResource) -> HttpResourceClient:
        return HttpResourceClient(self, resource)

    async def send(
        self, method: str, path: str, *, json: Any = None  # noqa: ANN401
    ) -> httpx.Response:
        if self._client is not None:
            return await self._send(self._client, method, path, json=json)
        async with self.client_factory(self.config.resilience) as client:
            return await self._send(client, method, path, json=json)

    async def _send(
        self,
        client: ResilientClient,
        method: str,
        path: str,
        *,
        json: Any,  # noqa: ANN401
    ) -> httpx.Response:
        url = f"{self.config.base_url}{path}"
        try:
            if json is None:
                response = await client.request(method, url)
            else:
                response = await client.request(method, url, json=json)
        except httpx.HTTPError as exc:
            raise StoreError(f"{method} {url} failed: {exc}") from exc
        raise_for_status(response)
        return response


if TYPE_CHECKING:
    _store_check: ObjectStore = HttpObjectStore()
