"""Public interface for the HTTP object store adapter."""

from __future__ import annotations

from .client import (
    HttpNamespacedClient,
    HttpObjectStore,
    HttpResourceClient,
    collection_path,
    object_path,
    raise_for_status,
)
from .schema import ListPayload, StatusPayload

__all__ = [
    "HttpNamespacedClient",
    "HttpObjectStore",
    "HttpResourceClient",
    "ListPayload",
    "StatusPayload",
    "collection_path",
    "object_path",
    "raise_for_status",
]
