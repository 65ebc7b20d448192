"""Domain port definitions for adapters."""

from __future__ import annotations

from .store import NamespacedResourceClient, ObjectStore, ResourceClient

__all__ = [
    "NamespacedResourceClient",
    "ObjectStore",
    "ResourceClient",
]
