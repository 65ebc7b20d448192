"""In-memory object store adapter."""

from __future__ import annotations

from .store import (
    InMemoryNamespacedClient,
    InMemoryObjectStore,
    InMemoryResourceClient,
    new_simple_store,
    to_generic_fixture,
)

__all__ = [
    "InMemoryNamespacedClient",
    "InMemoryObjectStore",
    "InMemoryResourceClient",
    "new_simple_store",
    "to_generic_fixture",
]
