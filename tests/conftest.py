from __future__ import annotations

import itertools
import os

import pytest

from dynreconcile.adapters.memory import InMemoryObjectStore, new_simple_store
from dynreconcile.domain.model import GenericList, TypeRegistry
from tests.support.deployments import DEPLOYMENT_GVK, Deployment

os.environ.setdefault("DYNRECONCILE_API_URL", "https://store.invalid")

_names = itertools.count(1)


@pytest.fixture
def registry() -> TypeRegistry:
    registry = TypeRegistry()
    registry.register(DEPLOYMENT_GVK, Deployment)
    registry.register(DEPLOYMENT_GVK.list_kind(), GenericList)
    return registry


@pytest.fixture
def store(registry: TypeRegistry) -> InMemoryObjectStore:
    return new_simple_store(registry)


@pytest.fixture
def deployment_name() -> str:
    return f"deploy-{next(_names)}"
