from __future__ import annotations

from typing import Any

import pytest

from dynreconcile.domain.bridge import RepresentationBridge
from dynreconcile.domain.errors import ConversionError
from dynreconcile.domain.model import GenericObject, ObjectMeta, TypedObject
from tests.support.deployments import (
    Deployment,
    busybox_spec,
    new_deployment,
    new_generic_deployment,
)


class Opaque(TypedObject):
    payload: Any = None


@pytest.fixture
def bridge() -> RepresentationBridge:
    return RepresentationBridge()


def test_typed_round_trip_restores_equal_object(bridge: RepresentationBridge) -> None:
    deploy = new_deployment("web")
    deploy.spec = busybox_spec()
    deploy.metadata.labels = {"app": "web"}

    restored = bridge.new_empty_like(deploy)
    bridge.from_generic(bridge.to_generic(deploy), restored)

    assert restored == deploy


def test_typed_to_generic_uses_wire_names(bridge: RepresentationBridge) -> None:
    deploy = new_deployment("web", namespace="prod")
    deploy.spec = busybox_spec()

    generic = bridge.to_generic(deploy)

    assert generic.api_version == "apps/v1"
    assert generic.kind == "Deployment"
    assert generic.key == deploy.key
    assert generic.get_nested("spec", "selector", "matchLabels") == {"foo": "bar"}
    assert "status" not in generic.data


def test_generic_passes_through_untouched(bridge: RepresentationBridge) -> None:
    generic = new_generic_deployment("web")

    assert bridge.to_generic(generic) is generic

    target = bridge.new_empty_like(generic)
    bridge.from_generic(generic, target)
    assert target.data is generic.data


def test_from_generic_replaces_every_typed_field(bridge: RepresentationBridge) -> None:
    target = new_deployment("web")
    target.spec = busybox_spec()
    source = new_generic_deployment("web")
    source.set_nested(3, "spec", "replicas")

    bridge.from_generic(source, target)

    assert target.spec.replicas == 3
    assert target.spec.selector is None
    assert target.spec.template.spec.containers == []


def test_from_generic_drops_unknown_fields(bridge: RepresentationBridge) -> None:
    source = new_generic_deployment("web")
    source.set_nested("yes", "spec", "somethingNew")
    target = bridge.new_empty_like(new_deployment("web"))

    bridge.from_generic(source, target)

    assert "somethingNew" not in bridge.to_generic(target).get_nested("spec")


def test_from_generic_rejects_mismatched_shape(bridge: RepresentationBridge) -> None:
    source = new_generic_deployment("web")
    source.set_nested("many", "spec", "replicas")

    with pytest.raises(ConversionError) as excinfo:
        bridge.from_generic(source, new_deployment("web"))

    assert excinfo.value.key == source.key


def test_from_generic_does_not_coerce_numeric_strings(bridge: RepresentationBridge) -> None:
    source = new_generic_deployment("web")
    source.set_nested("2", "spec", "replicas")
    target = new_deployment("web")

    with pytest.raises(ConversionError):
        bridge.from_generic(source, target)

    assert target.spec.replicas is None


def test_to_generic_rejects_unserializable_values(bridge: RepresentationBridge) -> None:
    opaque = Opaque(metadata=ObjectMeta(name="blob"), payload=object())

    with pytest.raises(ConversionError):
        bridge.to_generic(opaque)


def test_new_empty_like_matches_concrete_class(bridge: RepresentationBridge) -> None:
    empty = bridge.new_empty_like(new_deployment("web"))

    assert type(empty) is Deployment
    assert empty.metadata.name == ""
    assert isinstance(bridge.new_empty_like(GenericObject({"a": 1})), GenericObject)
    assert bridge.new_empty_like(GenericObject({"a": 1})).data == {}


def test_new_empty_like_rejects_classes(bridge: RepresentationBridge) -> None:
    with pytest.raises(TypeError, match="class Deployment"):
        bridge.new_empty_like(Deployment)  # type: ignore[arg-type]


def test_bridge_rejects_non_domain_objects(bridge: RepresentationBridge) -> None:
    with pytest.raises(TypeError, match="dict"):
        bridge.new_empty_like({"metadata": {}})  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        bridge.to_generic("web")  # type: ignore[arg-type]
