from __future__ import annotations

from dynreconcile.domain.model import GenericList, GenericObject, GroupVersionKind, ObjectKey


def test_identity_accessors_read_metadata() -> None:
    obj = GenericObject(
        {
            "apiVersion": "apps/v1",
            "kind": "Deployment",
            "metadata": {"name": "web", "namespace": "prod", "resourceVersion": "12"},
        }
    )

    assert obj.key == ObjectKey(name="web", namespace="prod")
    assert obj.resource_version == "12"
    assert obj.group_version_kind == GroupVersionKind(
        group="apps", version="v1", kind="Deployment"
    )


def test_missing_or_malformed_fields_read_as_empty() -> None:
    assert GenericObject().name == ""
    assert GenericObject({"metadata": "oops"}).namespace == ""
    assert GenericObject({"metadata": {"name": 3}}).name == ""


def test_setters_create_and_remove_nested_fields() -> None:
    obj = GenericObject()

    obj.name = "web"
    obj.namespace = "prod"
    assert obj.data == {"metadata": {"name": "web", "namespace": "prod"}}

    obj.namespace = ""
    assert obj.data == {"metadata": {"name": "web"}}


def test_set_nested_replaces_non_mapping_parents() -> None:
    obj = GenericObject({"spec": "legacy"})

    obj.set_nested(2, "spec", "replicas")

    assert obj.get_nested("spec", "replicas") == 2
    assert obj.get_nested("spec", "missing", "deeper") is None


def test_deep_copy_is_independent() -> None:
    obj = GenericObject({"spec": {"args": ["a"]}})

    copied = obj.deep_copy()
    copied.get_nested("spec", "args").append("b")

    assert obj.get_nested("spec", "args") == ["a"]
    assert copied != obj


def test_load_generic_takes_over_backing_map() -> None:
    source = GenericObject({"kind": "Thing"})
    target = GenericObject({"kind": "Other"})

    target.load_generic(source)

    assert target.data is source.data
    assert target.new_empty().data == {}


def test_list_envelope_iterates_items() -> None:
    items = [GenericObject({"metadata": {"name": "a"}}), GenericObject({"metadata": {"name": "b"}})]
    listing = GenericList(api_version="apps/v1", kind="DeploymentList", items=items)

    assert [item.name for item in listing] == ["a", "b"]
    assert len(listing) == 2
    assert listing.group_version_kind.is_list()
