from __future__ import annotations

import pytest

from dynreconcile.domain.equality import (
    SERVER_MANAGED_FIELDS,
    parse_field_path,
    parse_field_paths,
    prune_fields,
    semantically_equal,
)


def test_key_order_does_not_matter() -> None:
    left = {"spec": {"replicas": 1, "paused": False}, "kind": "Deployment"}
    right = {"kind": "Deployment", "spec": {"paused": False, "replicas": 1}}

    assert semantically_equal(left, right)


def test_list_order_matters() -> None:
    left = {"spec": {"args": ["a", "b"]}}
    right = {"spec": {"args": ["b", "a"]}}

    assert not semantically_equal(left, right)


def test_empty_values_compare_equal_to_absent_keys() -> None:
    left = {"metadata": {"name": "a", "labels": {}}, "spec": {"args": [], "paused": None}}
    right = {"metadata": {"name": "a"}, "spec": {}}

    assert semantically_equal(left, right)
    assert semantically_equal({"status": {}}, {})


def test_present_values_still_differ_from_absent_keys() -> None:
    assert not semantically_equal({"metadata": {"labels": {"app": "a"}}}, {"metadata": {}})
    assert not semantically_equal({"spec": {"paused": False}}, {"spec": {}})


def test_empty_list_items_keep_their_position() -> None:
    assert not semantically_equal({"spec": {"args": [{}, "a"]}}, {"spec": {"args": ["a"]}})


def test_ignored_paths_are_excluded_from_both_sides() -> None:
    left = {"spec": {"replicas": 1}, "status": {"ready": 1}}
    right = {"spec": {"replicas": 1}}

    assert semantically_equal(left, right, ignore=[("status",)])
    assert not semantically_equal(left, {"spec": {"replicas": 2}}, ignore=[("status",)])


def test_nested_ignore_keeps_siblings() -> None:
    left = {"metadata": {"name": "a", "resourceVersion": "1"}}
    right = {"metadata": {"name": "a", "resourceVersion": "7"}}

    assert semantically_equal(left, right, ignore=parse_field_paths(SERVER_MANAGED_FIELDS))
    assert not semantically_equal(
        left | {"metadata": {"name": "b"}},
        right,
        ignore=parse_field_paths(SERVER_MANAGED_FIELDS),
    )


def test_prune_fields_leaves_input_alone() -> None:
    data = {"metadata": {"name": "a", "uid": "u"}}

    pruned = prune_fields(data, [("metadata", "uid"), ("absent", "path")])

    assert pruned == {"metadata": {"name": "a"}}
    assert data == {"metadata": {"name": "a", "uid": "u"}}


def test_parse_field_path_splits_on_dots() -> None:
    assert parse_field_path("metadata.resourceVersion") == ("metadata", "resourceVersion")
    assert parse_field_paths(["status", "status", "metadata.uid"]) == (
        ("metadata", "uid"),
        ("status",),
    )


@pytest.mark.parametrize("path", ["", ".", "metadata.", "a..b"])
def test_parse_field_path_rejects_empty_segments(path: str) -> None:
    with pytest.raises(ValueError, match="Invalid field path"):
        parse_field_path(path)
