"""Semantic comparison of attribute maps."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Final

from .model.generic import remove_nested

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .model.generic import AttributeMap

type FieldPath = tuple[str, ...]

STATUS_FIELDS: Final[frozenset[str]] = frozenset({"status"})
SERVER_MANAGED_FIELDS: Final[frozenset[str]] = frozenset(
    {
        "metadata.uid",
        "metadata.resourceVersion",
        "metadata.generation",
        "metadata.creationTimestamp",
        "metadata.managedFields",
        "metadata.selfLink",
    }
)


def parse_field_path(path: str) -> FieldPath:
    """Split a dotted path such as ``metadata.resourceVersion`` into its keys."""

    parts = tuple(part.strip() for part in path.split("."))
    if not parts or any(not part for part in parts):
        raise ValueError(f"Invalid field path: {path!r}")
    return parts


def parse_field_paths(paths: Iterable[str]) -> tuple[FieldPath, ...]:
    return tuple(sorted({parse_field_path(path) for path in paths}))


def prune_fields(data: Mapping[str, object], ignore: Iterable[FieldPath]) -> AttributeMap:
    """Return a deep copy of ``data`` without the ignored paths."""

    pruned: AttributeMap = copy.deepcopy(dict(data))
    for path in ignore:
        remove_nested(pruned, *path)
    return pruned


def drop_empty(value: object) -> object:
    """Return ``value`` with null values, empty maps and empty lists removed from maps.

    List items are normalised but never removed, so list positions still count.
    """

    if isinstance(value, dict):
        cleaned: AttributeMap = {}
        for name, item in value.items():
            normalized = drop_empty(item)
            if normalized is None or normalized == {} or normalized == []:
                continue
            cleaned[name] = normalized
        return cleaned
    if isinstance(value, list):
        return [drop_empty(item) for item in value]
    return value


def semantically_equal(
    left: Mapping[str, object],
    right: Mapping[str, object],
    *,
    ignore: Iterable[FieldPath] = (),
) -> bool:
    """Compare two attribute maps by value.

    Mapping key order never matters, list order does. A null value, an empty map
    and an empty list count the same as an absent key. Paths in ``ignore`` are
    removed from both sides before comparing.
    """

    ignored = tuple(ignore)
    return drop_empty(prune_fields(left, ignored)) == drop_empty(prune_fields(right, ignored))
