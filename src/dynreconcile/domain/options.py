"""Options controlling how a reconciliation compares and writes objects."""

from __future__ import annotations

from dataclasses import dataclass, field

from .equality import FieldPath, parse_field_paths


@dataclass(frozen=True, slots=True)
class ReconcileOptions:
    """Tuning knobs for :func:`dynreconcile.domain.reconciler.create_or_update`.

    ``ignore_fields`` holds dotted paths excluded from the change comparison.
    With ``preserve_ignored`` those paths are also taken from the stored object on
    update instead of being overwritten by the desired object. ``optimistic_lock``
    sends the resource version observed during the fetch along with the update so
    the store rejects it if another writer got there first.
    """

    ignore_fields: frozenset[str] = field(default_factory=frozenset[str])
    preserve_ignored: bool = False
    optimistic_lock: bool = False

    def __post_init__(self) -> None:
        # malformed paths fail here rather than mid-reconcile
        parse_field_paths(self.ignore_fields)

    @classmethod
    def ignoring(cls, *paths: str, preserve: bool = False) -> ReconcileOptions:
        return cls(ignore_fields=frozenset(paths), preserve_ignored=preserve)

    @property
    def ignored_paths(self) -> tuple[FieldPath, ...]:
        return parse_field_paths(self.ignore_fields)
