"""Registry of the typed kinds known to a process."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dynreconcile.domain.errors import UnregisteredKindError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .identity import GroupVersionKind


class TypeRegistry:
    """Bidirectional mapping between kinds and the Python classes modelling them.

    Several kinds may share one class (generic shells do), so class lookups
    return every kind registered for it in registration order.
    """

    def __init__(self) -> None:
        self._types: dict[GroupVersionKind, type] = {}
        self._kinds: dict[type, list[GroupVersionKind]] = {}

    def register(self, gvk: GroupVersionKind, model: type) -> None:
        existing = self._types.get(gvk)
        if existing is model:
            return
        if existing is not None:
            raise ValueError(
                f"{gvk} is already registered to {existing.__name__}, not {model.__name__}"
            )
        self._types[gvk] = model
        self._kinds.setdefault(model, []).append(gvk)

    def recognizes(self, gvk: GroupVersionKind) -> bool:
        return gvk in self._types

    def model_for(self, gvk: GroupVersionKind) -> type:
        try:
            return self._types[gvk]
        except KeyError:
            raise UnregisteredKindError(f"no type registered for {gvk}") from None

    def kinds_for(self, obj: object) -> tuple[GroupVersionKind, ...]:
        kinds = self._kinds.get(type(obj))
        if not kinds:
            raise UnregisteredKindError(f"no kind registered for type {type(obj).__name__}")
        return tuple(kinds)

    def kind_for(self, obj: object) -> GroupVersionKind:
        return self.kinds_for(obj)[0]

    def known_kinds(self) -> Iterable[GroupVersionKind]:
        return tuple(self._types)

    def __contains__(self, gvk: object) -> bool:
        return gvk in self._types

    def __len__(self) -> int:
        return len(self._types)
