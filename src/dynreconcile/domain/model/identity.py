"""Identity primitives: object keys and kind/resource coordinates."""

from __future__ import annotations

from dataclasses import dataclass

_VOWELS = frozenset("aeiou")


@dataclass(frozen=True, slots=True)
class ObjectKey:
    """Name and namespace addressing one object within a resource type."""

    name: str
    namespace: str = ""

    def __str__(self) -> str:
        if not self.namespace:
            return self.name
        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True, slots=True)
class GroupVersionKind:
    group: str
    version: str
    kind: str

    @property
    def api_version(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    @classmethod
    def from_api_version(cls, api_version: str, kind: str) -> GroupVersionKind:
        group, sep, version = api_version.rpartition("/")
        if not sep:
            return cls(group="", version=api_version, kind=kind)
        return cls(group=group, version=version, kind=kind)

    def list_kind(self) -> GroupVersionKind:
        return GroupVersionKind(group=self.group, version=self.version, kind=f"{self.kind}List")

    def is_list(self) -> bool:
        return self.kind.endswith("List")

    def item_kind(self) -> GroupVersionKind:
        """Inverse of :meth:`list_kind`."""

        if not self.is_list():
            raise ValueError(f"{self.kind} is not a list kind")
        return GroupVersionKind(group=self.group, version=self.version, kind=self.kind[:-4])

    def __str__(self) -> str:
        return f"{self.api_version}, Kind={self.kind}"


@dataclass(frozen=True, slots=True)
class GroupVersionResource:
    group: str
    version: str
    resource: str

    @property
    def api_version(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    def __str__(self) -> str:
        return f"{self.api_version}, Resource={self.resource}"


def guess_resource(gvk: GroupVersionKind) -> GroupVersionResource:
    """Derive the plural resource for a kind by naive English pluralisation.

    Only suitable where no discovery information is available, e.g. test doubles.
    """

    singular = gvk.kind.lower()
    if not singular:
        plural = singular
    elif singular.endswith("s"):
        plural = f"{singular}es"
    elif singular.endswith("y") and len(singular) > 1 and singular[-2] not in _VOWELS:
        plural = f"{singular[:-1]}ies"
    else:
        plural = f"{singular}s"
    return GroupVersionResource(group=gvk.group, version=gvk.version, resource=plural)
