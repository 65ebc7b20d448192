"""Pydantic base models for strongly typed store objects."""

from __future__ import annotations

from typing import Any, ClassVar, Self, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticSerializationError, to_json

from dynreconcile.domain.errors import ConversionError

from .generic import GenericObject
from .identity import GroupVersionKind, ObjectKey


class WireModel(BaseModel):
    """Base for schema fragments: camelCase on the wire, unknown fields dropped.

    ``None`` means "absent on the wire", so an optional field must default to
    ``None``; any other default would come back in place of an explicit ``None``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:  # noqa: ANN401
        super().__pydantic_init_subclass__(**kwargs)
        for field_name, info in cls.model_fields.items():
            optional = type(None) in get_args(info.annotation)
            if optional and not info.is_required() and info.default is not None:
                raise TypeError(
                    f"{cls.__name__}.{field_name} is optional and must default to None"
                )


class ObjectMeta(WireModel):
    name: str = ""
    namespace: str = ""
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    uid: str | None = None
    resource_version: str | None = None
    generation: int | None = None
    creation_timestamp: str | None = None


class TypedObject(WireModel):
    """A store object with a known schema.

    Subclasses declare their fields and usually pin ``group_version_kind`` so
    ``apiVersion`` and ``kind`` are filled in on construction.
    """

    group_version_kind: ClassVar[GroupVersionKind | None] = None

    api_version: str = ""
    kind: str = ""
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    def model_post_init(self, context: Any, /) -> None:  # noqa: ANN401
        gvk = type(self).group_version_kind
        if gvk is None:
            return
        if not self.api_version:
            self.api_version = gvk.api_version
        if not self.kind:
            self.kind = gvk.kind

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    # DomainObject capabilities

    @property
    def key(self) -> ObjectKey:
        return ObjectKey(name=self.metadata.name, namespace=self.metadata.namespace)

    def to_generic(self) -> GenericObject:
        try:
            data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        except PydanticSerializationError as exc:
            raise ConversionError(
                f"cannot convert {type(self).__name__} {self.key} to generic form: {exc}",
                key=self.key,
            ) from exc
        return GenericObject(data)

    def load_generic(self, generic: GenericObject) -> None:
        """Overwrite every field from ``generic``.

        Values are validated strictly as JSON, the way they travel on the wire:
        a ``"2"`` stored for an integer field is a shape mismatch, not a 2.
        """

        try:
            loaded = type(self).model_validate_json(to_json(generic.data), strict=True)
        except (ValidationError, PydanticSerializationError) as exc:
            raise ConversionError(
                f"cannot convert {generic.kind or 'object'} {generic.key} "
                f"into {type(self).__name__}: {exc}",
                key=generic.key,
            ) from exc
        for field_name in type(self).model_fields:
            setattr(self, field_name, getattr(loaded, field_name))

    def new_empty(self) -> Self:
        return type(self).model_construct()
