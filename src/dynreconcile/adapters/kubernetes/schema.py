"""Pydantic models for the envelope payloads of a Kubernetes-style REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ApiBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class StatusDetails(ApiBaseModel):
    name: str | None = None
    group: str | None = None
    kind: str | None = None


class StatusPayload(ApiBaseModel):
    """``Status`` object returned with non-2xx responses."""

    kind: str = "Status"
    status: str | None = None
    message: str = ""
    reason: str | None = None
    code: int | None = None
    details: StatusDetails | None = None


class ListMeta(ApiBaseModel):
    resource_version: str = Field(default="", alias="resourceVersion")
    continue_token: str | None = Field(default=None, alias="continue")


class ListPayload(ApiBaseModel):
    api_version: str = Field(default="", alias="apiVersion")
    kind: str = ""
    metadata: ListMeta = Field(default_factory=ListMeta)
    items: list[dict[str, Any]] = Field(default_factory=list)
