"""Object store API configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from .env import env_flag, require_env_var
from .http_resilience import RateLimit, ResilienceConfig

STORE_TIMEOUT_SECONDS = 30.0
STORE_RATE_LIMIT = RateLimit(max_calls=20, per_seconds=1.0)


@dataclass(frozen=True)
class StoreConfig:
    """Connection settings for the HTTP object store.

    A ``token`` becomes a bearer ``Authorization`` header unless ``resilience``
    already sends one.
    """

    base_url: str
    resilience: ResilienceConfig
    token: str | None = None

    def __post_init__(self) -> None:
        if not self.token:
            return
        headers = dict(self.resilience.default_headers or {})
        if "Authorization" in headers:
            return
        headers["Authorization"] = f"Bearer {self.token}"
        object.__setattr__(self, "resilience", replace(self.resilience, default_headers=headers))


def build_store_resilience(
    base_url: str,
    *,
    token: str | None = None,
    verify: bool | str = True,
) -> ResilienceConfig:
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return ResilienceConfig(
        name="object-store",
        base_url=base_url,
        timeout_seconds=STORE_TIMEOUT_SECONDS,
        ratelimit=STORE_RATE_LIMIT,
        default_headers=headers,
        verify=verify,
    )


def get_store_config(*, resilience: ResilienceConfig | None = None) -> StoreConfig:
    base_url = require_env_var("DYNRECONCILE_API_URL").rstrip("/")
    token = os.getenv("DYNRECONCILE_API_TOKEN") or None
    verify: bool | str = os.getenv("DYNRECONCILE_CA_FILE") or True
    if env_flag("DYNRECONCILE_INSECURE"):
        verify = False
    return StoreConfig(
        base_url=base_url,
        token=token,
        resilience=resilience or build_store_resilience(base_url, token=token, verify=verify),
    )
