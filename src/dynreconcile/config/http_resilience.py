"""Retry, rate limit and TLS settings for the HTTP object store client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping

IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})
RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Transport-level retry settings handed to ``httpx_retries.Retry``.

    Only reads are retried by default. A replayed create collides with its own
    first attempt and a replayed update may overwrite a concurrent writer.
    """

    total: int = 4
    backoff_factor: float = 0.5
    max_backoff_wait: float = 60.0
    respect_retry_after_header: bool = True
    allowed_methods: frozenset[str] = IDEMPOTENT_METHODS
    status_forcelist: frozenset[int] = RETRYABLE_STATUSES
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )
    backoff_jitter: float = 1.0

    def __post_init__(self) -> None:
        if self.total < 0:
            raise ValueError(f"retry total must not be negative, got {self.total}")


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float

    def __post_init__(self) -> None:
        if self.max_calls <= 0 or self.per_seconds <= 0:
            raise ValueError(
                f"rate limit must be positive, got {self.max_calls}/{self.per_seconds}s"
            )


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    """Everything needed to build one :class:`ResilientClient`.

    ``verify`` is either a flag or the path of a CA bundle.
    """

    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    default_headers: Mapping[str, str] | None = None
    verify: bool | str = True
