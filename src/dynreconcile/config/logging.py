"""Root logger setup for processes driving reconciliations."""

from __future__ import annotations

import logging
import os

from .errors import ConfigurationError

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
# one line per HTTP request at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore")


def resolve_log_level(value: str | None, *, default: int = logging.INFO) -> int:
    """Turn a level name such as ``debug`` or a number into a logging level."""

    if value is None or not value.strip():
        return default
    normalized = value.strip().upper()
    if normalized.isdigit():
        return int(normalized)
    level = logging.getLevelNamesMapping().get(normalized)
    if level is None:
        raise ConfigurationError(f"Unknown log level: {value!r}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger.

    Without an explicit ``level`` the ``DYNRECONCILE_LOG_LEVEL`` variable decides,
    falling back to INFO. HTTP client loggers stay at WARNING unless DEBUG is
    requested. Pass ``force=True`` to replace handlers installed earlier.
    """

    effective = level if level is not None else resolve_log_level(
        os.getenv("DYNRECONCILE_LOG_LEVEL")
    )
    logging.basicConfig(
        level=effective,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )
    chatty_level = logging.DEBUG if effective <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(chatty_level)
