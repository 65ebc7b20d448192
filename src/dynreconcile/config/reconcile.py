"""Reconciliation option loading."""

from __future__ import annotations

from dynreconcile.domain.equality import STATUS_FIELDS
from dynreconcile.domain.options import ReconcileOptions

from .env import env_flag, env_list
from .errors import ConfigurationError


def get_reconcile_options(*, ignore_status: bool = False) -> ReconcileOptions:
    """Build options from ``DYNRECONCILE_*`` variables; all of them are optional."""

    ignore_fields = set(env_list("DYNRECONCILE_IGNORE_FIELDS"))
    if ignore_status:
        ignore_fields |= STATUS_FIELDS
    try:
        return ReconcileOptions(
            ignore_fields=frozenset(ignore_fields),
            preserve_ignored=env_flag("DYNRECONCILE_PRESERVE_IGNORED"),
            optimistic_lock=env_flag("DYNRECONCILE_OPTIMISTIC_LOCK"),
        )
    except ValueError as exc:
        raise ConfigurationError(f"Invalid DYNRECONCILE_IGNORE_FIELDS: {exc}") from exc
