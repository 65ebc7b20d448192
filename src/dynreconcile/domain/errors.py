"""Error taxonomy for object stores and reconciliation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .outcome import OperationResult

if TYPE_CHECKING:
    from .model.identity import ObjectKey


class StoreError(RuntimeError):
    """Raised by object store adapters when a remote call fails."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class ObjectNotFoundError(StoreError):
    """The addressed object does not exist."""


class AlreadyExistsError(StoreError):
    """A create collided with an existing object of the same identity."""


class ConflictError(StoreError):
    """An update was rejected because the stored version moved on."""


class ReconcileError(RuntimeError):
    """Base class for terminal create-or-update failures.

    ``operation`` is always :attr:`OperationResult.UNCHANGED`. Nothing was written,
    except for a :class:`ConversionError` raised while loading the store's answer
    into the desired object, which happens after a successful write. The
    underlying failure, if any, is chained as ``__cause__``.
    """

    operation: OperationResult = OperationResult.UNCHANGED

    def __init__(self, message: str, *, key: ObjectKey | None = None) -> None:
        super().__init__(message)
        self.key = key


class FetchError(ReconcileError):
    """Reading the current state failed for a reason other than not-found."""


class MutationError(ReconcileError):
    """The caller's mutate callback raised."""


class IdentityViolationError(ReconcileError):
    """The mutate callback changed the object's name or namespace.

    This is a contract violation by the caller and should not be retried.
    """


class ConversionError(ReconcileError):
    """An object could not be converted between typed and generic form."""


class WriteError(ReconcileError):
    """The store rejected a create or update."""


class UnregisteredKindError(LookupError):
    """The type registry has no entry for a kind or class."""
