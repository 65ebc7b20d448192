"""Outcome types of a create-or-update call."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class OperationResult(StrEnum):
    """Action taken by a reconciliation.

    Values complete the sentence "Deployment default/foo has been ...".
    """

    UNCHANGED = "unchanged"
    CREATED = "created"
    UPDATED = "updated"


@dataclass(frozen=True, slots=True)
class ReconcileResult[T]:
    """Operation performed together with the object as resolved by the store."""

    operation: OperationResult
    obj: T

    @property
    def changed(self) -> bool:
        return self.operation is not OperationResult.UNCHANGED
