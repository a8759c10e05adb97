"""Outcome of a conditional write against storage."""

from __future__ import annotations

from enum import Enum


class WriteOutcome(Enum):
    APPLIED = "APPLIED"
    # The exact same write was already committed by an earlier invocation.
    DUPLICATE = "DUPLICATE"
    # The SKU had fewer units in stock than the write asked for; nothing changed.
    DEPLETED = "DEPLETED"

    @property
    def is_duplicate(self) -> bool:
        return self is WriteOutcome.DUPLICATE

    @property
    def is_depleted(self) -> bool:
        return self is WriteOutcome.DEPLETED
