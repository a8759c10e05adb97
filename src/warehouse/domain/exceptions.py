"""Domain-level exceptions.

Every failure the warehouse raises is a subclass of WarehouseError and
carries a ``transient`` flag. Delivery mechanisms use that flag to decide
whether a message should be redelivered or dropped.
"""

from __future__ import annotations


class WarehouseError(Exception):
    """Base class for all warehouse errors."""

    default_message = "Warehouse error."
    transient = True

    def __init__(self, message: str | None = None, cause: BaseException | None = None) -> None:
        super().__init__(message or self.default_message)
        self.cause = cause


class InvalidArgumentsError(WarehouseError):
    """A field failed validation. Resubmitting the same input will fail again."""

    default_message = "Invalid arguments error."
    transient = False

    def __init__(
        self,
        message: str | None = None,
        cause: BaseException | None = None,
        field: str | None = None,
    ) -> None:
        super().__init__(message, cause)
        self.field = field


class InvalidOperationError(WarehouseError):
    """A caller passed the wrong kind of object. Indicates a programming defect."""

    default_message = "Invalid operation error."
    transient = False


class UnrecognizedError(WarehouseError):
    """The storage engine failed in a way we do not classify. Safe to retry."""

    default_message = "Unrecognized error."
    transient = True


def is_transient_error(error: BaseException) -> bool:
    """Return True if *error* should be retried by the delivery mechanism.

    Anything that is not a WarehouseError is unknown to us and is treated
    as transient.
    """
    if isinstance(error, WarehouseError):
        return error.transient
    return True
