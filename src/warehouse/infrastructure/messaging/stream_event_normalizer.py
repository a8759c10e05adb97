"""Normalize event-store change records into domain events.

The event store's change stream is forwarded through an event bus, so each
record looks like::

    {
        "source": "...",
        "detail-type": "...",
        "detail": {"dynamodb": {"NewImage": {<DynamoDB attribute-value map>}}},
    }

The new image is decoded and validated as exactly one kind of event.
Anything that cannot be decoded or does not match is invalid input and
will never succeed on redelivery.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from warehouse.domain.exceptions import InvalidArgumentsError
from warehouse.domain.model.events import OrderCreatedEvent, SkuRestockedEvent
from warehouse.infrastructure.persistence.dynamodb_utils import unmarshall

_DECODE_ERRORS = (TypeError, ValueError, AttributeError, KeyError, ArithmeticError)


def normalize_sku_restocked_event(change_record: Any) -> SkuRestockedEvent:
    return SkuRestockedEvent.validate_and_build(decode_new_image(change_record))


def normalize_order_created_event(change_record: Any) -> OrderCreatedEvent:
    return OrderCreatedEvent.validate_and_build(decode_new_image(change_record))


def decode_new_image(change_record: Any) -> dict:
    """Return the plain row carried by *change_record*."""
    if not isinstance(change_record, Mapping):
        raise InvalidArgumentsError(
            f"Change record must be an object, got {type(change_record).__name__}",
            field="changeRecord",
        )
    for field in ("source", "detail-type"):
        if field not in change_record:
            raise InvalidArgumentsError(f"Change record is missing {field!r}", field=field)

    try:
        new_image = change_record["detail"]["dynamodb"]["NewImage"]
        return unmarshall(new_image)
    except _DECODE_ERRORS as exc:
        raise InvalidArgumentsError(
            "Could not decode the change record's new image", cause=exc, field="NewImage"
        ) from exc
