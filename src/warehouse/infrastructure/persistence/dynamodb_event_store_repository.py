"""DynamoDB implementation of EventStoreRepository.

Every event is written with a not-exists condition on its key, so raising
the same event twice stores it once. SkuRestocked events are keyed by SKU,
name and lot; order events by order and name.
"""

from __future__ import annotations

import structlog

from warehouse.domain.exceptions import (
    InvalidArgumentsError,
    InvalidOperationError,
    UnrecognizedError,
)
from warehouse.domain.model.events import (
    OrderStockAllocatedEvent,
    OrderStockDepletedEvent,
    SkuRestockedEvent,
)
from warehouse.domain.model.outcome import WriteOutcome
from warehouse.domain.repository.event_store_repository import EventStoreRepository
from warehouse.infrastructure.persistence.dynamodb_utils import (
    ENCODING_ERRORS,
    STORAGE_ERRORS,
    is_conditional_check_failed,
    marshall,
)
from warehouse.infrastructure.persistence.keys import (
    EVENT_TYPE_NAME,
    event_key,
    order_event_key,
)

logger = structlog.get_logger(__name__)


class DynamoDbEventStoreRepository(EventStoreRepository):

    def __init__(self, client, table_name: str) -> None:
        self._client = client
        self._table_name = table_name

    # --- EventStoreRepository interface ---------------------------------------

    def raise_sku_restocked_event(self, event: SkuRestockedEvent) -> WriteOutcome:
        _require_event(event, SkuRestockedEvent)
        data = event.event_data
        key = event_key(data.sku, event.event_name.value, data.lot_id)
        return self._put_event(key, event)

    def raise_order_stock_allocated_event(self, event: OrderStockAllocatedEvent) -> WriteOutcome:
        _require_event(event, OrderStockAllocatedEvent)
        return self._put_event(order_event_key(event.event_data.order_id, event.event_name.value), event)

    def raise_order_stock_depleted_event(self, event: OrderStockDepletedEvent) -> WriteOutcome:
        _require_event(event, OrderStockDepletedEvent)
        return self._put_event(order_event_key(event.event_data.order_id, event.event_name.value), event)

    # --- Writing --------------------------------------------------------------

    def _put_event(self, key: dict[str, str], event) -> WriteOutcome:
        try:
            item = marshall({**key, "_tn": EVENT_TYPE_NAME, **event.to_dict()})
        except ENCODING_ERRORS as exc:
            raise InvalidArgumentsError(
                f"{event.event_name.value} cannot be stored", cause=exc, field="eventData"
            ) from exc

        try:
            self._client.put_item(
                TableName=self._table_name,
                Item=item,
                ConditionExpression="attribute_not_exists(pk) AND attribute_not_exists(sk)",
            )
        except STORAGE_ERRORS as exc:
            if is_conditional_check_failed(exc):
                return WriteOutcome.DUPLICATE

            logger.error(
                "Event store write failed",
                event_name=event.event_name.value,
                pk=key["pk"],
                error=repr(exc),
            )
            raise UnrecognizedError(cause=exc) from exc

        return WriteOutcome.APPLIED


def _require_event(event, expected: type) -> None:
    if not isinstance(event, expected):
        raise InvalidOperationError(
            f"Expected {expected.__name__}, got {type(event).__name__}"
        )
