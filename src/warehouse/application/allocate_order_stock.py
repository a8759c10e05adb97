"""Application service: Allocate Order Stock use case (worker side).

Takes the units an OrderCreated event asks for out of the SKU's stock and
answers with an OrderStockAllocated or OrderStockDepleted event.

A duplicate allocation means an earlier delivery already took the stock,
possibly without getting as far as raising its event, so the allocated
event is raised again. The event store ignores the repeat.
"""

from __future__ import annotations

import structlog

from warehouse.application.dto import AllocationResultDTO
from warehouse.domain.exceptions import InvalidOperationError
from warehouse.domain.model.commands import AllocateOrderStockCommand
from warehouse.domain.model.events import (
    OrderCreatedEvent,
    OrderStockAllocatedEvent,
    OrderStockDepletedEvent,
)
from warehouse.domain.repository.event_store_repository import EventStoreRepository
from warehouse.domain.repository.sku_ledger_repository import SkuLedgerRepository

logger = structlog.get_logger(__name__)


class AllocateOrderStockHandler:

    def __init__(
        self,
        ledger_repo: SkuLedgerRepository,
        event_store_repo: EventStoreRepository,
    ) -> None:
        self._ledger_repo = ledger_repo
        self._event_store_repo = event_store_repo

    def handle(self, event: OrderCreatedEvent) -> AllocationResultDTO:
        if not isinstance(event, OrderCreatedEvent):
            raise InvalidOperationError(
                f"Expected OrderCreatedEvent, got {type(event).__name__}"
            )

        command = AllocateOrderStockCommand.validate_and_build(event)
        outcome = self._ledger_repo.allocate_order_stock(command)

        order = event.event_data
        if outcome.is_depleted:
            logger.info("Order stock depleted", order_id=order.order_id, sku=order.sku, units=order.units)
            self._event_store_repo.raise_order_stock_depleted_event(
                OrderStockDepletedEvent.create(
                    order_id=order.order_id,
                    sku=order.sku,
                    units=order.units,
                    price=order.price,
                    user_id=order.user_id,
                )
            )
        else:
            if outcome.is_duplicate:
                logger.info("Order stock already allocated", order_id=order.order_id, sku=order.sku)
            else:
                logger.info("Order stock allocated", order_id=order.order_id, sku=order.sku, units=order.units)
            self._event_store_repo.raise_order_stock_allocated_event(
                OrderStockAllocatedEvent.create(order_id=order.order_id, sku=order.sku, units=order.units)
            )

        return AllocationResultDTO(
            order_id=order.order_id,
            sku=order.sku,
            units=order.units,
            allocated=not outcome.is_depleted,
            duplicate=outcome.is_duplicate,
        )
