"""Abstract repository for raising domain events into the event store."""

from __future__ import annotations

from abc import ABC, abstractmethod

from warehouse.domain.model.events import (
    OrderStockAllocatedEvent,
    OrderStockDepletedEvent,
    SkuRestockedEvent,
)
from warehouse.domain.model.outcome import WriteOutcome


class EventStoreRepository(ABC):

    @abstractmethod
    def raise_sku_restocked_event(self, event: SkuRestockedEvent) -> WriteOutcome:
        """Persist *event* once; ``DUPLICATE`` if it was already raised."""

    @abstractmethod
    def raise_order_stock_allocated_event(self, event: OrderStockAllocatedEvent) -> WriteOutcome:
        """Persist *event* once per order; ``DUPLICATE`` if it was already raised."""

    @abstractmethod
    def raise_order_stock_depleted_event(self, event: OrderStockDepletedEvent) -> WriteOutcome:
        """Persist *event* once per order; ``DUPLICATE`` if it was already raised."""
