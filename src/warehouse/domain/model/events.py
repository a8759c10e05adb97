"""Warehouse domain events.

Events are stored in the event store and delivered to workers through the
store's change stream. Every event shares one wire shape::

    {
        "eventName": "WAREHOUSE_EVENT_...",
        "eventData": {...},
        "createdAt": str,
        "updatedAt": str,
    }

SkuRestocked carries ``{"sku", "units", "lotId"}`` and is raised when units
of a SKU arrive under a lot. OrderCreated carries ``{"orderId", "sku",
"units", "price", "userId"}`` and asks the warehouse to allocate stock;
the allocation worker answers with OrderStockAllocated or OrderStockDepleted.

An event instance is always fully validated; downstream code never
re-checks its fields.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from warehouse.domain.exceptions import InvalidArgumentsError
from warehouse.domain.model.sku import WarehouseEventName
from warehouse.domain.model.timestamps import utc_now_iso
from warehouse.domain.model.value_validators import (
    valid_created_at,
    valid_lot_id,
    valid_order_created_event_name,
    valid_order_id,
    valid_order_stock_allocated_event_name,
    valid_order_stock_depleted_event_name,
    valid_price,
    valid_sku,
    valid_sku_restocked_event_name,
    valid_units,
    valid_updated_at,
    valid_user_id,
)


@dataclass(frozen=True)
class SkuRestockedEventData:
    sku: str
    units: int
    lot_id: str


@dataclass(frozen=True)
class SkuRestockedEvent:

    event_name: WarehouseEventName
    event_data: SkuRestockedEventData
    created_at: str
    updated_at: str

    def __post_init__(self) -> None:
        valid_sku_restocked_event_name(self.event_name)
        if not isinstance(self.event_data, SkuRestockedEventData):
            raise InvalidArgumentsError(
                f"eventData must be SkuRestockedEventData, got {type(self.event_data).__name__}",
                field="eventData",
            )
        valid_sku(self.event_data.sku)
        valid_units(self.event_data.units)
        valid_lot_id(self.event_data.lot_id)
        valid_created_at(self.created_at)
        valid_updated_at(self.updated_at)

    # --- Factories ------------------------------------------------------------

    @classmethod
    def create(cls, sku: str, units: int, lot_id: str) -> SkuRestockedEvent:
        """Raise a new event for a restock request, stamped with the current time."""
        now = utc_now_iso()
        return cls.validate_and_build(
            {
                "eventName": WarehouseEventName.SKU_RESTOCKED_EVENT.value,
                "eventData": {"sku": sku, "units": units, "lotId": lot_id},
                "createdAt": now,
                "updatedAt": now,
            }
        )

    @classmethod
    def validate_and_build(cls, raw: Any) -> SkuRestockedEvent:
        """Build an event from its wire shape.

        Raises InvalidArgumentsError if *raw* is not a mapping, a field is
        missing, or any field fails its value rule.
        """
        event = _require_mapping("event", raw)
        event_data = _require_mapping("eventData", _require_key(event, "eventData"))
        return cls(
            event_name=valid_sku_restocked_event_name(_require_key(event, "eventName")),
            event_data=SkuRestockedEventData(
                sku=valid_sku(_require_key(event_data, "sku")),
                units=valid_units(_require_key(event_data, "units")),
                lot_id=valid_lot_id(_require_key(event_data, "lotId")),
            ),
            created_at=valid_created_at(_require_key(event, "createdAt")),
            updated_at=valid_updated_at(_require_key(event, "updatedAt")),
        )

    # --- Serialization --------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "eventName": self.event_name.value,
            "eventData": {
                "sku": self.event_data.sku,
                "units": self.event_data.units,
                "lotId": self.event_data.lot_id,
            },
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


# ---------------------------------------------------------------------------
# Order stock allocation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OrderCreatedEventData:
    order_id: str
    sku: str
    units: int
    price: Decimal
    user_id: str


@dataclass(frozen=True)
class OrderCreatedEvent:
    """An order was placed and needs stock allocated to it."""

    event_name: WarehouseEventName
    event_data: OrderCreatedEventData
    created_at: str
    updated_at: str

    def __post_init__(self) -> None:
        valid_order_created_event_name(self.event_name)
        _require_data("OrderCreatedEventData", self.event_data, OrderCreatedEventData)
        _validate_order_data(self.event_data)
        valid_created_at(self.created_at)
        valid_updated_at(self.updated_at)

    @classmethod
    def validate_and_build(cls, raw: Any) -> OrderCreatedEvent:
        event = _require_mapping("event", raw)
        event_data = _require_mapping("eventData", _require_key(event, "eventData"))
        return cls(
            event_name=valid_order_created_event_name(_require_key(event, "eventName")),
            event_data=OrderCreatedEventData(
                order_id=valid_order_id(_require_key(event_data, "orderId")),
                sku=valid_sku(_require_key(event_data, "sku")),
                units=valid_units(_require_key(event_data, "units")),
                price=valid_price(_require_key(event_data, "price")),
                user_id=valid_user_id(_require_key(event_data, "userId")),
            ),
            created_at=valid_created_at(_require_key(event, "createdAt")),
            updated_at=valid_updated_at(_require_key(event, "updatedAt")),
        )

    def to_dict(self) -> dict:
        return _envelope(self, _order_data_dict(self.event_data))


@dataclass(frozen=True)
class OrderStockAllocatedEventData:
    order_id: str
    sku: str
    units: int


@dataclass(frozen=True)
class OrderStockAllocatedEvent:
    """The units an order asked for were taken from stock."""

    event_name: WarehouseEventName
    event_data: OrderStockAllocatedEventData
    created_at: str
    updated_at: str

    def __post_init__(self) -> None:
        valid_order_stock_allocated_event_name(self.event_name)
        _require_data("OrderStockAllocatedEventData", self.event_data, OrderStockAllocatedEventData)
        valid_order_id(self.event_data.order_id)
        valid_sku(self.event_data.sku)
        valid_units(self.event_data.units)
        valid_created_at(self.created_at)
        valid_updated_at(self.updated_at)

    @classmethod
    def create(cls, order_id: str, sku: str, units: int) -> OrderStockAllocatedEvent:
        now = utc_now_iso()
        return cls(
            event_name=WarehouseEventName.ORDER_STOCK_ALLOCATED_EVENT,
            event_data=OrderStockAllocatedEventData(
                order_id=valid_order_id(order_id),
                sku=valid_sku(sku),
                units=valid_units(units),
            ),
            created_at=now,
            updated_at=now,
        )

    def to_dict(self) -> dict:
        data = self.event_data
        return _envelope(self, {"orderId": data.order_id, "sku": data.sku, "units": data.units})


@dataclass(frozen=True)
class OrderStockDepletedEventData:
    order_id: str
    sku: str
    units: int
    price: Decimal
    user_id: str


@dataclass(frozen=True)
class OrderStockDepletedEvent:
    """There were not enough units in stock to allocate to an order."""

    event_name: WarehouseEventName
    event_data: OrderStockDepletedEventData
    created_at: str
    updated_at: str

    def __post_init__(self) -> None:
        valid_order_stock_depleted_event_name(self.event_name)
        _require_data("OrderStockDepletedEventData", self.event_data, OrderStockDepletedEventData)
        _validate_order_data(self.event_data)
        valid_created_at(self.created_at)
        valid_updated_at(self.updated_at)

    @classmethod
    def create(
        cls, order_id: str, sku: str, units: int, price: Any, user_id: str
    ) -> OrderStockDepletedEvent:
        now = utc_now_iso()
        return cls(
            event_name=WarehouseEventName.ORDER_STOCK_DEPLETED_EVENT,
            event_data=OrderStockDepletedEventData(
                order_id=valid_order_id(order_id),
                sku=valid_sku(sku),
                units=valid_units(units),
                price=valid_price(price),
                user_id=valid_user_id(user_id),
            ),
            created_at=now,
            updated_at=now,
        )

    def to_dict(self) -> dict:
        return _envelope(self, _order_data_dict(self.event_data))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _require_data(name: str, value: Any, expected: type) -> None:
    if not isinstance(value, expected):
        raise InvalidArgumentsError(
            f"eventData must be {name}, got {type(value).__name__}", field="eventData"
        )


def _validate_order_data(data: OrderCreatedEventData | OrderStockDepletedEventData) -> None:
    valid_order_id(data.order_id)
    valid_sku(data.sku)
    valid_units(data.units)
    valid_price(data.price)
    valid_user_id(data.user_id)


def _order_data_dict(data: OrderCreatedEventData | OrderStockDepletedEventData) -> dict:
    return {
        "orderId": data.order_id,
        "sku": data.sku,
        "units": data.units,
        "price": data.price,
        "userId": data.user_id,
    }


def _envelope(event, event_data: dict) -> dict:
    return {
        "eventName": event.event_name.value,
        "eventData": event_data,
        "createdAt": event.created_at,
        "updatedAt": event.updated_at,
    }


def _require_mapping(field: str, value: Any) -> Mapping:
    if not isinstance(value, Mapping):
        raise InvalidArgumentsError(
            f"{field} must be an object, got {type(value).__name__}", field=field
        )
    return value


def _require_key(raw: Mapping, field: str) -> Any:
    if field not in raw or raw[field] is None:
        raise InvalidArgumentsError(f"{field} is required", field=field)
    return raw[field]
