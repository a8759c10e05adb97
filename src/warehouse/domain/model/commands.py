"""Commands — immutable, storage-ready instructions built from validated input.

A command is valid by construction: every field is checked in
``__post_init__``, so a command instance that reaches a repository can be
written without further checks.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from warehouse.domain.exceptions import InvalidArgumentsError
from warehouse.domain.model.events import OrderCreatedEvent, SkuRestockedEvent
from warehouse.domain.model.sku import SortDirection
from warehouse.domain.model.timestamps import utc_now_iso
from warehouse.domain.model.value_validators import (
    valid_created_at,
    valid_limit,
    valid_lot_id,
    valid_order_id,
    valid_sku,
    valid_sort_direction,
    valid_units,
    valid_updated_at,
)


@dataclass(frozen=True)
class RestockSkuData:

    sku: str
    units: int
    lot_id: str
    created_at: str
    updated_at: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "sku", valid_sku(self.sku))
        object.__setattr__(self, "units", valid_units(self.units))
        object.__setattr__(self, "lot_id", valid_lot_id(self.lot_id))
        object.__setattr__(self, "created_at", valid_created_at(self.created_at))
        object.__setattr__(self, "updated_at", valid_updated_at(self.updated_at))


@dataclass(frozen=True)
class RestockSkuCommand:
    """Add ``units`` of ``sku`` to stock under lot ``lot_id``, exactly once."""

    command_data: RestockSkuData
    options: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.command_data, RestockSkuData):
            raise InvalidArgumentsError(
                f"commandData must be RestockSkuData, got {type(self.command_data).__name__}",
                field="commandData",
            )

    @classmethod
    def validate_and_build(cls, incoming_event: SkuRestockedEvent | Mapping) -> RestockSkuCommand:
        """Build a command from a SkuRestocked event.

        The event is re-validated here even if the caller already did so.
        The command's timestamps record when the command was issued and are
        not copied from the event.
        """
        if isinstance(incoming_event, SkuRestockedEvent):
            event = SkuRestockedEvent.validate_and_build(incoming_event.to_dict())
        elif isinstance(incoming_event, Mapping):
            event = SkuRestockedEvent.validate_and_build(incoming_event)
        else:
            raise InvalidArgumentsError(
                f"Expected a SkuRestocked event, got {type(incoming_event).__name__}",
                field="incomingEvent",
            )

        now = utc_now_iso()
        return cls(
            command_data=RestockSkuData(
                sku=event.event_data.sku,
                units=event.event_data.units,
                lot_id=event.event_data.lot_id,
                created_at=now,
                updated_at=now,
            ),
            options={},
        )


@dataclass(frozen=True)
class AllocateOrderStockData:

    sku: str
    units: int
    order_id: str
    created_at: str
    updated_at: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "sku", valid_sku(self.sku))
        object.__setattr__(self, "units", valid_units(self.units))
        object.__setattr__(self, "order_id", valid_order_id(self.order_id))
        object.__setattr__(self, "created_at", valid_created_at(self.created_at))
        object.__setattr__(self, "updated_at", valid_updated_at(self.updated_at))


@dataclass(frozen=True)
class AllocateOrderStockCommand:
    """Take ``units`` of ``sku`` out of stock for order ``order_id``, exactly once."""

    command_data: AllocateOrderStockData
    options: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.command_data, AllocateOrderStockData):
            raise InvalidArgumentsError(
                f"commandData must be AllocateOrderStockData, got {type(self.command_data).__name__}",
                field="commandData",
            )

    @classmethod
    def validate_and_build(
        cls, incoming_event: OrderCreatedEvent | Mapping
    ) -> AllocateOrderStockCommand:
        if isinstance(incoming_event, OrderCreatedEvent):
            event = OrderCreatedEvent.validate_and_build(incoming_event.to_dict())
        elif isinstance(incoming_event, Mapping):
            event = OrderCreatedEvent.validate_and_build(incoming_event)
        else:
            raise InvalidArgumentsError(
                f"Expected an OrderCreated event, got {type(incoming_event).__name__}",
                field="incomingEvent",
            )

        now = utc_now_iso()
        return cls(
            command_data=AllocateOrderStockData(
                sku=event.event_data.sku,
                units=event.event_data.units,
                order_id=event.event_data.order_id,
                created_at=now,
                updated_at=now,
            ),
            options={},
        )


@dataclass(frozen=True)
class ListSkusCommand:
    """Query SKU aggregates, either one by ``sku`` or a page in creation order.

    Unset fields fall back to the query repository's defaults.
    """

    sku: str | None = None
    sort_direction: SortDirection | None = None
    limit: int | None = None

    def __post_init__(self) -> None:
        if self.sku is not None:
            object.__setattr__(self, "sku", valid_sku(self.sku))
        if self.sort_direction is not None:
            object.__setattr__(self, "sort_direction", valid_sort_direction(self.sort_direction))
        if self.limit is not None:
            object.__setattr__(self, "limit", valid_limit(self.limit))

    @classmethod
    def validate_and_build(
        cls,
        sku: Any = None,
        sort_direction: Any = None,
        limit: Any = None,
    ) -> ListSkusCommand:
        return cls(sku=sku, sort_direction=sort_direction, limit=limit)
