"""SKU read models and shared enumerations.

Three record kinds share the warehouse table:

- a Lot (ledger entry) is written once per accepted restock and never changes;
- an Allocation (ledger entry) is written once per order that takes stock;
- a Sku (aggregate) holds the running total of units for one SKU and is
  updated in place on every accepted restock or allocation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class WarehouseEventName(Enum):
    SKU_RESTOCKED_EVENT = "WAREHOUSE_EVENT_SKU_RESTOCKED"
    ORDER_CREATED_EVENT = "WAREHOUSE_EVENT_ORDER_CREATED"
    ORDER_STOCK_ALLOCATED_EVENT = "WAREHOUSE_EVENT_ORDER_STOCK_ALLOCATED"
    ORDER_STOCK_DEPLETED_EVENT = "WAREHOUSE_EVENT_ORDER_STOCK_DEPLETED"


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SkuRecord:
    """Running total of units in stock for one SKU."""

    sku: str
    units: int
    created_at: str
    updated_at: str

