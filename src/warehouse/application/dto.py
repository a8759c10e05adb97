"""Data Transfer Objects — plain containers that cross layer boundaries."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SkuDTO:
    """Output: one SKU aggregate as returned to API callers."""

    sku: str
    units: int
    created_at: str
    updated_at: str

    def to_dict(self) -> dict:
        return {
            "sku": self.sku,
            "units": self.units,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class RestockResultDTO:
    """Output: the restock that was requested and whether it had already happened."""

    sku: str
    units: int
    lot_id: str
    duplicate: bool = False


@dataclass(frozen=True)
class AllocationResultDTO:
    """Output: whether an order got its stock, and whether that had already happened."""

    order_id: str
    sku: str
    units: int
    allocated: bool
    duplicate: bool = False
