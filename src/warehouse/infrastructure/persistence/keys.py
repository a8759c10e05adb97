"""Key layout of the single warehouse table and of the event store.

Lots, allocations and SKU aggregates live in the warehouse table. ``_tn``
tags the record type and ``gsi1pk``/``gsi1sk`` feed the
``gsi1pk-gsi1sk-index`` secondary index, which lists records of one group
in creation order.
"""

from __future__ import annotations

GSI1_INDEX_NAME = "gsi1pk-gsi1sk-index"

LOT_TYPE_NAME = "WAREHOUSE#LOT"
ALLOCATION_TYPE_NAME = "WAREHOUSE#STOCK_ALLOCATION"
SKU_TYPE_NAME = "WAREHOUSE#SKU"
EVENT_TYPE_NAME = "#EVENT"

SKUS_GSI1PK = "WAREHOUSE#SKUS"


def lot_key(sku: str, lot_id: str) -> dict[str, str]:
    key = f"LOT#SKU_ID#{sku}#LOT_ID#{lot_id}"
    return {"pk": key, "sk": key}


def allocation_key(sku: str, order_id: str) -> dict[str, str]:
    key = f"ALLOCATION#SKU_ID#{sku}#ORDER_ID#{order_id}"
    return {"pk": key, "sk": key}


def sku_key(sku: str) -> dict[str, str]:
    key = f"SKU#SKU_ID#{sku}"
    return {"pk": key, "sk": key}


def lots_gsi1pk(sku: str) -> str:
    return f"WAREHOUSE#LOTS#SKU_ID#{sku}"


def allocations_gsi1pk(sku: str) -> str:
    return f"WAREHOUSE#ALLOCATIONS#SKU_ID#{sku}"


def created_at_gsi1sk(created_at: str) -> str:
    return f"CREATED_AT#{created_at}"


def event_key(sku: str, event_name: str, lot_id: str) -> dict[str, str]:
    return {"pk": f"SKU#{sku}", "sk": f"EVENT#{event_name}#LOT_ID#{lot_id}"}


def order_event_key(order_id: str, event_name: str) -> dict[str, str]:
    return {"pk": f"ORDER_ID#{order_id}", "sk": f"EVENT#{event_name}"}
