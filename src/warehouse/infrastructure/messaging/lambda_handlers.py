"""Deployable function entry points."""

from __future__ import annotations

from warehouse.infrastructure import bootstrap
from warehouse.infrastructure.messaging.allocate_order_stock_worker import AllocateOrderStockWorker
from warehouse.infrastructure.messaging.restock_sku_worker import RestockSkuWorker

# Built on first invocation and reused while the process stays warm.
_worker: RestockSkuWorker | None = None
_allocation_worker: AllocateOrderStockWorker | None = None


def restock_sku_worker_handler(event, context) -> dict:
    """Queue-triggered restock worker; returns the partial batch response."""
    global _worker
    if _worker is None:
        bootstrap.setup_logging()
        _worker = bootstrap.restock_sku_worker()
    return _worker.process_batch(event)


def allocate_order_stock_worker_handler(event, context) -> dict:
    """Queue-triggered allocation worker; returns the partial batch response."""
    global _allocation_worker
    if _allocation_worker is None:
        bootstrap.setup_logging()
        _allocation_worker = bootstrap.allocate_order_stock_worker()
    return _allocation_worker.process_batch(event)
