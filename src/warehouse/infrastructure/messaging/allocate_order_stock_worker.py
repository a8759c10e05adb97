"""Queue consumer for the order stock allocation worker.

Each message carries one OrderCreated change record. A depleted SKU is a
normal outcome here: the handler raises OrderStockDepleted and the message
is acknowledged.
"""

from __future__ import annotations

from typing import Any

from warehouse.application.allocate_order_stock import AllocateOrderStockHandler
from warehouse.infrastructure.messaging.batch_worker import BatchWorker
from warehouse.infrastructure.messaging.stream_event_normalizer import normalize_order_created_event


class AllocateOrderStockWorker(BatchWorker):

    operation = "Allocation"

    def __init__(self, allocate_handler: AllocateOrderStockHandler) -> None:
        self._allocate_handler = allocate_handler

    def _process_change_record(self, change_record: Any) -> None:
        self._allocate_handler.handle(normalize_order_created_event(change_record))
