"""Queue consumer for the restock worker.

Each message carries one SkuRestocked change record from the event store.
"""

from __future__ import annotations

from typing import Any

from warehouse.application.restock_sku import RestockSkuHandler
from warehouse.infrastructure.messaging.batch_worker import BatchWorker
from warehouse.infrastructure.messaging.stream_event_normalizer import normalize_sku_restocked_event


class RestockSkuWorker(BatchWorker):

    operation = "Restock"

    def __init__(self, restock_handler: RestockSkuHandler) -> None:
        self._restock_handler = restock_handler

    def _process_change_record(self, change_record: Any) -> None:
        self._restock_handler.handle(normalize_sku_restocked_event(change_record))
