"""Application service: Raise SkuRestocked event (API side).

Records that a lot of units arrived by writing a SkuRestocked event to the
event store. The restock worker applies it to the ledger later, from the
store's change stream.
"""

from __future__ import annotations

import structlog

from warehouse.application.dto import RestockResultDTO
from warehouse.domain.model.events import SkuRestockedEvent
from warehouse.domain.repository.event_store_repository import EventStoreRepository

logger = structlog.get_logger(__name__)


class RaiseSkuRestockedHandler:

    def __init__(self, event_store_repo: EventStoreRepository) -> None:
        self._event_store_repo = event_store_repo

    def handle(self, sku: str, units: int, lot_id: str) -> RestockResultDTO:
        event = SkuRestockedEvent.create(sku=sku, units=units, lot_id=lot_id)
        outcome = self._event_store_repo.raise_sku_restocked_event(event)

        data = event.event_data
        if outcome.is_duplicate:
            logger.info("SkuRestocked event already raised", sku=data.sku, lot_id=data.lot_id)
        else:
            logger.info("SkuRestocked event raised", sku=data.sku, lot_id=data.lot_id, units=data.units)

        return RestockResultDTO(
            sku=data.sku,
            units=data.units,
            lot_id=data.lot_id,
            duplicate=outcome.is_duplicate,
        )
