"""Application service: Restock SKU use case (worker side).

Turns a validated SkuRestocked event into a RestockSkuCommand and applies
it to the ledger. A duplicate write means an earlier delivery of the same
event already succeeded, so it is reported as a normal result.
"""

from __future__ import annotations

import structlog

from warehouse.application.dto import RestockResultDTO
from warehouse.domain.exceptions import InvalidOperationError
from warehouse.domain.model.commands import RestockSkuCommand
from warehouse.domain.model.events import SkuRestockedEvent
from warehouse.domain.repository.sku_ledger_repository import SkuLedgerRepository

logger = structlog.get_logger(__name__)


class RestockSkuHandler:

    def __init__(self, ledger_repo: SkuLedgerRepository) -> None:
        self._ledger_repo = ledger_repo

    def handle(self, event: SkuRestockedEvent) -> RestockResultDTO:
        if not isinstance(event, SkuRestockedEvent):
            raise InvalidOperationError(
                f"Expected SkuRestockedEvent, got {type(event).__name__}"
            )

        command = RestockSkuCommand.validate_and_build(event)
        outcome = self._ledger_repo.restock_sku(command)

        data = command.command_data
        if outcome.is_duplicate:
            logger.info("Restock already recorded", sku=data.sku, lot_id=data.lot_id)
        else:
            logger.info("SKU restocked", sku=data.sku, lot_id=data.lot_id, units=data.units)

        return RestockResultDTO(
            sku=data.sku,
            units=data.units,
            lot_id=data.lot_id,
            duplicate=outcome.is_duplicate,
        )
