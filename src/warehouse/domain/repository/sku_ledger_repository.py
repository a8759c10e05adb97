"""Abstract repository for the stock ledger and its SKU aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from warehouse.domain.model.commands import AllocateOrderStockCommand, RestockSkuCommand
from warehouse.domain.model.outcome import WriteOutcome


class SkuLedgerRepository(ABC):

    @abstractmethod
    def restock_sku(self, command: RestockSkuCommand) -> WriteOutcome:
        """Record the lot and add its units to the SKU total, atomically.

        Returns ``WriteOutcome.DUPLICATE`` if this (sku, lotId) was already
        recorded; in that case nothing is written.

        Raises InvalidOperationError if *command* is not a RestockSkuCommand,
        and UnrecognizedError for any storage failure.
        """

    @abstractmethod
    def allocate_order_stock(self, command: AllocateOrderStockCommand) -> WriteOutcome:
        """Record the allocation and take its units off the SKU total, atomically.

        Returns ``WriteOutcome.DUPLICATE`` if this (sku, orderId) was already
        allocated, and ``WriteOutcome.DEPLETED`` if the SKU does not exist or
        holds fewer units than requested. Nothing is written in either case.
        """
