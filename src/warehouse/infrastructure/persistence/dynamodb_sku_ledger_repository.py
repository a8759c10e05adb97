"""DynamoDB implementation of SkuLedgerRepository.

A restock is one TransactWriteItems call with two items:

1. Put the lot (ledger entry), conditioned on the lot key not existing.
   This condition is the only idempotency gate.
2. Update the SKU aggregate, adding the lot's units to ``units`` and
   initializing ``units``/``createdAt`` when the aggregate is new.

An allocation mirrors it: put the allocation entry under the same kind of
condition, and subtract its units from an aggregate that must exist and
hold at least that many units.

Both items commit or neither does, so the aggregate can never move without
a matching, unique ledger entry. Nothing is read first: concurrent writes
to the same SKU are serialized by DynamoDB, and the additive updates make
the final total independent of commit order.
"""

from __future__ import annotations

import structlog

from warehouse.domain.exceptions import (
    InvalidArgumentsError,
    InvalidOperationError,
    UnrecognizedError,
)
from warehouse.domain.model.commands import AllocateOrderStockCommand, RestockSkuCommand
from warehouse.domain.model.outcome import WriteOutcome
from warehouse.domain.repository.sku_ledger_repository import SkuLedgerRepository
from warehouse.infrastructure.persistence.dynamodb_utils import (
    ENCODING_ERRORS,
    STORAGE_ERRORS,
    get_transaction_cancellation_code,
    marshall,
)
from warehouse.infrastructure.persistence.keys import (
    ALLOCATION_TYPE_NAME,
    LOT_TYPE_NAME,
    SKU_TYPE_NAME,
    SKUS_GSI1PK,
    allocation_key,
    allocations_gsi1pk,
    created_at_gsi1sk,
    lot_key,
    lots_gsi1pk,
    sku_key,
)

logger = structlog.get_logger(__name__)

# Positions of the two items in every transaction this repository sends.
_LEDGER_PUT_INDEX = 0
_SKU_UPDATE_INDEX = 1

_ALLOCATED_STATUS = "ALLOCATED"

_LOT_PUT_CONDITION = "attribute_not_exists(pk)"
_ALLOCATION_PUT_CONDITION = "attribute_not_exists(pk) AND attribute_not_exists(sk)"

_RESTOCK_UPDATE_EXPRESSION = (
    "SET "
    "#sku = :sku, "
    "#units = if_not_exists(#units, :zero) + :units, "
    "#createdAt = if_not_exists(#createdAt, :createdAt), "
    "#updatedAt = :updatedAt, "
    "#_tn = :_tn, "
    "#gsi1pk = :gsi1pk, "
    "#gsi1sk = if_not_exists(#gsi1sk, :gsi1sk)"
)

_ALLOCATE_UPDATE_EXPRESSION = "SET #units = #units - :units, #updatedAt = :updatedAt"
_ALLOCATE_UPDATE_CONDITION = "attribute_exists(pk) AND attribute_exists(sk) AND #units >= :units"


class DynamoDbSkuLedgerRepository(SkuLedgerRepository):

    def __init__(self, client, table_name: str) -> None:
        self._client = client
        self._table_name = table_name

    # --- SkuLedgerRepository interface ----------------------------------------

    def restock_sku(self, command: RestockSkuCommand) -> WriteOutcome:
        if not isinstance(command, RestockSkuCommand):
            raise InvalidOperationError(
                f"Expected RestockSkuCommand, got {type(command).__name__}"
            )

        data = command.command_data
        transact_items = self._encode(self._build_restock_items, command)
        try:
            self._client.transact_write_items(TransactItems=transact_items)
        except STORAGE_ERRORS as exc:
            # A failed lot condition means this exact restock already
            # committed; any other cancellation reasons are irrelevant then.
            if self._failed_condition(exc, _LEDGER_PUT_INDEX):
                return WriteOutcome.DUPLICATE

            logger.error(
                "Restock transaction failed",
                sku=data.sku,
                lot_id=data.lot_id,
                error=repr(exc),
            )
            raise UnrecognizedError(cause=exc) from exc

        return WriteOutcome.APPLIED

    def allocate_order_stock(self, command: AllocateOrderStockCommand) -> WriteOutcome:
        if not isinstance(command, AllocateOrderStockCommand):
            raise InvalidOperationError(
                f"Expected AllocateOrderStockCommand, got {type(command).__name__}"
            )

        data = command.command_data
        transact_items = self._encode(self._build_allocation_items, command)
        try:
            self._client.transact_write_items(TransactItems=transact_items)
        except STORAGE_ERRORS as exc:
            # Checked first: once the allocation exists, a short aggregate
            # only reflects later allocations, not this one.
            if self._failed_condition(exc, _LEDGER_PUT_INDEX):
                return WriteOutcome.DUPLICATE
            if self._failed_condition(exc, _SKU_UPDATE_INDEX):
                return WriteOutcome.DEPLETED

            logger.error(
                "Allocation transaction failed",
                sku=data.sku,
                order_id=data.order_id,
                error=repr(exc),
            )
            raise UnrecognizedError(cause=exc) from exc

        return WriteOutcome.APPLIED

    # --- Request building -----------------------------------------------------

    @staticmethod
    def _encode(build, command) -> list[dict]:
        try:
            return build(command)
        except ENCODING_ERRORS as exc:
            raise InvalidArgumentsError(
                f"units cannot be stored, got {command.command_data.units}",
                cause=exc,
                field="units",
            ) from exc

    def _build_restock_items(self, command: RestockSkuCommand) -> list[dict]:
        data = command.command_data
        lot = {
            **lot_key(data.sku, data.lot_id),
            "sku": data.sku,
            "units": data.units,
            "lotId": data.lot_id,
            "createdAt": data.created_at,
            "updatedAt": data.updated_at,
            "_tn": LOT_TYPE_NAME,
            "gsi1pk": lots_gsi1pk(data.sku),
            "gsi1sk": created_at_gsi1sk(data.created_at),
        }
        update = {
            "TableName": self._table_name,
            "Key": marshall(sku_key(data.sku)),
            "UpdateExpression": _RESTOCK_UPDATE_EXPRESSION,
            "ExpressionAttributeNames": {
                "#sku": "sku",
                "#units": "units",
                "#createdAt": "createdAt",
                "#updatedAt": "updatedAt",
                "#_tn": "_tn",
                "#gsi1pk": "gsi1pk",
                "#gsi1sk": "gsi1sk",
            },
            "ExpressionAttributeValues": marshall(
                {
                    ":sku": data.sku,
                    ":units": data.units,
                    ":zero": 0,
                    ":createdAt": data.created_at,
                    ":updatedAt": data.updated_at,
                    ":_tn": SKU_TYPE_NAME,
                    ":gsi1pk": SKUS_GSI1PK,
                    ":gsi1sk": created_at_gsi1sk(data.created_at),
                }
            ),
        }
        return [self._ledger_put(lot, _LOT_PUT_CONDITION), {"Update": update}]

    def _build_allocation_items(self, command: AllocateOrderStockCommand) -> list[dict]:
        data = command.command_data
        allocation = {
            **allocation_key(data.sku, data.order_id),
            "sku": data.sku,
            "units": data.units,
            "orderId": data.order_id,
            "status": _ALLOCATED_STATUS,
            "createdAt": data.created_at,
            "updatedAt": data.updated_at,
            "_tn": ALLOCATION_TYPE_NAME,
            "gsi1pk": allocations_gsi1pk(data.sku),
            "gsi1sk": created_at_gsi1sk(data.created_at),
        }
        update = {
            "TableName": self._table_name,
            "Key": marshall(sku_key(data.sku)),
            "UpdateExpression": _ALLOCATE_UPDATE_EXPRESSION,
            "ConditionExpression": _ALLOCATE_UPDATE_CONDITION,
            "ExpressionAttributeNames": {
                "#units": "units",
                "#updatedAt": "updatedAt",
            },
            "ExpressionAttributeValues": marshall(
                {
                    ":units": data.units,
                    ":updatedAt": data.updated_at,
                }
            ),
        }
        return [self._ledger_put(allocation, _ALLOCATION_PUT_CONDITION), {"Update": update}]

    def _ledger_put(self, item: dict, condition: str) -> dict:
        return {
            "Put": {
                "TableName": self._table_name,
                "Item": marshall(item),
                "ConditionExpression": condition,
            }
        }

    # --- Error classification -------------------------------------------------

    @staticmethod
    def _failed_condition(error: BaseException, index: int) -> bool:
        return get_transaction_cancellation_code(error, index) == "ConditionalCheckFailed"
