"""DynamoDB implementation of SkuQueryRepository."""

from __future__ import annotations

import structlog

from warehouse.domain.exceptions import InvalidOperationError, UnrecognizedError
from warehouse.domain.model.commands import ListSkusCommand
from warehouse.domain.model.sku import SkuRecord, SortDirection
from warehouse.domain.repository.sku_query_repository import SkuQueryRepository
from warehouse.infrastructure.persistence.dynamodb_utils import STORAGE_ERRORS, unmarshall
from warehouse.infrastructure.persistence.keys import GSI1_INDEX_NAME, SKUS_GSI1PK, sku_key

logger = structlog.get_logger(__name__)


class DynamoDbSkuQueryRepository(SkuQueryRepository):

    DEFAULT_LIMIT = 50
    DEFAULT_SORT_DIRECTION = SortDirection.ASC

    def __init__(self, client, table_name: str) -> None:
        self._client = client
        self._table_name = table_name

    # --- SkuQueryRepository interface -----------------------------------------

    def list_skus(self, command: ListSkusCommand) -> list[SkuRecord]:
        if not isinstance(command, ListSkusCommand):
            raise InvalidOperationError(
                f"Expected ListSkusCommand, got {type(command).__name__}"
            )

        params = self._build_query(command)
        try:
            result = self._client.query(**params)
        except STORAGE_ERRORS as exc:
            logger.error("SKU query failed", sku=command.sku, error=repr(exc))
            raise UnrecognizedError(cause=exc) from exc

        items = result.get("Items") or []
        return [self._to_record(unmarshall(item)) for item in items]

    # --- Request building -----------------------------------------------------

    def _build_query(self, command: ListSkusCommand) -> dict:
        if command.sku:
            key = sku_key(command.sku)
            return {
                "TableName": self._table_name,
                "KeyConditionExpression": "#pk = :pk AND #sk = :sk",
                "ExpressionAttributeNames": {"#pk": "pk", "#sk": "sk"},
                "ExpressionAttributeValues": {
                    ":pk": {"S": key["pk"]},
                    ":sk": {"S": key["sk"]},
                },
            }

        sort_direction = command.sort_direction or self.DEFAULT_SORT_DIRECTION
        return {
            "TableName": self._table_name,
            "IndexName": GSI1_INDEX_NAME,
            "KeyConditionExpression": "#gsi1pk = :gsi1pk",
            "ExpressionAttributeNames": {"#gsi1pk": "gsi1pk"},
            "ExpressionAttributeValues": {":gsi1pk": {"S": SKUS_GSI1PK}},
            "ScanIndexForward": sort_direction is SortDirection.ASC,
            "Limit": command.limit or self.DEFAULT_LIMIT,
        }

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_record(raw: dict) -> SkuRecord:
        return SkuRecord(
            sku=raw["sku"],
            units=raw["units"],
            created_at=raw["createdAt"],
            updated_at=raw["updatedAt"],
        )
