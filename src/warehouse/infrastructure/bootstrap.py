"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

import boto3

from warehouse.application.allocate_order_stock import AllocateOrderStockHandler
from warehouse.application.restock_sku import RestockSkuHandler
from warehouse.infrastructure import settings
from warehouse.infrastructure.logging_config import configure_logging
from warehouse.infrastructure.messaging.allocate_order_stock_worker import AllocateOrderStockWorker
from warehouse.infrastructure.messaging.restock_sku_worker import RestockSkuWorker
from warehouse.infrastructure.persistence.dynamodb_event_store_repository import (
    DynamoDbEventStoreRepository,
)
from warehouse.infrastructure.persistence.dynamodb_sku_ledger_repository import (
    DynamoDbSkuLedgerRepository,
)
from warehouse.infrastructure.persistence.dynamodb_sku_query_repository import (
    DynamoDbSkuQueryRepository,
)


def setup_logging() -> None:
    configure_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)


# One client per process; invocations reuse it while the process is warm.
@lru_cache(maxsize=None)
def dynamodb_client():
    return boto3.client(
        "dynamodb",
        region_name=settings.AWS_REGION,
        endpoint_url=settings.DYNAMODB_ENDPOINT_URL,
    )


def sku_ledger_repository() -> DynamoDbSkuLedgerRepository:
    return DynamoDbSkuLedgerRepository(dynamodb_client(), settings.WAREHOUSE_TABLE_NAME)


def sku_query_repository() -> DynamoDbSkuQueryRepository:
    return DynamoDbSkuQueryRepository(dynamodb_client(), settings.WAREHOUSE_TABLE_NAME)


def event_store_repository() -> DynamoDbEventStoreRepository:
    return DynamoDbEventStoreRepository(dynamodb_client(), settings.EVENT_STORE_TABLE_NAME)


def restock_sku_worker() -> RestockSkuWorker:
    return RestockSkuWorker(RestockSkuHandler(ledger_repo=sku_ledger_repository()))


def allocate_order_stock_worker() -> AllocateOrderStockWorker:
    return AllocateOrderStockWorker(
        AllocateOrderStockHandler(
            ledger_repo=sku_ledger_repository(),
            event_store_repo=event_store_repository(),
        )
    )
