"""Tests for the click CLI, wired to the fake DynamoDB client."""

import json
from decimal import Decimal

import pytest
from click.testing import CliRunner

from warehouse.application.allocate_order_stock import AllocateOrderStockHandler
from warehouse.application.restock_sku import RestockSkuHandler
from warehouse.infrastructure.cli import main, sku_commands, worker_commands
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
from tests.fakes import FakeDynamoDbClient, change_record, queue_message

EVENT_STORE = "event-store-test"
WAREHOUSE = "warehouse-test"


@pytest.fixture
def client(monkeypatch) -> FakeDynamoDbClient:
    fake = FakeDynamoDbClient()
    monkeypatch.setattr(main, "setup_logging", lambda: None)
    monkeypatch.setattr(
        sku_commands, "event_store_repository", lambda: DynamoDbEventStoreRepository(fake, EVENT_STORE)
    )
    monkeypatch.setattr(
        sku_commands, "sku_query_repository", lambda: DynamoDbSkuQueryRepository(fake, WAREHOUSE)
    )
    monkeypatch.setattr(
        worker_commands,
        "restock_sku_worker",
        lambda: RestockSkuWorker(RestockSkuHandler(DynamoDbSkuLedgerRepository(fake, WAREHOUSE))),
    )
    monkeypatch.setattr(
        worker_commands,
        "allocate_order_stock_worker",
        lambda: AllocateOrderStockWorker(
            AllocateOrderStockHandler(
                DynamoDbSkuLedgerRepository(fake, WAREHOUSE), DynamoDbEventStoreRepository(fake, EVENT_STORE)
            )
        ),
    )
    return fake


def _run(*args: str):
    return CliRunner().invoke(main.cli, list(args))


def _write_batch(tmp_path, client: FakeDynamoDbClient):
    records = [queue_message(f"m-{i}", change_record(item)) for i, item in enumerate(client.items(EVENT_STORE))]
    path = tmp_path / "batch.json"
    path.write_text(json.dumps({"Records": records}), encoding="utf-8")
    return path


class TestSkuRestock:

    def test_records_restock(self, client):
        result = _run("sku", "restock", "--sku", "SKU1234", "--units", "12", "--lot-id", "LOT0001")
        assert result.exit_code == 0
        assert "recorded" in result.output
        assert len(client.items(EVENT_STORE)) == 1

    def test_repeated_restock_is_reported(self, client):
        _run("sku", "restock", "--sku", "SKU1234", "--units", "12", "--lot-id", "LOT0001")
        result = _run("sku", "restock", "--sku", "SKU1234", "--units", "12", "--lot-id", "LOT0001")
        assert result.exit_code == 0
        assert "already recorded" in result.output

    def test_invalid_units_fail(self, client):
        result = _run("sku", "restock", "--sku", "SKU1234", "--units", "0", "--lot-id", "LOT0001")
        assert result.exit_code != 0
        assert "units must be positive" in result.output

    def test_units_beyond_storage_precision_fail(self, client):
        result = _run("sku", "restock", "--sku", "SKU1234", "--units", str(10**39), "--lot-id", "LOT0001")
        assert result.exit_code != 0
        assert "cannot be stored" in result.output
        assert client.items(EVENT_STORE) == []


class TestSkuList:

    def test_empty(self, client):
        result = _run("sku", "list")
        assert result.exit_code == 0
        assert "No SKUs found." in result.output

    def test_lists_applied_restocks(self, client, tmp_path):
        _run("sku", "restock", "--sku", "SKU1234", "--units", "12", "--lot-id", "LOT0001")
        _run("sku", "restock", "--sku", "SKU1234", "--units", "3", "--lot-id", "LOT0002")
        _run("worker", "restock", str(_write_batch(tmp_path, client)))

        result = _run("sku", "list", "--sku", "SKU1234")

        assert result.exit_code == 0
        assert "SKU1234" in result.output
        assert " 15 " in result.output

    def test_json_output(self, client, tmp_path):
        _run("sku", "restock", "--sku", "SKU1234", "--units", "12", "--lot-id", "LOT0001")
        _run("worker", "restock", str(_write_batch(tmp_path, client)))

        result = _run("sku", "list", "--json")

        assert result.exit_code == 0
        [line] = json.loads(result.output)
        assert line["sku"] == "SKU1234"
        assert line["units"] == 12
        assert set(line) == {"sku", "units", "createdAt", "updatedAt"}

    def test_json_output_when_empty(self, client):
        result = _run("sku", "list", "--json")
        assert result.exit_code == 0
        assert json.loads(result.output) == []

    def test_invalid_limit_fails(self, client):
        result = _run("sku", "list", "--limit", "5000")
        assert result.exit_code != 0
        assert "limit" in result.output


class TestWorkerRestock:

    def test_processes_batch_file(self, client, tmp_path):
        _run("sku", "restock", "--sku", "SKU1234", "--units", "12", "--lot-id", "LOT0001")
        result = _run("worker", "restock", str(_write_batch(tmp_path, client)))
        assert result.exit_code == 0
        assert "Processed 1 record(s)" in result.output
        assert client.get(WAREHOUSE, "SKU#SKU_ID#SKU1234")["units"] == 12

    def test_not_json_fails(self, client, tmp_path):
        path = tmp_path / "batch.json"
        path.write_text("nope", encoding="utf-8")
        result = _run("worker", "restock", str(path))
        assert result.exit_code != 0
        assert "not valid JSON" in result.output


class TestWorkerAllocate:

    def _order_batch(self, tmp_path, units: int):
        item = {
            "pk": "ORDER_ID#ORDER0001",
            "sk": "EVENT#WAREHOUSE_EVENT_ORDER_CREATED",
            "eventName": "WAREHOUSE_EVENT_ORDER_CREATED",
            "eventData": {
                "orderId": "ORDER0001",
                "sku": "SKU1234",
                "units": units,
                "price": Decimal("19.99"),
                "userId": "USER0001",
            },
            "createdAt": "2024-05-02T10:00:00.000Z",
            "updatedAt": "2024-05-02T10:00:00.000Z",
        }
        path = tmp_path / "orders.json"
        path.write_text(json.dumps({"Records": [queue_message("o-1", change_record(item))]}), encoding="utf-8")
        return path

    def test_allocates_restocked_units(self, client, tmp_path):
        _run("sku", "restock", "--sku", "SKU1234", "--units", "12", "--lot-id", "LOT0001")
        _run("worker", "restock", str(_write_batch(tmp_path, client)))

        result = _run("worker", "allocate", str(self._order_batch(tmp_path, units=5)))

        assert result.exit_code == 0
        assert "Processed 1 record(s)" in result.output
        assert client.get(WAREHOUSE, "SKU#SKU_ID#SKU1234")["units"] == 7

    def test_depleted_order_is_not_a_failure(self, client, tmp_path):
        result = _run("worker", "allocate", str(self._order_batch(tmp_path, units=5)))

        assert result.exit_code == 0
        assert client.get(EVENT_STORE, "ORDER_ID#ORDER0001", "EVENT#WAREHOUSE_EVENT_ORDER_STOCK_DEPLETED")
