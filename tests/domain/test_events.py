"""Unit tests for the warehouse events."""

import copy
from decimal import Decimal

import pytest

from warehouse.domain.exceptions import InvalidArgumentsError
from warehouse.domain.model.events import (
    OrderCreatedEvent,
    OrderStockAllocatedEvent,
    OrderStockDepletedEvent,
    SkuRestockedEvent,
    SkuRestockedEventData,
)
from warehouse.domain.model.sku import WarehouseEventName


def _raw_event() -> dict:
    return {
        "eventName": "WAREHOUSE_EVENT_SKU_RESTOCKED",
        "eventData": {"sku": "SKU1234", "units": 12, "lotId": "LOT0001"},
        "createdAt": "2024-05-01T10:00:00.000Z",
        "updatedAt": "2024-05-01T10:00:00.000Z",
    }


class TestValidateAndBuild:

    def test_builds_event_from_wire_shape(self):
        event = SkuRestockedEvent.validate_and_build(_raw_event())
        assert event.event_name is WarehouseEventName.SKU_RESTOCKED_EVENT
        assert event.event_data == SkuRestockedEventData(sku="SKU1234", units=12, lot_id="LOT0001")
        assert event.created_at == "2024-05-01T10:00:00.000Z"
        assert event.updated_at == "2024-05-01T10:00:00.000Z"

    def test_extra_attributes_are_ignored(self):
        raw = {**_raw_event(), "pk": "SKU#SKU1234", "_tn": "#EVENT"}
        event = SkuRestockedEvent.validate_and_build(raw)
        assert event.event_data.sku == "SKU1234"

    def test_round_trips_through_to_dict(self):
        assert SkuRestockedEvent.validate_and_build(_raw_event()).to_dict() == _raw_event()

    @pytest.mark.parametrize("raw", [None, "", [], "event"])
    def test_non_mapping_rejected(self, raw):
        with pytest.raises(InvalidArgumentsError):
            SkuRestockedEvent.validate_and_build(raw)

    @pytest.mark.parametrize("field", ["eventName", "eventData", "createdAt", "updatedAt"])
    @pytest.mark.parametrize("value", [None, ""])
    def test_invalid_top_level_field_rejected(self, field, value):
        raw = _raw_event()
        raw[field] = value
        with pytest.raises(InvalidArgumentsError):
            SkuRestockedEvent.validate_and_build(raw)

    @pytest.mark.parametrize("field", ["eventName", "eventData", "createdAt", "updatedAt"])
    def test_missing_top_level_field_rejected(self, field):
        raw = _raw_event()
        del raw[field]
        with pytest.raises(InvalidArgumentsError, match=field):
            SkuRestockedEvent.validate_and_build(raw)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("sku", None),
            ("sku", ""),
            ("lotId", None),
            ("lotId", ""),
            ("units", None),
            ("units", 0),
            ("units", 2.34),
            ("units", "12"),
        ],
    )
    def test_invalid_event_data_rejected(self, field, value):
        raw = copy.deepcopy(_raw_event())
        raw["eventData"][field] = value
        with pytest.raises(InvalidArgumentsError):
            SkuRestockedEvent.validate_and_build(raw)


class TestCreate:

    def test_create_stamps_matching_timestamps(self):
        event = SkuRestockedEvent.create(sku="SKU1234", units=5, lot_id="LOT0002")
        assert event.created_at == event.updated_at
        assert event.created_at.endswith("Z")

    def test_create_validates_input(self):
        with pytest.raises(InvalidArgumentsError, match="units"):
            SkuRestockedEvent.create(sku="SKU1234", units=0, lot_id="LOT0002")

    def test_direct_construction_is_validated(self):
        with pytest.raises(InvalidArgumentsError):
            SkuRestockedEvent(
                event_name=WarehouseEventName.SKU_RESTOCKED_EVENT,
                event_data=SkuRestockedEventData(sku="SKU", units=1, lot_id="LOT0001"),
                created_at="2024-05-01T10:00:00.000Z",
                updated_at="2024-05-01T10:00:00.000Z",
            )


def _raw_order_created() -> dict:
    return {
        "eventName": "WAREHOUSE_EVENT_ORDER_CREATED",
        "eventData": {
            "orderId": "ORDER0001",
            "sku": "SKU1234",
            "units": 5,
            "price": Decimal("19.99"),
            "userId": "USER0001",
        },
        "createdAt": "2024-05-02T10:00:00.000Z",
        "updatedAt": "2024-05-02T10:00:00.000Z",
    }


class TestOrderCreatedEvent:

    def test_builds_event_from_wire_shape(self):
        event = OrderCreatedEvent.validate_and_build(_raw_order_created())
        assert event.event_name is WarehouseEventName.ORDER_CREATED_EVENT
        data = event.event_data
        assert (data.order_id, data.sku, data.units, data.user_id) == ("ORDER0001", "SKU1234", 5, "USER0001")
        assert data.price == Decimal("19.99")

    def test_round_trips_through_to_dict(self):
        assert OrderCreatedEvent.validate_and_build(_raw_order_created()).to_dict() == _raw_order_created()

    def test_restocked_event_is_not_an_order(self):
        with pytest.raises(InvalidArgumentsError, match="eventName"):
            OrderCreatedEvent.validate_and_build(_raw_event())

    @pytest.mark.parametrize(
        "field, value",
        [("orderId", "AB"), ("sku", None), ("units", 0), ("price", -1), ("price", "free"), ("userId", "")],
    )
    def test_invalid_order_field_rejected(self, field, value):
        raw = copy.deepcopy(_raw_order_created())
        raw["eventData"][field] = value
        with pytest.raises(InvalidArgumentsError):
            OrderCreatedEvent.validate_and_build(raw)

    def test_float_price_keeps_its_digits(self):
        raw = _raw_order_created()
        raw["eventData"]["price"] = 0.1
        assert OrderCreatedEvent.validate_and_build(raw).event_data.price == Decimal("0.1")


class TestOrderOutcomeEvents:

    def test_allocated_event(self):
        event = OrderStockAllocatedEvent.create(order_id="ORDER0001", sku="SKU1234", units=5)
        raw = event.to_dict()
        assert raw["eventName"] == "WAREHOUSE_EVENT_ORDER_STOCK_ALLOCATED"
        assert raw["eventData"] == {"orderId": "ORDER0001", "sku": "SKU1234", "units": 5}
        assert raw["createdAt"] == raw["updatedAt"]

    def test_depleted_event_carries_order_details(self):
        event = OrderStockDepletedEvent.create(
            order_id="ORDER0001", sku="SKU1234", units=5, price=19.99, user_id="USER0001"
        )
        assert event.to_dict()["eventData"] == {
            "orderId": "ORDER0001",
            "sku": "SKU1234",
            "units": 5,
            "price": Decimal("19.99"),
            "userId": "USER0001",
        }

    @pytest.mark.parametrize("units", [0, -1, "5"])
    def test_invalid_units_rejected(self, units):
        with pytest.raises(InvalidArgumentsError):
            OrderStockAllocatedEvent.create(order_id="ORDER0001", sku="SKU1234", units=units)
