"""Validation rules for primitive warehouse fields.

Each validator takes a raw value and returns it (trimmed, for strings) or
raises InvalidArgumentsError naming the offending field. They have no side
effects and are shared by every event and command builder.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from warehouse.domain.exceptions import InvalidArgumentsError
from warehouse.domain.model.sku import SortDirection, WarehouseEventName

MIN_IDENTIFIER_LENGTH = 4
MIN_TIMESTAMP_LENGTH = 4
MIN_LIMIT = 1
MAX_LIMIT = 1000


def _valid_trimmed_string(field: str, value: Any, min_length: int) -> str:
    if not isinstance(value, str):
        raise InvalidArgumentsError(
            f"{field} must be a string, got {type(value).__name__}", field=field
        )
    trimmed = value.strip()
    if len(trimmed) < min_length:
        raise InvalidArgumentsError(
            f"{field} must be at least {min_length} characters, got {value!r}",
            field=field,
        )
    return trimmed


def _valid_integer(field: str, value: Any) -> int:
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentsError(
            f"{field} must be an integer, got {type(value).__name__}", field=field
        )
    return value


def valid_sku(value: Any) -> str:
    return _valid_trimmed_string("sku", value, MIN_IDENTIFIER_LENGTH)


def valid_lot_id(value: Any) -> str:
    return _valid_trimmed_string("lotId", value, MIN_IDENTIFIER_LENGTH)


def valid_order_id(value: Any) -> str:
    return _valid_trimmed_string("orderId", value, MIN_IDENTIFIER_LENGTH)


def valid_user_id(value: Any) -> str:
    return _valid_trimmed_string("userId", value, MIN_IDENTIFIER_LENGTH)


def valid_units(value: Any) -> int:
    units = _valid_integer("units", value)
    if units < 1:
        raise InvalidArgumentsError(f"units must be positive, got {units}", field="units")
    return units


def valid_price(value: Any) -> Decimal:
    """Return *value* as a Decimal; floats go through ``str`` to keep their digits."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidArgumentsError(
            f"price must be a number, got {type(value).__name__}", field="price"
        )
    price = value if isinstance(value, Decimal) else Decimal(str(value))
    if not price.is_finite() or price < 0:
        raise InvalidArgumentsError(f"price must be zero or more, got {value!r}", field="price")
    return price


def valid_created_at(value: Any) -> str:
    return _valid_trimmed_string("createdAt", value, MIN_TIMESTAMP_LENGTH)


def valid_updated_at(value: Any) -> str:
    return _valid_trimmed_string("updatedAt", value, MIN_TIMESTAMP_LENGTH)


def _valid_event_name(expected: WarehouseEventName, value: Any) -> WarehouseEventName:
    if value == expected or value == expected.value:
        return expected
    raise InvalidArgumentsError(
        f"eventName must be {expected.value!r}, got {value!r}", field="eventName"
    )


def valid_sku_restocked_event_name(value: Any) -> WarehouseEventName:
    return _valid_event_name(WarehouseEventName.SKU_RESTOCKED_EVENT, value)


def valid_order_created_event_name(value: Any) -> WarehouseEventName:
    return _valid_event_name(WarehouseEventName.ORDER_CREATED_EVENT, value)


def valid_order_stock_allocated_event_name(value: Any) -> WarehouseEventName:
    return _valid_event_name(WarehouseEventName.ORDER_STOCK_ALLOCATED_EVENT, value)


def valid_order_stock_depleted_event_name(value: Any) -> WarehouseEventName:
    return _valid_event_name(WarehouseEventName.ORDER_STOCK_DEPLETED_EVENT, value)


def valid_sort_direction(value: Any) -> SortDirection:
    if isinstance(value, SortDirection):
        return value
    try:
        return SortDirection(value)
    except ValueError as exc:
        raise InvalidArgumentsError(
            f"sortDirection must be 'asc' or 'desc', got {value!r}",
            cause=exc,
            field="sortDirection",
        ) from exc


def valid_limit(value: Any) -> int:
    limit = _valid_integer("limit", value)
    if not MIN_LIMIT <= limit <= MAX_LIMIT:
        raise InvalidArgumentsError(
            f"limit must be between {MIN_LIMIT} and {MAX_LIMIT}, got {limit}",
            field="limit",
        )
    return limit
