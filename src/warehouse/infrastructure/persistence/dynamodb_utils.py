"""Helpers for talking to DynamoDB through the low-level boto3 client."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

# Everything the storage engine can raise at us.
STORAGE_ERRORS = (ClientError, BotoCoreError)

# What TypeSerializer raises for values DynamoDB cannot hold, e.g. a number
# beyond 38 significant digits (decimal.Rounded) or a float (TypeError).
ENCODING_ERRORS = (TypeError, ArithmeticError)

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def marshall(item: Mapping[str, Any]) -> dict:
    """Encode a plain dict as a DynamoDB attribute-value map."""
    return {key: _serializer.serialize(value) for key, value in item.items()}


def unmarshall(image: Mapping[str, Any]) -> dict:
    """Decode a DynamoDB attribute-value map into a plain dict.

    Integral numbers come back as ``int`` rather than ``Decimal``.
    """
    return {key: _to_native(_deserializer.deserialize(value)) for key, value in image.items()}


def _to_native(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else value
    if isinstance(value, dict):
        return {key: _to_native(inner) for key, inner in value.items()}
    if isinstance(value, list):
        return [_to_native(inner) for inner in value]
    return value


def get_error_code(error: BaseException) -> str | None:
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code")
    return None


def get_transaction_cancellation_code(error: BaseException, index: int) -> str | None:
    """Return the cancellation reason code of the *index*-th transaction item.

    None if *error* is not a cancelled transaction or carries no reason
    for that item.
    """
    if get_error_code(error) != "TransactionCanceledException":
        return None
    reasons = error.response.get("CancellationReasons") or []  # type: ignore[attr-defined]
    if index >= len(reasons):
        return None
    return reasons[index].get("Code")


def is_conditional_check_failed(error: BaseException) -> bool:
    return get_error_code(error) == "ConditionalCheckFailedException"
