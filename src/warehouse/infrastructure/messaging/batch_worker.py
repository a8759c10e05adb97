"""Queue consumer base for the warehouse workers.

A worker processes a batch of queue messages, each carrying one change
record, and reports back which messages must be redelivered. Only
transient failures are reported: invalid input would fail again, and a
duplicate write has already been applied.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import structlog

from warehouse.domain.exceptions import InvalidArgumentsError, InvalidOperationError, is_transient_error

logger = structlog.get_logger(__name__)


class BatchWorker(ABC):

    # Names the work in log lines, e.g. "Restock failed, will retry".
    operation = "Batch record"

    def process_batch(self, queue_event: Any) -> dict:
        """Process every record in *queue_event*.

        Returns the partial batch response: ``{"batchItemFailures": [...]}``.
        """
        failures: list[dict] = []
        if not isinstance(queue_event, Mapping):
            logger.error("Queue event is not an object", got=type(queue_event).__name__)
            return {"batchItemFailures": failures}

        for record in queue_event.get("Records") or []:
            message_id = record.get("messageId") if isinstance(record, Mapping) else None
            try:
                self._process_record(record)
            except Exception as exc:
                if is_transient_error(exc):
                    logger.error(f"{self.operation} failed, will retry", message_id=message_id, error=repr(exc))
                    failures.append({"itemIdentifier": message_id})
                elif isinstance(exc, InvalidOperationError):
                    logger.error(f"{self.operation} rejected", message_id=message_id, error=str(exc))
                else:
                    logger.warning(f"{self.operation} dropped", message_id=message_id, error=str(exc))

        return {"batchItemFailures": failures}

    def _process_record(self, record: Any) -> None:
        if not isinstance(record, Mapping):
            raise InvalidArgumentsError(
                f"Queue record must be an object, got {type(record).__name__}", field="record"
            )
        try:
            change_record = json.loads(record["body"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidArgumentsError("Message body is not valid JSON", cause=exc, field="body") from exc

        self._process_change_record(change_record)

    @abstractmethod
    def _process_change_record(self, change_record: Any) -> None:
        """Normalize *change_record* and run the worker's use case on it."""
