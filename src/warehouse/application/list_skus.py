"""Application service: List SKUs use case (query)."""

from __future__ import annotations

from typing import Any

from warehouse.application.dto import SkuDTO
from warehouse.domain.model.commands import ListSkusCommand
from warehouse.domain.repository.sku_query_repository import SkuQueryRepository


class ListSkusHandler:

    def __init__(self, query_repo: SkuQueryRepository) -> None:
        self._query_repo = query_repo

    def handle(
        self,
        sku: Any = None,
        sort_direction: Any = None,
        limit: Any = None,
    ) -> list[SkuDTO]:
        command = ListSkusCommand.validate_and_build(
            sku=sku, sort_direction=sort_direction, limit=limit
        )
        records = self._query_repo.list_skus(command)
        return [
            SkuDTO(
                sku=record.sku,
                units=record.units,
                created_at=record.created_at,
                updated_at=record.updated_at,
            )
            for record in records
        ]
