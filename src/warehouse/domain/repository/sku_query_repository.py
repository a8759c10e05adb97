"""Abstract read-only repository for SKU aggregates."""

from __future__ import annotations

from abc import ABC, abstractmethod

from warehouse.domain.model.commands import ListSkusCommand
from warehouse.domain.model.sku import SkuRecord


class SkuQueryRepository(ABC):

    @abstractmethod
    def list_skus(self, command: ListSkusCommand) -> list[SkuRecord]:
        """Return the matching SKU aggregates; an empty list if there are none."""
