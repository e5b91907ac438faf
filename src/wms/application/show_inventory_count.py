"""Application services: inventory count queries and removal."""

from __future__ import annotations

import logging

from wms.application.dto import InventoryCountDTO
from wms.domain.exceptions import NotFoundError
from wms.domain.repository.inventory_repository import InventoryCountRepository

logger = logging.getLogger(__name__)


class ShowInventoryCountHandler:

    def __init__(self, count_repo: InventoryCountRepository) -> None:
        self._count_repo = count_repo

    def handle(self, count_id: str) -> InventoryCountDTO:
        count = self._count_repo.get_by_id(count_id)
        if count is None:
            raise NotFoundError(f"Inventory count {count_id} not found")
        return InventoryCountDTO.from_count(count)


class ListInventoryCountsHandler:

    def __init__(self, count_repo: InventoryCountRepository) -> None:
        self._count_repo = count_repo

    def handle(self) -> list[InventoryCountDTO]:
        counts = sorted(self._count_repo.list_all(), key=lambda c: c.created_at, reverse=True)
        return [InventoryCountDTO.from_count(c) for c in counts]


class DeleteInventoryCountHandler:

    def __init__(self, count_repo: InventoryCountRepository) -> None:
        self._count_repo = count_repo

    def handle(self, count_id: str) -> None:
        if not self._count_repo.delete(count_id):
            raise NotFoundError(f"Inventory count {count_id} not found")
        logger.info("Inventory count %s deleted", count_id)
