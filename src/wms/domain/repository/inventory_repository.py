"""Abstract repository for InventoryCount sheets."""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.inventory import InventoryCount


class InventoryCountRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new count id of the form ``INV-<timestamp>``."""

    @abstractmethod
    def get_by_id(self, count_id: str) -> InventoryCount | None:
        """Return a count by id, or None."""

    @abstractmethod
    def list_all(self) -> list[InventoryCount]:
        """Return every stored count."""

    @abstractmethod
    def save(self, count: InventoryCount) -> None:
        """Persist a new or updated count, assigning an id on first save."""

    @abstractmethod
    def delete(self, count_id: str) -> bool:
        """Remove a count; return False when there was nothing to remove."""
