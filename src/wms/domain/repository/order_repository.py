"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new order id of the form ``ORDER-<timestamp>``."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its id, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every stored order, in storage order."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order, assigning an id on first save."""
