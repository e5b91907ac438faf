"""Application service: Show Order use case (query)."""

from __future__ import annotations

from wms.application.dto import OrderDTO
from wms.domain.exceptions import NotFoundError
from wms.domain.model.order import Order
from wms.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str) -> OrderDTO:
        return OrderDTO.from_order(self.load(order_id))

    def load(self, order_id: str) -> Order:
        """The aggregate itself, for callers that start a picking session."""
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")
        return order
