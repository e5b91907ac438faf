"""Application service: List Orders use case (query)."""

from __future__ import annotations

from wms.application.dto import OrderDTO
from wms.domain.exceptions import ValidationError
from wms.domain.model.order import OrderStatus
from wms.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, status: str | None = None) -> list[OrderDTO]:
        """Newest first, optionally restricted to one exact status."""
        orders = self._order_repo.list_all()
        if status:
            wanted = self._parse_status(status)
            orders = [o for o in orders if o.status == wanted]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return [OrderDTO.from_order(o) for o in orders]

    @staticmethod
    def _parse_status(raw: str) -> OrderStatus:
        try:
            return OrderStatus(raw)
        except ValueError as exc:
            known = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(f"Unknown status '{raw}' (expected one of: {known})") from exc
