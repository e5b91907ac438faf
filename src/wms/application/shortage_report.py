"""Application service: Shortage Report (query).

Lists every line of a completed order that was picked below the requested
quantity, newest orders first.
"""

from __future__ import annotations

from wms.application.dto import ShortageDTO
from wms.domain.model.order import OrderStatus
from wms.domain.repository.order_repository import OrderRepository


class ShortageReportHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self) -> list[ShortageDTO]:
        completed = [o for o in self._order_repo.list_all() if o.status == OrderStatus.COMPLETED]
        completed.sort(key=lambda o: o.created_at, reverse=True)
        return [
            ShortageDTO(
                order_id=order.id,  # type: ignore[arg-type]
                customer_name=order.customer_name,
                order_date=order.created_at,
                line_id=line.line_id,
                name=line.name,
                requested=line.quantity.value,
                picked=picked,
            )
            for order in completed
            for line, picked in order.shortages()
        ]
