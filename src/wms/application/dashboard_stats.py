"""Application service: Dashboard Stats (query).

Headline numbers for the start screen: catalog size, open and completed
orders, the products ordered in the largest quantities and the customers
with the most orders.
"""

from __future__ import annotations

from collections import Counter

from wms.application.dto import DashboardStatsDTO, RankedEntryDTO
from wms.domain.model.order import OrderStatus
from wms.domain.repository.order_repository import OrderRepository
from wms.domain.repository.product_repository import ProductRepository

DEFAULT_TOP_N = 5


class DashboardStatsHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        top_n: int = DEFAULT_TOP_N,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._top_n = top_n

    def handle(self) -> DashboardStatsDTO:
        orders = self._order_repo.list_all()

        units: Counter[str] = Counter()
        customers: Counter[str] = Counter()
        for order in orders:
            customers[order.customer_name] += 1
            for line in order.lines:
                units[line.name] += line.quantity.value

        return DashboardStatsDTO(
            product_count=len(self._product_repo.list_all()),
            pending_orders=sum(1 for o in orders if o.status == OrderStatus.SAVED),
            completed_orders=sum(1 for o in orders if o.status == OrderStatus.COMPLETED),
            top_products=self._top(units),
            top_customers=self._top(customers),
        )

    def _top(self, counter: Counter[str]) -> list[RankedEntryDTO]:
        # Ties are broken by name so the ranking is stable.
        ranked = sorted(counter.items(), key=lambda item: (-item[1], item[0]))
        return [RankedEntryDTO(name, count) for name, count in ranked[: self._top_n]]
