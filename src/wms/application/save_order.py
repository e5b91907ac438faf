"""Application service: Save Order use case.

Covers both the first save of a Draft and every later re-save. Catalog
lines are resolved through the product repository so the price in force
when the line was added is kept on the order.
"""

from __future__ import annotations

import logging

from wms.application.dto import OrderDTO, OrderLineSpec
from wms.domain.exceptions import NotFoundError
from wms.domain.model.order import Order, OrderLine
from wms.domain.model.value_objects import Money, Quantity
from wms.domain.repository.order_repository import OrderRepository
from wms.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class SaveOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        customer_name: str,
        line_specs: list[OrderLineSpec],
        order_id: str | None = None,
        author: str | None = None,
    ) -> OrderDTO:
        """Validate, build lines, assign an id if needed and persist.

        A re-save overwrites customer name and lines but keeps id, date
        and status. Completed orders raise AlreadyCompletedError.
        """
        name = Order.validate_customer_name(customer_name)
        lines = [self._build_line(spec) for spec in line_specs]

        if order_id is None:
            order = Order.draft()
            order.author = author
            order.revise(name, lines)
        else:
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise NotFoundError(f"Order {order_id} not found")
            order.revise(name, lines)

        self._order_repo.save(order)
        logger.info(
            "Order %s saved for %s (%d lines, total %s)",
            order.id, order.customer_name, len(order.lines), order.total,
        )
        return OrderDTO.from_order(order)

    def _build_line(self, spec: OrderLineSpec) -> OrderLine:
        if spec.product_id is None:
            line = OrderLine.custom(
                barcode=spec.barcode,
                quantity=spec.quantity,
                name=spec.name,
                price=spec.unit_price or "0",
            )
            line.note = spec.note
            return line

        product = self._product_repo.get_by_id(spec.product_id)
        if product is None:
            raise NotFoundError(f"Product not found: '{spec.product_id}'")

        price = Money.of(spec.unit_price) if spec.unit_price is not None else product.price
        return OrderLine(
            line_id=product.id,
            product_id=product.id,
            name=product.name,
            quantity=Quantity(spec.quantity),
            unit_price=price,
            product_code=product.product_code,
            barcode=product.barcode,
            note=spec.note,
        )
