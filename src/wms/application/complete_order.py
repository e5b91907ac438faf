"""Application service: Complete Order use case.

The only consumer of a picking session's PickRecords. Whether the session
was complete is not checked here: completing with shortages is allowed.
The records must still describe a session that could have happened, so
they are replayed through the reconciler before they are stored.
"""

from __future__ import annotations

import logging

from wms.application.dto import OrderDTO
from wms.domain.exceptions import NotFoundError, ValidationError
from wms.domain.model.order import Order
from wms.domain.model.picking import PickedLine, PickLine, PickRecord
from wms.domain.repository.order_repository import OrderRepository
from wms.domain.service.picking_reconciler import reconcile

logger = logging.getLogger(__name__)


class CompleteOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, pick_records: list[PickRecord]) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")

        # Everything below raises before anything is written, so a rejected
        # completion leaves the stored order as it was.
        if not order.is_completed:
            self._replay(order, pick_records)
        order.complete(pick_records)
        self._order_repo.save(order)

        mismatches = sum(1 for r in pick_records if r.mismatch)
        logger.info(
            "Order %s completed (%d pick records, %d mismatched)",
            order.id, len(pick_records), mismatches,
        )
        for line, picked in order.shortages():
            logger.warning(
                "Order %s short on %s: picked %d of %d",
                order.id, line.name, picked, line.quantity.value,
            )
        return OrderDTO.from_order(order)

    @staticmethod
    def _replay(order: Order, pick_records: list[PickRecord]) -> None:
        """Fold the records over the order's lines.

        A record for a line that is no longer waiting raises
        UnknownLineError; one whose original quantity is not what was still
        waiting raises ValidationError.
        """
        remaining: tuple[PickLine, ...] = tuple(line.to_pick_line() for line in order.lines)
        replayed: tuple[PickRecord, ...] = ()
        for record in pick_records:
            for waiting in remaining:
                if waiting.line_id == record.line_id:
                    if waiting.requested_quantity != record.original_quantity:
                        raise ValidationError(
                            f"Pick of line '{record.line_id}' claims {record.original_quantity} "
                            f"requested, but {waiting.requested_quantity} were waiting"
                        )
                    break
            remaining, replayed = reconcile(
                remaining, PickedLine(record.line_id, record.picked_quantity), replayed
            )
