"""Domain service: Picking Reconciler.

``reconcile`` is a pure fold step. The caller owns the accumulating
``remaining_lines`` and ``pick_records`` and feeds them back in on every
call; nothing is kept between calls.

``PickingSession`` is that caller for the CLI and for tests: it holds one
session's state and exposes the pick / undo / summary operations of a
picker working through an order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from wms.domain.exceptions import UnknownLineError
from wms.domain.model.order import Order
from wms.domain.model.picking import PickedLine, PickLine, PickRecord

logger = logging.getLogger(__name__)


def reconcile(
    requested_lines: Sequence[PickLine],
    picked_line: PickedLine,
    pick_records: Sequence[PickRecord] = (),
) -> tuple[tuple[PickLine, ...], tuple[PickRecord, ...]]:
    """Apply one pick to the lines still waiting.

    Returns the new remaining lines and the record list with one
    PickRecord appended. Inputs are left untouched, including when the
    pick names a line that is not waiting (UnknownLineError).
    """
    target = None
    for line in requested_lines:
        if line.line_id == picked_line.line_id:
            target = line
            break
    if target is None:
        raise UnknownLineError(picked_line.line_id)

    left = target.requested_quantity - picked_line.picked_quantity
    remaining: list[PickLine] = []
    for line in requested_lines:
        if line.line_id != target.line_id:
            remaining.append(line)
        elif left > 0:
            remaining.append(line.with_quantity(left))

    record = PickRecord(
        line_id=target.line_id,
        original_quantity=target.requested_quantity,
        picked_quantity=picked_line.picked_quantity,
    )
    return tuple(remaining), (*pick_records, record)


def is_complete(remaining_lines: Sequence[PickLine]) -> bool:
    return len(remaining_lines) == 0


@dataclass(frozen=True)
class LineDiscrepancy:
    """Summary row for a line whose picked total differs from the request."""

    line_id: str
    name: str
    requested_quantity: int
    picked_quantity: int

    @property
    def difference(self) -> int:
        return self.picked_quantity - self.requested_quantity


class PickingSession:
    """One picker working through one order."""

    def __init__(self, order_id: str, lines: Sequence[PickLine]) -> None:
        self.order_id = order_id
        self._lines = tuple(lines)
        self._remaining: tuple[PickLine, ...] = self._lines
        self._records: tuple[PickRecord, ...] = ()

    @classmethod
    def start(cls, order: Order) -> PickingSession:
        return cls(order.id, [line.to_pick_line() for line in order.lines])

    @property
    def remaining_lines(self) -> tuple[PickLine, ...]:
        return self._remaining

    @property
    def pick_records(self) -> tuple[PickRecord, ...]:
        return self._records

    @property
    def is_complete(self) -> bool:
        return is_complete(self._remaining)

    def pick(self, line_id: str, picked_quantity: int) -> PickRecord:
        self._remaining, self._records = reconcile(
            self._remaining, PickedLine(line_id, picked_quantity), self._records
        )
        record = self._records[-1]
        if record.mismatch:
            logger.info(
                "Order %s line %s picked %d of %d",
                self.order_id, line_id, record.picked_quantity, record.original_quantity,
            )
        return record

    def undo(self, line_id: str) -> None:
        """Forget every pick of a line and put it back at its full quantity."""
        original = self._find_original(line_id)
        self._records = tuple(r for r in self._records if r.line_id != line_id)
        waiting = {line.line_id: line for line in self._remaining}
        waiting[line_id] = original
        self._remaining = tuple(
            waiting[line.line_id] for line in self._lines if line.line_id in waiting
        )

    def picked_quantity(self, line_id: str) -> int:
        return sum(r.picked_quantity for r in self._records if r.line_id == line_id)

    def discrepancies(self) -> list[LineDiscrepancy]:
        """Lines whose picked total differs from the request, unpicked lines included."""
        result = []
        for line in self._lines:
            picked = self.picked_quantity(line.line_id)
            if picked != line.requested_quantity:
                result.append(
                    LineDiscrepancy(
                        line_id=line.line_id,
                        name=line.name,
                        requested_quantity=line.requested_quantity,
                        picked_quantity=picked,
                    )
                )
        return result

    def find_waiting(self, code: str) -> list[PickLine]:
        """Waiting lines whose barcode equals *code*, else substring matches."""
        exact = [line for line in self._remaining if line.barcode and line.barcode == code]
        if exact:
            return exact
        needle = code.lower()
        return [
            line
            for line in self._remaining
            if needle in line.name.lower()
            or (line.product_code and needle in line.product_code.lower())
            or (line.barcode and code in line.barcode)
        ]

    def _find_original(self, line_id: str) -> PickLine:
        for line in self._lines:
            if line.line_id == line_id:
                return line
        raise UnknownLineError(line_id)
