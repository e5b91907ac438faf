"""Order aggregate and its lines.

An Order owns its lines. A Draft is simply an Order that has not been
saved yet (``id is None``); it only becomes Saved through the repository
and Completed through ``complete()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from wms.domain.exceptions import (
    AlreadyCompletedError,
    UnknownLineError,
    ValidationError,
)
from wms.domain.model.picking import PickLine, PickRecord
from wms.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    SAVED = "Saved"
    COMPLETED = "Completed"


CUSTOM_LINE_PREFIX = "custom-"


@dataclass
class OrderLine:
    """One requested product with the price captured when it was added.

    ``product_id`` is None for custom lines (free-text entries with no
    catalog backing); such lines are never matched against the catalog.
    """

    line_id: str
    product_id: str | None
    name: str
    quantity: Quantity
    unit_price: Money  # captured at add-time
    product_code: str = ""
    barcode: str = ""
    note: str = ""

    @property
    def is_custom(self) -> bool:
        return self.product_id is None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @staticmethod
    def custom(barcode: str, quantity: int, name: str = "", price: str = "0") -> OrderLine:
        """Build a free-text line for a scanned code that is not in the catalog."""
        if not barcode and not name:
            raise ValidationError("Custom line needs a barcode or a name")
        key = barcode or name
        return OrderLine(
            line_id=f"{CUSTOM_LINE_PREFIX}{key}",
            product_id=None,
            name=name or f"EAN: {barcode}",
            quantity=Quantity(quantity),
            unit_price=Money.of(price),
            barcode=barcode,
        )

    def to_pick_line(self) -> PickLine:
        return PickLine(
            line_id=self.line_id,
            name=self.name,
            product_code=self.product_code,
            barcode=self.barcode,
            requested_quantity=self.quantity.value,
        )


@dataclass
class Order:
    """Aggregate root for customer orders.

    ``total`` is always recomputed from the lines; a stored total is
    never trusted.
    """

    id: str | None
    customer_name: str
    lines: list[OrderLine] = field(default_factory=list)
    status: OrderStatus = OrderStatus.SAVED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    author: str | None = None
    pick_records: list[PickRecord] = field(default_factory=list)
    completed_at: datetime | None = None

    @staticmethod
    def draft() -> Order:
        """Empty, unsaved order. Nothing is persisted."""
        return Order(id=None, customer_name="", lines=[])

    # --- Editing ------------------------------------------------------------

    def add_line(self, line: OrderLine) -> None:
        """Append a line, merging quantities if the same line is already present."""
        self._ensure_editable()
        for existing in self.lines:
            if existing.line_id == line.line_id:
                existing.quantity = existing.quantity + line.quantity
                if line.note and not existing.note:
                    existing.note = line.note
                return
        self.lines.append(line)

    def remove_line(self, line_id: str) -> None:
        self._ensure_editable()
        self.lines.remove(self.find_line(line_id))

    def set_note(self, line_id: str, note: str) -> None:
        self._ensure_editable()
        self.find_line(line_id).note = note

    def revise(self, customer_name: str, lines: list[OrderLine]) -> None:
        """Replace customer name and lines in one go (a re-save)."""
        self._ensure_editable()
        name = self.validate_customer_name(customer_name)
        self.lines = []
        for line in lines:
            self.add_line(line)
        self.customer_name = name

    # --- State transitions --------------------------------------------------

    def complete(self, pick_records: list[PickRecord]) -> None:
        """Saved -> Completed, keeping the pick outcome as an audit trail.

        Shortages are allowed; whether the picking session was complete is
        the caller's decision.
        """
        if self.status == OrderStatus.COMPLETED:
            raise AlreadyCompletedError(f"Order {self.id} is already completed")
        if self.id is None:
            raise ValidationError("Order must be saved before it can be completed")
        for record in pick_records:
            self.find_line(record.line_id)
        self.pick_records = list(pick_records)
        self.status = OrderStatus.COMPLETED
        self.completed_at = datetime.now(timezone.utc)

    # --- Computed properties ------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.line_total
        return result

    @property
    def is_completed(self) -> bool:
        return self.status == OrderStatus.COMPLETED

    def picked_quantity(self, line_id: str) -> int:
        return sum(r.picked_quantity for r in self.pick_records if r.line_id == line_id)

    def shortages(self) -> list[tuple[OrderLine, int]]:
        """Lines of a completed order picked below the requested quantity."""
        if not self.is_completed:
            return []
        result = []
        for line in self.lines:
            picked = self.picked_quantity(line.line_id)
            if picked < line.quantity.value:
                result.append((line, picked))
        return result

    # --- Helpers ------------------------------------------------------------

    def find_line(self, line_id: str) -> OrderLine:
        for line in self.lines:
            if line.line_id == line_id:
                return line
        raise UnknownLineError(line_id)

    @staticmethod
    def validate_customer_name(customer_name: str | None) -> str:
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")
        return customer_name.strip()

    def _ensure_editable(self) -> None:
        if self.status == OrderStatus.COMPLETED:
            raise AlreadyCompletedError(
                f"Order {self.id} is completed; its lines can no longer change"
            )
