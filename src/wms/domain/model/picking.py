"""Value objects of a picking session.

None of these are persisted on their own: a session's PickRecords end up on
the Order as its audit trail when the order is completed.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from wms.domain.exceptions import ValidationError


@dataclass(frozen=True)
class PickLine:
    """A line still waiting to be picked."""

    line_id: str
    name: str
    product_code: str
    barcode: str
    requested_quantity: int

    def __post_init__(self) -> None:
        if self.requested_quantity <= 0:
            raise ValidationError(
                f"Requested quantity of '{self.name}' must be positive"
            )

    def with_quantity(self, quantity: int) -> PickLine:
        return replace(self, requested_quantity=quantity)


@dataclass(frozen=True)
class PickedLine:
    """What the picker actually took off the shelf for one line."""

    line_id: str
    picked_quantity: int

    def __post_init__(self) -> None:
        if isinstance(self.picked_quantity, bool) or not isinstance(self.picked_quantity, int):
            raise ValidationError("Picked quantity must be an integer")
        if self.picked_quantity < 0:
            raise ValidationError("Picked quantity cannot be negative")


@dataclass(frozen=True)
class PickRecord:
    """Requested versus picked for one reconcile step."""

    line_id: str
    original_quantity: int
    picked_quantity: int

    @property
    def mismatch(self) -> bool:
        return self.picked_quantity != self.original_quantity

    @property
    def difference(self) -> int:
        return self.picked_quantity - self.original_quantity
