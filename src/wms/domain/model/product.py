"""Product aggregate.

The catalog is read-only from the order workflow's point of view: products
only change when the whole collection is replaced by a catalog import.
"""

from __future__ import annotations

from dataclasses import dataclass

from wms.domain.exceptions import ValidationError
from wms.domain.model.value_objects import Money


@dataclass
class Product:
    """A catalog entry, looked up by id or found through search."""

    id: str
    name: str
    product_code: str
    barcode: str
    price: Money
    quantity: int = 0
    available: bool = True

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("Product id is required")
        if self.quantity < 0:
            raise ValidationError(
                f"On-hand quantity of '{self.name}' cannot be negative"
            )

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on name, code or barcode."""
        needle = term.lower()
        return any(
            needle in field.lower()
            for field in (self.name, self.product_code, self.barcode)
            if field
        )

    @property
    def in_stock(self) -> bool:
        return self.quantity > 0
