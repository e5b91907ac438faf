"""InventoryCount aggregate: a stocktake sheet.

A count records, per product, how many units were found on the shelf
next to the on-hand quantity the catalog expected at the time the
product was added to the sheet.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from wms.domain.exceptions import NotFoundError, ValidationError
from wms.domain.model.order import CUSTOM_LINE_PREFIX
from wms.domain.model.product import Product


@dataclass
class CountLine:
    line_id: str
    product_id: str | None
    name: str
    barcode: str
    counted: int
    expected: int = 0

    def __post_init__(self) -> None:
        if self.counted < 0:
            raise ValidationError(f"Counted quantity of '{self.name}' cannot be negative")

    @property
    def is_custom(self) -> bool:
        return self.product_id is None

    @property
    def difference(self) -> int:
        return self.counted - self.expected


@dataclass
class InventoryCount:
    """Aggregate root for a named stocktake.

    Invariant: at most one line per product (or per custom barcode);
    counting a product again adds to its line.
    """

    id: str | None
    name: str
    lines: list[CountLine] = field(default_factory=list)
    author: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(name: str, author: str | None = None) -> InventoryCount:
        if not name or not name.strip():
            raise ValidationError("Inventory count name is required")
        return InventoryCount(id=None, name=name.strip(), author=author)

    def count_product(self, product: Product, counted: int, expected: int | None = None) -> None:
        """Add a counted product; *expected* defaults to its on-hand quantity."""
        self._add(
            CountLine(
                line_id=product.id,
                product_id=product.id,
                name=product.name,
                barcode=product.barcode,
                counted=counted,
                expected=product.quantity if expected is None else expected,
            )
        )

    def count_custom(self, barcode: str, counted: int) -> None:
        if not barcode:
            raise ValidationError("Custom count line needs a barcode")
        self._add(
            CountLine(
                line_id=f"{CUSTOM_LINE_PREFIX}{barcode}",
                product_id=None,
                name=f"EAN: {barcode}",
                barcode=barcode,
                counted=counted,
            )
        )

    def set_counted(self, line_id: str, counted: int) -> None:
        line = self._find(line_id)
        if counted < 0:
            raise ValidationError(f"Counted quantity of '{line.name}' cannot be negative")
        line.counted = counted

    def remove_line(self, line_id: str) -> None:
        self.lines.remove(self._find(line_id))

    @property
    def discrepancies(self) -> list[CountLine]:
        return [line for line in self.lines if line.counted != line.expected]

    def _add(self, line: CountLine) -> None:
        for existing in self.lines:
            if existing.line_id == line.line_id:
                existing.counted += line.counted
                return
        self.lines.append(line)

    def _find(self, line_id: str) -> CountLine:
        for line in self.lines:
            if line.line_id == line_id:
                return line
        raise NotFoundError(f"Line '{line_id}' not found in count '{self.name}'")
