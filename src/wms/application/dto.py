"""Data Transfer Objects: plain containers that cross layer boundaries.

Input specs come from the CLI or the REST layer; output DTOs are what
both of them render. Domain objects never leave the application layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from wms.domain.model.inventory import CountLine, InventoryCount
from wms.domain.model.order import Order, OrderLine
from wms.domain.model.picking import PickRecord
from wms.domain.model.product import Product
from wms.domain.model.user import User


# --- Input ------------------------------------------------------------------


@dataclass(frozen=True)
class OrderLineSpec:
    """One line as the client sent it.

    A line with a ``product_id`` refers to the catalog; without one it is a
    custom line identified by ``barcode`` (or ``name``). ``unit_price`` is
    the price captured when the line was added; when it is missing the
    current catalog price is taken.
    """

    quantity: int
    product_id: str | None = None
    unit_price: str | None = None
    note: str = ""
    barcode: str = ""
    name: str = ""


@dataclass(frozen=True)
class CountLineSpec:
    """One counted product (by id) or custom barcode on a stocktake sheet."""

    counted: int
    product_id: str | None = None
    barcode: str = ""


# --- Output -----------------------------------------------------------------


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    product_code: str
    barcode: str
    price: Decimal
    quantity: int
    available: bool

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            product_code=product.product_code,
            barcode=product.barcode,
            price=product.price.amount,
            quantity=product.quantity,
            available=product.available,
        )


@dataclass(frozen=True)
class OrderLineDTO:
    line_id: str
    product_id: str | None
    name: str
    product_code: str
    barcode: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    note: str
    is_custom: bool

    @staticmethod
    def from_line(line: OrderLine) -> OrderLineDTO:
        return OrderLineDTO(
            line_id=line.line_id,
            product_id=line.product_id,
            name=line.name,
            product_code=line.product_code,
            barcode=line.barcode,
            quantity=line.quantity.value,
            unit_price=line.unit_price.amount,
            line_total=line.line_total.amount,
            note=line.note,
            is_custom=line.is_custom,
        )


@dataclass(frozen=True)
class PickRecordDTO:
    line_id: str
    original_quantity: int
    picked_quantity: int
    mismatch: bool

    @staticmethod
    def from_record(record: PickRecord) -> PickRecordDTO:
        return PickRecordDTO(
            line_id=record.line_id,
            original_quantity=record.original_quantity,
            picked_quantity=record.picked_quantity,
            mismatch=record.mismatch,
        )


@dataclass(frozen=True)
class OrderDTO:
    """A complete order as displayed to the user."""

    id: str
    customer_name: str
    status: str
    lines: list[OrderLineDTO]
    total: Decimal
    created_at: datetime
    author: str | None = None
    pick_records: list[PickRecordDTO] = field(default_factory=list)
    completed_at: datetime | None = None

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            customer_name=order.customer_name,
            status=order.status.value,
            lines=[OrderLineDTO.from_line(line) for line in order.lines],
            total=order.total.amount,
            created_at=order.created_at,
            author=order.author,
            pick_records=[PickRecordDTO.from_record(r) for r in order.pick_records],
            completed_at=order.completed_at,
        )


@dataclass(frozen=True)
class ShortageDTO:
    order_id: str
    customer_name: str
    order_date: datetime
    line_id: str
    name: str
    requested: int
    picked: int

    @property
    def missing(self) -> int:
        return self.requested - self.picked


@dataclass(frozen=True)
class CountLineDTO:
    line_id: str
    product_id: str | None
    name: str
    barcode: str
    counted: int
    expected: int
    difference: int
    is_custom: bool

    @staticmethod
    def from_line(line: CountLine) -> CountLineDTO:
        return CountLineDTO(
            line_id=line.line_id,
            product_id=line.product_id,
            name=line.name,
            barcode=line.barcode,
            counted=line.counted,
            expected=line.expected,
            difference=line.difference,
            is_custom=line.is_custom,
        )


@dataclass(frozen=True)
class InventoryCountDTO:
    id: str
    name: str
    author: str | None
    created_at: datetime
    lines: list[CountLineDTO]
    discrepancies: list[CountLineDTO]

    @staticmethod
    def from_count(count: InventoryCount) -> InventoryCountDTO:
        return InventoryCountDTO(
            id=count.id,  # type: ignore[arg-type]
            name=count.name,
            author=count.author,
            created_at=count.created_at,
            lines=[CountLineDTO.from_line(line) for line in count.lines],
            discrepancies=[CountLineDTO.from_line(line) for line in count.discrepancies],
        )


@dataclass(frozen=True)
class UserDTO:
    username: str
    role: str
    status: str
    created_at: datetime

    @staticmethod
    def from_user(user: User) -> UserDTO:
        return UserDTO(
            username=user.username,
            role=user.role.value,
            status=user.status.value,
            created_at=user.created_at,
        )


@dataclass(frozen=True)
class RankedEntryDTO:
    name: str
    count: int


@dataclass(frozen=True)
class DashboardStatsDTO:
    product_count: int
    pending_orders: int
    completed_orders: int
    top_products: list[RankedEntryDTO] = field(default_factory=list)
    top_customers: list[RankedEntryDTO] = field(default_factory=list)
