"""Request and response bodies of the REST API.

Field names are camelCase on the wire, as the browser client sends and
expects them.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from wms.application.dto import (
    CountLineSpec,
    DashboardStatsDTO,
    InventoryCountDTO,
    OrderDTO,
    OrderLineSpec,
    ProductDTO,
    ShortageDTO,
    UserDTO,
)
from wms.domain.model.picking import PickRecord


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Requests ---------------------------------------------------------------


class OrderLineIn(ApiModel):
    product_ref: str | None = None
    quantity: int
    price: Decimal | None = None
    note: str = ""
    barcode: str = ""
    name: str = ""
    is_custom: bool = False

    def to_spec(self) -> OrderLineSpec:
        return OrderLineSpec(
            quantity=self.quantity,
            product_id=None if self.is_custom else self.product_ref,
            unit_price=str(self.price) if self.price is not None else None,
            note=self.note,
            barcode=self.barcode,
            name=self.name,
        )


class OrderIn(ApiModel):
    customer_name: str = ""
    items: list[OrderLineIn] = Field(default_factory=list)
    author: str | None = None


class PickRecordIn(ApiModel):
    line_id: str
    original_quantity: int = Field(gt=0)
    picked_quantity: int = Field(ge=0)

    def to_record(self) -> PickRecord:
        return PickRecord(self.line_id, self.original_quantity, self.picked_quantity)


class CompleteOrderIn(ApiModel):
    pick_records: list[PickRecordIn] = Field(default_factory=list)


class CountLineIn(ApiModel):
    product_ref: str | None = None
    barcode: str = ""
    quantity: int = Field(ge=0)

    def to_spec(self) -> CountLineSpec:
        return CountLineSpec(counted=self.quantity, product_id=self.product_ref, barcode=self.barcode)


class InventoryCountIn(ApiModel):
    name: str = ""
    items: list[CountLineIn] = Field(default_factory=list)
    author: str | None = None


class ImportProductsIn(ApiModel):
    files: list[str] = Field(default_factory=list)


class RegisterIn(ApiModel):
    username: str


class RoleIn(ApiModel):
    role: str


# --- Responses --------------------------------------------------------------


class ProductOut(ApiModel):
    id: str
    name: str
    product_code: str
    barcode: str
    price: float
    quantity: int
    availability: bool

    @staticmethod
    def from_dto(dto: ProductDTO) -> ProductOut:
        return ProductOut(
            id=dto.id,
            name=dto.name,
            product_code=dto.product_code,
            barcode=dto.barcode,
            price=float(dto.price),
            quantity=dto.quantity,
            availability=dto.available,
        )


class OrderLineOut(ApiModel):
    line_id: str
    product_ref: str | None
    name: str
    product_code: str
    barcode: str
    price: float
    quantity: int
    line_total: float
    note: str
    is_custom: bool


class PickRecordOut(ApiModel):
    line_id: str
    original_quantity: int
    picked_quantity: int
    mismatch: bool


class OrderOut(ApiModel):
    id: str
    customer_name: str
    items: list[OrderLineOut]
    total: float
    status: str
    date: datetime
    author: str | None
    pick_records: list[PickRecordOut]
    completed_at: datetime | None

    @staticmethod
    def from_dto(dto: OrderDTO) -> OrderOut:
        return OrderOut(
            id=dto.id,
            customer_name=dto.customer_name,
            items=[
                OrderLineOut(
                    line_id=line.line_id,
                    product_ref=line.product_id,
                    name=line.name,
                    product_code=line.product_code,
                    barcode=line.barcode,
                    price=float(line.unit_price),
                    quantity=line.quantity,
                    line_total=float(line.line_total),
                    note=line.note,
                    is_custom=line.is_custom,
                )
                for line in dto.lines
            ],
            total=float(dto.total),
            status=dto.status,
            date=dto.created_at,
            author=dto.author,
            pick_records=[
                PickRecordOut(
                    line_id=r.line_id,
                    original_quantity=r.original_quantity,
                    picked_quantity=r.picked_quantity,
                    mismatch=r.mismatch,
                )
                for r in dto.pick_records
            ],
            completed_at=dto.completed_at,
        )


class ShortageOut(ApiModel):
    order_id: str
    customer_name: str
    date: datetime
    line_id: str
    name: str
    requested: int
    picked: int
    missing: int

    @staticmethod
    def from_dto(dto: ShortageDTO) -> ShortageOut:
        return ShortageOut(
            order_id=dto.order_id,
            customer_name=dto.customer_name,
            date=dto.order_date,
            line_id=dto.line_id,
            name=dto.name,
            requested=dto.requested,
            picked=dto.picked,
            missing=dto.missing,
        )


class CountLineOut(ApiModel):
    line_id: str
    product_ref: str | None
    name: str
    barcode: str
    quantity: int
    expected_quantity: int
    difference: int
    is_custom: bool


class InventoryCountOut(ApiModel):
    id: str
    name: str
    author: str | None
    date: datetime
    items: list[CountLineOut]
    discrepancies: list[CountLineOut]

    @staticmethod
    def from_dto(dto: InventoryCountDTO) -> InventoryCountOut:
        def line_out(line) -> CountLineOut:
            return CountLineOut(
                line_id=line.line_id,
                product_ref=line.product_id,
                name=line.name,
                barcode=line.barcode,
                quantity=line.counted,
                expected_quantity=line.expected,
                difference=line.difference,
                is_custom=line.is_custom,
            )

        return InventoryCountOut(
            id=dto.id,
            name=dto.name,
            author=dto.author,
            date=dto.created_at,
            items=[line_out(line) for line in dto.lines],
            discrepancies=[line_out(line) for line in dto.discrepancies],
        )


class UserOut(ApiModel):
    username: str
    role: str
    status: str
    created_at: datetime

    @staticmethod
    def from_dto(dto: UserDTO) -> UserOut:
        return UserOut(
            username=dto.username,
            role=dto.role,
            status=dto.status,
            created_at=dto.created_at,
        )


class MessageOut(ApiModel):
    message: str


class TopProductOut(ApiModel):
    name: str
    total_sold: int


class TopCustomerOut(ApiModel):
    name: str
    order_count: int


class DashboardStatsOut(ApiModel):
    product_count: int
    pending_orders: int
    completed_orders: int
    top_products: list[TopProductOut]
    top_customers: list[TopCustomerOut]

    @staticmethod
    def from_dto(dto: DashboardStatsDTO) -> DashboardStatsOut:
        return DashboardStatsOut(
            product_count=dto.product_count,
            pending_orders=dto.pending_orders,
            completed_orders=dto.completed_orders,
            top_products=[TopProductOut(name=e.name, total_sold=e.count) for e in dto.top_products],
            top_customers=[
                TopCustomerOut(name=e.name, order_count=e.count) for e in dto.top_customers
            ],
        )
