"""JSON-file-backed implementation of OrderRepository.

Records use the field names the browser client reads (camelCase,
``items``, ``date``) so existing exports stay readable.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from wms.domain.model.order import Order, OrderLine, OrderStatus
from wms.domain.model.picking import PickRecord
from wms.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from wms.domain.repository.order_repository import OrderRepository
from wms.infrastructure.persistence.json_store import JsonCollection, timestamp_id


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> str:
        return timestamp_id("ORDER", {raw["id"] for raw in self._collection.load()})

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._collection.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._collection.load()]

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self.next_id()
        self._collection.upsert(self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customerName": order.customer_name,
            "status": order.status.value,
            "date": order.created_at.isoformat(),
            "author": order.author,
            "total": str(order.total.amount),
            "items": [
                {
                    "lineId": line.line_id,
                    "productRef": line.product_id,
                    "name": line.name,
                    "productCode": line.product_code,
                    "barcode": line.barcode,
                    "price": str(line.unit_price.amount),
                    "currency": line.unit_price.currency,
                    "quantity": line.quantity.value,
                    "note": line.note,
                    "isCustom": line.is_custom,
                }
                for line in order.lines
            ],
            "pickRecords": [
                {
                    "lineId": r.line_id,
                    "originalQuantity": r.original_quantity,
                    "pickedQuantity": r.picked_quantity,
                }
                for r in order.pick_records
            ],
            "completedAt": order.completed_at.isoformat() if order.completed_at else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        # The stored total is ignored: Order.total is always recomputed.
        lines = [
            OrderLine(
                line_id=i["lineId"],
                product_id=i.get("productRef"),
                name=i["name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(str(i["price"])), i.get("currency", DEFAULT_CURRENCY)),
                product_code=i.get("productCode", ""),
                barcode=i.get("barcode", ""),
                note=i.get("note", ""),
            )
            for i in raw["items"]
        ]
        completed_at = raw.get("completedAt")
        return Order(
            id=raw["id"],
            customer_name=raw["customerName"],
            lines=lines,
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["date"]),
            author=raw.get("author"),
            pick_records=[
                PickRecord(r["lineId"], r["originalQuantity"], r["pickedQuantity"])
                for r in raw.get("pickRecords", [])
            ],
            completed_at=datetime.fromisoformat(completed_at) if completed_at else None,
        )
