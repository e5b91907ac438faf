"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from wms.domain.model.product import Product
from wms.domain.model.value_objects import DEFAULT_CURRENCY, Money
from wms.domain.repository.product_repository import ProductRepository
from wms.infrastructure.persistence.json_store import JsonCollection


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._collection.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def search(
        self, term: str | None, limit: int, in_stock_only: bool = False
    ) -> list[Product]:
        found: list[Product] = []
        for raw in self._collection.load():
            if len(found) >= limit:
                break
            product = self._to_domain(raw)
            if in_stock_only and not product.in_stock:
                continue
            if term and not product.matches(term):
                continue
            found.append(product)
        return found

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._collection.load()]

    def replace_all(self, products: list[Product]) -> None:
        # One write: the old collection is gone only once the new one is on disk.
        self._collection.persist([self._to_raw(p) for p in products])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "product_code": product.product_code,
            "barcode": product.barcode,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "quantity": product.quantity,
            "availability": product.available,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw.get("name", ""),
            product_code=raw.get("product_code", ""),
            barcode=raw.get("barcode", ""),
            price=Money(Decimal(str(raw.get("price", "0"))), raw.get("currency", DEFAULT_CURRENCY)),
            quantity=raw.get("quantity", 0),
            available=raw.get("availability", True),
        )
