"""JSON-file-backed implementation of InventoryCountRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from wms.domain.model.inventory import CountLine, InventoryCount
from wms.domain.repository.inventory_repository import InventoryCountRepository
from wms.infrastructure.persistence.json_store import JsonCollection, timestamp_id


class JsonInventoryCountRepository(InventoryCountRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- InventoryCountRepository interface -----------------------------------

    def next_id(self) -> str:
        return timestamp_id("INV", {raw["id"] for raw in self._collection.load()})

    def get_by_id(self, count_id: str) -> InventoryCount | None:
        for raw in self._collection.load():
            if raw["id"] == count_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[InventoryCount]:
        return [self._to_domain(raw) for raw in self._collection.load()]

    def save(self, count: InventoryCount) -> None:
        if count.id is None:
            count.id = self.next_id()
        self._collection.upsert(self._to_raw(count))

    def delete(self, count_id: str) -> bool:
        return self._collection.remove(count_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(count: InventoryCount) -> dict:
        return {
            "id": count.id,
            "name": count.name,
            "author": count.author,
            "date": count.created_at.isoformat(),
            "items": [
                {
                    "lineId": line.line_id,
                    "productRef": line.product_id,
                    "name": line.name,
                    "barcode": line.barcode,
                    "quantity": line.counted,
                    "expectedQuantity": line.expected,
                    "isCustom": line.is_custom,
                }
                for line in count.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> InventoryCount:
        return InventoryCount(
            id=raw["id"],
            name=raw["name"],
            author=raw.get("author"),
            created_at=datetime.fromisoformat(raw["date"]),
            lines=[
                CountLine(
                    line_id=i["lineId"],
                    product_id=i.get("productRef"),
                    name=i["name"],
                    barcode=i.get("barcode", ""),
                    counted=i["quantity"],
                    expected=i.get("expectedQuantity", 0),
                )
                for i in raw["items"]
            ],
        )
