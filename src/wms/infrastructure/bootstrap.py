"""Wires the JSON repositories of one data directory for the CLI and the API."""

from __future__ import annotations

from pathlib import Path

from wms.infrastructure.config import Config, get_config
from wms.infrastructure.persistence.json_inventory_repository import (
    JsonInventoryCountRepository,
)
from wms.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from wms.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from wms.infrastructure.persistence.json_user_repository import (
    JsonUserRepository,
)


class Container:
    """Repositories for one data directory."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or get_config()

    @property
    def data_dir(self) -> Path:
        return self.config.DATA_DIR

    def product_repository(self) -> JsonProductRepository:
        return JsonProductRepository(self.data_dir / "products.json")

    def order_repository(self) -> JsonOrderRepository:
        return JsonOrderRepository(self.data_dir / "orders.json")

    def inventory_count_repository(self) -> JsonInventoryCountRepository:
        return JsonInventoryCountRepository(self.data_dir / "inventories.json")

    def user_repository(self) -> JsonUserRepository:
        return JsonUserRepository(self.data_dir / "users.json")
