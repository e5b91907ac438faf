"""The JSON repositories against real files in a temporary directory."""

import json
from decimal import Decimal

import pytest

from wms.domain.exceptions import StorageError
from wms.domain.model.inventory import InventoryCount
from wms.domain.model.order import OrderLine, OrderStatus
from wms.domain.model.picking import PickRecord
from wms.domain.model.user import User, UserStatus
from wms.infrastructure.persistence.json_inventory_repository import JsonInventoryCountRepository
from wms.infrastructure.persistence.json_order_repository import JsonOrderRepository
from wms.infrastructure.persistence.json_product_repository import JsonProductRepository
from wms.infrastructure.persistence.json_user_repository import JsonUserRepository
from tests.factories import make_line, make_order, make_product


class TestJsonOrderRepository:

    def test_creates_empty_file(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "nested" / "orders.json")
        assert repo.list_all() == []
        assert json.loads((tmp_path / "nested" / "orders.json").read_text()) == []

    def test_round_trip(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = make_order(make_line("A", 2, price="12.50", note="fragile"))
        order.id = None
        order.author = "ala"
        order.add_line(OrderLine.custom("777", 1))
        repo.save(order)

        loaded = repo.get_by_id(order.id)
        assert order.id.startswith("ORDER-")
        assert loaded.customer_name == "Alice"
        assert loaded.author == "ala"
        assert loaded.created_at == order.created_at
        assert [(line.line_id, line.quantity.value, line.note) for line in loaded.lines] == [
            ("A", 2, "fragile"),
            ("custom-777", 1, ""),
        ]
        assert loaded.lines[1].is_custom
        assert loaded.total.amount == Decimal("25.00")

    def test_completed_order_keeps_pick_records(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = make_order(make_line("A", 3))
        order.complete([PickRecord("A", 3, 1)])
        repo.save(order)

        loaded = repo.get_by_id("ORDER-1")
        assert loaded.status == OrderStatus.COMPLETED
        assert loaded.completed_at == order.completed_at
        assert loaded.pick_records == [PickRecord("A", 3, 1)]

    def test_save_overwrites_by_id(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = make_order()
        repo.save(order)
        order.revise("Bob", [make_line("C", 1)])
        repo.save(order)

        assert len(repo.list_all()) == 1
        assert repo.get_by_id("ORDER-1").customer_name == "Bob"

    def test_stored_total_is_ignored(self, tmp_path):
        path = tmp_path / "orders.json"
        repo = JsonOrderRepository(path)
        repo.save(make_order(make_line("A", 2, price="5.00")))
        raw = json.loads(path.read_text())
        raw[0]["total"] = "999"
        path.write_text(json.dumps(raw))

        assert repo.get_by_id("ORDER-1").total.amount == Decimal("10.00")

    def test_ids_are_unique(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        ids = set()
        for _ in range(3):
            order = make_order()
            order.id = None
            repo.save(order)
            ids.add(order.id)
        assert len(ids) == 3

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StorageError, match="orders.json"):
            JsonOrderRepository(path).list_all()

    def test_not_an_array(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(StorageError, match="JSON array"):
            JsonOrderRepository(path).list_all()


class TestJsonProductRepository:

    def test_replace_and_search(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.replace_all([
            make_product(id="1", name="Hinge", barcode="123abc456", quantity=0),
            make_product(id="2", name="Bolt", barcode="123ABX456", quantity=5),
        ])

        assert [p.id for p in repo.search("abc", 20)] == ["1"]
        assert [p.id for p in repo.search(None, 20, in_stock_only=True)] == ["2"]
        assert [p.id for p in repo.search(None, 1)] == ["1"]
        assert repo.get_by_id("2").price.amount == Decimal("15.00")

    def test_replace_drops_previous(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.replace_all([make_product(id="1")])
        repo.replace_all([make_product(id="2")])
        assert [p.id for p in repo.list_all()] == ["2"]

    def test_legacy_numeric_price(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps([{"id": "1", "name": "Hinge", "price": 4.5}]))
        product = JsonProductRepository(path).get_by_id("1")
        assert product.price.amount == Decimal("4.5")
        assert product.available


class TestJsonInventoryCountRepository:

    def test_round_trip_and_delete(self, tmp_path):
        repo = JsonInventoryCountRepository(tmp_path / "inventories.json")
        count = InventoryCount.create("Aisle 1", author="ala")
        count.count_product(make_product(id="1", quantity=4), 6)
        count.count_custom("777", 2)
        repo.save(count)

        loaded = repo.get_by_id(count.id)
        assert count.id.startswith("INV-")
        assert [(line.line_id, line.counted, line.expected) for line in loaded.lines] == [
            ("1", 6, 4),
            ("custom-777", 2, 0),
        ]
        assert repo.delete(count.id)
        assert not repo.delete(count.id)
        assert repo.list_all() == []


class TestJsonUserRepository:

    def test_case_insensitive_lookup(self, tmp_path):
        repo = JsonUserRepository(tmp_path / "users.json")
        user = User.register("Ala")
        repo.save(user)
        user.approve()
        repo.save(user)

        loaded = repo.get_by_username("ala")
        assert loaded.username == "Ala"
        assert loaded.status == UserStatus.ACTIVE
        assert len(repo.list_all()) == 1
        assert repo.delete("ALA")
        assert repo.get_by_username("ala") is None
