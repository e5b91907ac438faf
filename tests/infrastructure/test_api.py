"""REST API tests through FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from wms.infrastructure.api.app import create_app
from wms.infrastructure.bootstrap import Container
from wms.infrastructure.config import get_config
from wms.infrastructure.persistence.json_product_repository import JsonProductRepository
from tests.factories import make_product


@pytest.fixture
def data_dir(tmp_path):
    JsonProductRepository(tmp_path / "products.json").replace_all([
        make_product(id="1", name="Hinge", code="H-1", barcode="5901", price="12.50", quantity=10),
        make_product(id="2", name="Bolt", code="B-1", barcode="5902", price="0.80", quantity=0),
    ])
    return tmp_path


@pytest.fixture
def client(data_dir):
    config = get_config("test")
    config.DATA_DIR = data_dir
    return TestClient(create_app(Container(config)))


def _create_order(client) -> dict:
    response = client.post(
        "/api/orders",
        json={
            "customerName": "Alice",
            "author": "ala",
            "items": [
                {"productRef": "1", "quantity": 3},
                {"barcode": "777", "quantity": 1, "isCustom": True},
            ],
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestProducts:

    def test_search(self, client):
        response = client.get("/api/products", params={"search": "hin"})
        assert response.status_code == 200
        body = response.json()
        assert [p["id"] for p in body] == ["1"]
        assert body[0]["productCode"] == "H-1"
        assert body[0]["price"] == 12.5
        assert body[0]["availability"] is True

    def test_available_only(self, client):
        body = client.get("/api/products", params={"availableOnly": "true"}).json()
        assert [p["id"] for p in body] == ["1"]

    def test_import(self, client, data_dir):
        (data_dir / "produkty.csv").write_text(
            "id,name,product_code,barcode,price,quantity,availability\n9,Nut,N-1,5909,1.00,4,true\n",
            encoding="utf-8",
        )
        response = client.post("/api/admin/import-products", json={})
        assert response.status_code == 200
        assert response.json() == {"message": "Imported 1 products"}
        assert [p["id"] for p in client.get("/api/products").json()] == ["9"]

    def test_import_ignores_paths_outside_data_dir(self, client):
        response = client.post("/api/admin/import-products", json={"files": ["../etc/passwd"]})
        assert response.json() == {"message": "Imported 0 products"}
        assert len(client.get("/api/products").json()) == 2


class TestOrders:

    def test_create(self, client):
        order = _create_order(client)
        assert order["id"].startswith("ORDER-")
        assert order["status"] == "Saved"
        assert order["total"] == 37.5
        assert order["author"] == "ala"
        custom = order["items"][1]
        assert (custom["lineId"], custom["name"], custom["isCustom"]) == ("custom-777", "EAN: 777", True)

    def test_customer_name_required(self, client):
        response = client.post("/api/orders", json={"customerName": "", "items": []})
        assert response.status_code == 400
        assert response.json() == {"message": "Customer name is required"}

    def test_unknown_product(self, client):
        response = client.post(
            "/api/orders", json={"customerName": "Alice", "items": [{"productRef": "9", "quantity": 1}]}
        )
        assert response.status_code == 404

    def test_zero_quantity_rejected(self, client):
        response = client.post(
            "/api/orders", json={"customerName": "Alice", "items": [{"productRef": "1", "quantity": 0}]}
        )
        assert response.status_code == 400

    def test_update_keeps_price_sent_by_client(self, client):
        order = _create_order(client)
        response = client.put(
            f"/api/orders/{order['id']}",
            json={"customerName": "Bob", "items": [{"productRef": "1", "quantity": 2, "price": "10.00"}]},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == order["id"]
        assert body["date"] == order["date"]
        assert body["customerName"] == "Bob"
        assert body["total"] == 20.0

    def test_get_and_list(self, client):
        order = _create_order(client)
        assert client.get(f"/api/orders/{order['id']}").json()["customerName"] == "Alice"
        assert [o["id"] for o in client.get("/api/orders").json()] == [order["id"]]
        assert client.get("/api/orders", params={"status": "Completed"}).json() == []
        assert client.get("/api/orders", params={"status": "Cancelled"}).status_code == 400

    def test_missing_order(self, client):
        response = client.get("/api/orders/ORDER-0")
        assert response.status_code == 404
        assert "ORDER-0" in response.json()["message"]

    def test_complete_and_shortage_report(self, client):
        order = _create_order(client)
        response = client.post(
            f"/api/orders/{order['id']}/complete",
            json={"pickRecords": [{"lineId": "1", "originalQuantity": 3, "pickedQuantity": 2}]},
        )
        assert response.status_code == 200, response.text
        body = response.json()
        assert body["status"] == "Completed"
        assert body["completedAt"] is not None
        assert body["pickRecords"][0]["mismatch"] is True

        rows = client.get("/api/reports/shortages").json()
        assert [(r["lineId"], r["requested"], r["picked"], r["missing"]) for r in rows] == [
            ("1", 3, 2, 1),
            ("custom-777", 1, 0, 1),
        ]

    def test_completed_order_is_frozen(self, client):
        order = _create_order(client)
        client.post(f"/api/orders/{order['id']}/complete", json={"pickRecords": []})

        again = client.post(f"/api/orders/{order['id']}/complete", json={"pickRecords": []})
        assert again.status_code == 409
        update = client.put(f"/api/orders/{order['id']}", json={"customerName": "Bob", "items": []})
        assert update.status_code == 409
        assert client.get(f"/api/orders/{order['id']}").json()["customerName"] == "Alice"

    def test_complete_unknown_line(self, client):
        order = _create_order(client)
        response = client.post(
            f"/api/orders/{order['id']}/complete",
            json={"pickRecords": [{"lineId": "X", "originalQuantity": 1, "pickedQuantity": 1}]},
        )
        assert response.status_code == 400
        assert client.get(f"/api/orders/{order['id']}").json()["status"] == "Saved"

    def test_complete_rejects_wrong_original_quantity(self, client):
        order = _create_order(client)
        response = client.post(
            f"/api/orders/{order['id']}/complete",
            json={"pickRecords": [{"lineId": "1", "originalQuantity": 2, "pickedQuantity": 2}]},
        )
        assert response.status_code == 400
        assert "3 were waiting" in response.json()["message"]
        assert client.get("/api/reports/shortages").json() == []

    def test_complete_rejects_line_picked_twice(self, client):
        order = _create_order(client)
        record = {"lineId": "1", "originalQuantity": 3, "pickedQuantity": 3}
        response = client.post(
            f"/api/orders/{order['id']}/complete", json={"pickRecords": [record, record]}
        )
        assert response.status_code == 400
        assert client.get(f"/api/orders/{order['id']}").json()["status"] == "Saved"

    def test_negative_picked_quantity(self, client):
        order = _create_order(client)
        response = client.post(
            f"/api/orders/{order['id']}/complete",
            json={"pickRecords": [{"lineId": "1", "originalQuantity": 3, "pickedQuantity": -1}]},
        )
        assert response.status_code == 422

    def test_corrupt_store(self, client, data_dir):
        (data_dir / "orders.json").write_text("{", encoding="utf-8")
        response = client.get("/api/orders")
        assert response.status_code == 503
        assert "orders.json" in response.json()["message"]


class TestInventories:

    def test_lifecycle(self, client):
        response = client.post(
            "/api/inventories",
            json={"name": "Aisle 1", "items": [{"productRef": "1", "quantity": 8}, {"barcode": "777", "quantity": 1}]},
        )
        assert response.status_code == 201, response.text
        count = response.json()
        assert [(i["lineId"], i["quantity"], i["expectedQuantity"]) for i in count["items"]] == [
            ("1", 8, 10),
            ("custom-777", 1, 0),
        ]
        assert len(count["discrepancies"]) == 2

        update = client.put(
            f"/api/inventories/{count['id']}",
            json={"name": "Aisle 1", "items": [{"productRef": "1", "quantity": 10}]},
        )
        assert update.json()["discrepancies"] == []
        assert [c["id"] for c in client.get("/api/inventories").json()] == [count["id"]]

        assert client.delete(f"/api/inventories/{count['id']}").status_code == 200
        assert client.get(f"/api/inventories/{count['id']}").status_code == 404

    def test_name_required(self, client):
        assert client.post("/api/inventories", json={"name": "", "items": []}).status_code == 400


class TestUsers:

    def test_lifecycle(self, client):
        response = client.post("/api/register", json={"username": "ala"})
        assert response.status_code == 201
        assert response.json()["status"] == "pending"
        assert client.post("/api/register", json={"username": "ALA"}).status_code == 400

        assert client.post("/api/admin/users/ala/approve").json()["status"] == "active"
        role = client.post("/api/admin/users/ala/role", json={"role": "administrator"})
        assert role.json()["role"] == "administrator"
        assert client.post("/api/admin/users/ala/role", json={"role": "owner"}).status_code == 400

        assert [u["username"] for u in client.get("/api/admin/users").json()] == ["ala"]
        assert client.delete("/api/admin/users/ala").status_code == 200
        assert client.delete("/api/admin/users/ala").status_code == 404


class TestDashboardStats:

    def test_stats(self, client):
        order = _create_order(client)
        client.post(f"/api/orders/{order['id']}/complete", json={"pickRecords": []})
        _create_order(client)

        body = client.get("/api/dashboard-stats").json()

        assert body["productCount"] == 2
        assert (body["pendingOrders"], body["completedOrders"]) == (1, 1)
        assert body["topProducts"][0] == {"name": "Hinge", "totalSold": 6}
        assert body["topCustomers"] == [{"name": "Alice", "orderCount": 2}]
