"""Integration tests for stock adjustments, restocks and purchases."""
from conftest import create_product


class TestAdjustEndpoint:
    def test_decrement(self, client, auth_headers):
        product = create_product(client, auth_headers, stock=20)

        response = client.post("/stock/adjust", json={"product_id": product["id"], "change_qty": -5},
                               headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["new_stock"] == 15
        assert response.json()["previous_stock"] == 20

    def test_legacy_field_name_is_accepted(self, client, auth_headers):
        product = create_product(client, auth_headers, stock=2)

        response = client.post("/stock/adjust", json={"product_id": product["id"], "quantity_change": 3},
                               headers=auth_headers)
        assert response.json()["new_stock"] == 5

    def test_insufficient_stock(self, client, auth_headers):
        product = create_product(client, auth_headers, name="Lamp", stock=3)

        response = client.post("/stock/adjust", json={"product_id": product["id"], "change_qty": -5},
                               headers=auth_headers)
        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "InsufficientStock"
        assert body["product_name"] == "Lamp"
        assert body["requested"] == 5
        assert body["available"] == 3
        assert client.get(f"/products/{product['id']}", headers=auth_headers).json()["stock"] == 3

        failures = client.get("/logs", params={"status": "FAIL"}, headers=auth_headers).json()
        assert failures["items"][0]["action"] == "STOCK_ADJUSTMENT"

    def test_unknown_product(self, client, auth_headers):
        response = client.post("/stock/adjust", json={"product_id": "ghost", "change_qty": 1},
                               headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "NotFound"


class TestRestock:
    def test_restock_updates_counters_and_logs_purchase(self, client, auth_headers):
        product = create_product(client, auth_headers, stock=2, price=4)

        response = client.post(f"/stock/{product['id']}/restock",
                               json={"quantity": 10, "price": 3.5, "supplier": "Acme"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["new_stock"] == 12

        updated = client.get(f"/products/{product['id']}", headers=auth_headers).json()
        assert updated["amount_bought"] == 10
        assert updated["price"] == 3.5
        assert updated["supplier"] == "Acme"

        purchases = client.get("/purchases", headers=auth_headers).json()
        assert purchases["total"] == 1
        assert purchases["items"][0]["quantity"] == 10
        assert purchases["items"][0]["supplier"] == "Acme"

    def test_quantity_must_be_positive(self, client, auth_headers):
        product = create_product(client, auth_headers)
        response = client.post(f"/stock/{product['id']}/restock", json={"quantity": 0}, headers=auth_headers)
        assert response.status_code == 422


class TestPurchases:
    def test_purchase_creates_new_product(self, client, auth_headers):
        response = client.post("/purchases", json={
            "supplier": "Acme",
            "items": [{"id": "new1", "name": "Widget", "price": 9.5, "quantity": 4}],
        }, headers=auth_headers)
        assert response.status_code == 201

        product = client.get("/products/new1", headers=auth_headers).json()
        assert product["stock"] == 4
        assert product["amount_bought"] == 4
        assert product["amount_sold"] == 0
        assert product["price"] == 9.5
        assert product["supplier"] == "Acme"

    def test_purchase_restocks_existing_product(self, client, auth_headers):
        create_product(client, auth_headers, id="p1", stock=10, price=5)

        client.post("/purchases", json={
            "items": [{"id": "p1", "name": "Widget", "price": 4.0, "quantity": 5},
                      {"id": "p2", "name": "Gadget", "price": 2.0, "quantity": 1}],
        }, headers=auth_headers)

        p1 = client.get("/products/p1", headers=auth_headers).json()
        assert p1["stock"] == 15
        assert p1["amount_bought"] == 5
        assert p1["price"] == 4.0
        assert client.get("/products", headers=auth_headers).json()["total"] == 2
        assert client.get("/purchases", headers=auth_headers).json()["total"] == 2

    def test_purchase_needs_items(self, client, auth_headers):
        response = client.post("/purchases", json={"supplier": "Acme", "items": []}, headers=auth_headers)
        assert response.status_code == 422
        assert client.get("/purchases", headers=auth_headers).json()["total"] == 0

    def test_purchase_item_without_id(self, client, auth_headers):
        response = client.post("/purchases", json={
            "items": [{"name": "Nameless", "price": 1, "quantity": 1}],
        }, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidArgument"
        assert client.get("/products", headers=auth_headers).json()["total"] == 0
