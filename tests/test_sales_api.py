"""Integration tests for sales and the low-stock notification they trigger."""
from conftest import create_product


def _sell(client, headers, items, customer="Walk-in"):
    return client.post("/sales", json={"customer": customer, "items": items}, headers=headers)


class TestRecordSale:
    def test_sale_takes_units_out_of_stock(self, client, auth_headers):
        pen = create_product(client, auth_headers, name="Pen", price=1.0, stock=100)
        client.patch(f"/products/{pen['id']}", json={"selling_price": 2.5}, headers=auth_headers)
        pad = create_product(client, auth_headers, name="Pad", price=3.0, stock=40)

        response = _sell(client, auth_headers, [
            {"product_id": pen["id"], "quantity": 4},
            {"product_id": pad["id"], "quantity": 2, "unit_price": 5.0},
        ])
        assert response.status_code == 201
        sale = response.json()
        assert sale["total"] == 20.0
        assert sale["status"] == "Completed"
        assert [(i["product_name"], i["unit_price"]) for i in sale["items"]] == [("Pen", 2.5), ("Pad", 5.0)]

        pen_after = client.get(f"/products/{pen['id']}", headers=auth_headers).json()
        assert pen_after["stock"] == 96
        assert pen_after["amount_sold"] == 4

    def test_short_item_rejects_the_whole_sale(self, client, auth_headers):
        plenty = create_product(client, auth_headers, name="Plenty", stock=50)
        scarce = create_product(client, auth_headers, name="Scarce", stock=1)

        response = _sell(client, auth_headers, [
            {"product_id": plenty["id"], "quantity": 5},
            {"product_id": scarce["id"], "quantity": 2},
        ])
        assert response.status_code == 409
        assert response.json()["product_name"] == "Scarce"

        assert client.get(f"/products/{plenty['id']}", headers=auth_headers).json()["stock"] == 50
        assert client.get("/sales", headers=auth_headers).json()["total"] == 0

    def test_unknown_product(self, client, auth_headers):
        response = _sell(client, auth_headers, [{"product_id": "ghost", "quantity": 1}])
        assert response.status_code == 404

    def test_empty_sale(self, client, auth_headers):
        assert _sell(client, auth_headers, []).status_code == 422


class TestSaleRecords:
    def test_update_and_delete(self, client, auth_headers):
        product = create_product(client, auth_headers, stock=10)
        sale = _sell(client, auth_headers, [{"product_id": product["id"], "quantity": 3}]).json()

        patched = client.patch(f"/sales/{sale['id']}", json={"customer": "Ann"}, headers=auth_headers)
        assert patched.json()["customer"] == "Ann"

        assert client.delete(f"/sales/{sale['id']}", headers=auth_headers).status_code == 200
        assert client.get(f"/sales/{sale['id']}", headers=auth_headers).status_code == 404
        # Deleting the record does not give stock back
        assert client.get(f"/products/{product['id']}", headers=auth_headers).json()["stock"] == 7


class TestLowStockNotification:
    def test_crossing_the_threshold_notifies_the_owner(self, client, auth_headers):
        product = create_product(client, auth_headers, name="Soap", stock=25)

        _sell(client, auth_headers, [{"product_id": product["id"], "quantity": 10}])

        notes = client.get("/notifications", headers=auth_headers).json()
        assert notes["unread"] == 1
        assert notes["items"][0]["title"] == "Low Stock Alert!"
        assert "Soap" in notes["items"][0]["body"]
        assert notes["items"][0]["type"] == "warning"

    def test_no_notification_above_threshold(self, client, auth_headers):
        product = create_product(client, auth_headers, stock=100)

        _sell(client, auth_headers, [{"product_id": product["id"], "quantity": 10}])

        assert client.get("/notifications", headers=auth_headers).json()["items"] == []

    def test_only_the_crossing_notifies(self, client, auth_headers):
        product = create_product(client, auth_headers, stock=21)

        _sell(client, auth_headers, [{"product_id": product["id"], "quantity": 2}])
        _sell(client, auth_headers, [{"product_id": product["id"], "quantity": 2}])

        assert len(client.get("/notifications", headers=auth_headers).json()["items"]) == 1

    def test_mark_as_read(self, client, auth_headers):
        product = create_product(client, auth_headers, stock=20)
        client.post("/stock/adjust", json={"product_id": product["id"], "change_qty": -1}, headers=auth_headers)

        note = client.get("/notifications", headers=auth_headers).json()["items"][0]
        read = client.patch(f"/notifications/{note['id']}/read", headers=auth_headers)
        assert read.json()["read"] is True
        assert client.get("/notifications", params={"unread_only": True}, headers=auth_headers).json()["items"] == []
