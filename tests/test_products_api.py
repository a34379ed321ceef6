"""Integration tests for product endpoints."""
from conftest import create_product, register_owner


class TestAddProduct:
    def test_add_product_normalises_defaults(self, client, auth_headers):
        product = create_product(client, auth_headers, name="Kettle", price=12.5, stock=3)

        assert product["id"]
        assert product["stock"] == 3
        assert product["amount_bought"] == 0
        assert product["amount_sold"] == 0
        assert product["selling_price"] == 12.5
        assert product["low_stock"] is True
        assert product["out_of_stock"] is False
        assert product["potential_profit"] == 0

    def test_client_chosen_id(self, client, auth_headers):
        product = create_product(client, auth_headers, id="sku-42")
        assert product["id"] == "sku-42"

        again = client.post("/products", json={"id": "sku-42", "name": "Dup", "price": 1, "stock": 0},
                            headers=auth_headers)
        assert again.status_code == 409

    def test_price_must_be_positive(self, client, auth_headers):
        response = client.post("/products", json={"name": "Free", "price": 0, "stock": 1}, headers=auth_headers)
        assert response.status_code == 422

    def test_negative_stock_rejected(self, client, auth_headers):
        response = client.post("/products", json={"name": "Hole", "price": 1, "stock": -1}, headers=auth_headers)
        assert response.status_code == 422


class TestListAndGet:
    def test_list_filters_and_flags(self, client, auth_headers):
        create_product(client, auth_headers, name="Hammer", stock=50)
        create_product(client, auth_headers, name="Nails", stock=5, category="Hardware")
        create_product(client, auth_headers, name="Glue", stock=0)

        page = client.get("/products", headers=auth_headers).json()
        assert page["total"] == 3
        assert [p["name"] for p in page["items"]] == ["Glue", "Hammer", "Nails"]

        low = client.get("/products", params={"low_stock": True}, headers=auth_headers).json()
        assert [p["name"] for p in low["items"]] == ["Nails"]

        in_stock = client.get("/products", params={"in_stock": True}, headers=auth_headers).json()
        assert {p["name"] for p in in_stock["items"]} == {"Hammer", "Nails"}

        categories = client.get("/products/unique/categories", headers=auth_headers).json()
        assert categories == ["Hardware", "Tools"]

    def test_products_are_isolated_per_store(self, client, auth_headers):
        product = create_product(client, auth_headers, name="Secret")
        other = register_owner(client, email="other@shop.com", store_name="Other")

        assert client.get(f"/products/{product['id']}", headers=other).status_code == 404
        assert client.get("/products", headers=other).json()["total"] == 0


class TestEditProduct:
    def test_edit_selling_price(self, client, auth_headers):
        product = create_product(client, auth_headers, price=10, stock=4)

        response = client.patch(f"/products/{product['id']}", json={"selling_price": 15}, headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["selling_price"] == 15
        assert body["price"] == 10
        assert body["potential_profit"] == 20

    def test_stock_cannot_be_edited_directly(self, client, auth_headers):
        product = create_product(client, auth_headers, stock=4)

        client.patch(f"/products/{product['id']}", json={"stock": 99}, headers=auth_headers)
        assert client.get(f"/products/{product['id']}", headers=auth_headers).json()["stock"] == 4

    def test_edit_unknown_product(self, client, auth_headers):
        response = client.patch("/products/missing", json={"price": 3}, headers=auth_headers)
        assert response.status_code == 404
