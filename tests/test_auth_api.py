"""Integration tests for sign-up, login and session handling."""
from conftest import register_owner


class TestRegister:
    def test_register_creates_user_and_store(self, client):
        headers = register_owner(client, email="Alice@Shop.com", store_name="Alice's")

        me = client.get("/me", headers=headers)
        assert me.status_code == 200
        body = me.json()
        assert body["user"]["email"] == "alice@shop.com"
        assert body["user"]["role"] == "owner"
        assert body["store"]["store_name"] == "Alice's"
        assert body["store"]["owner_id"] == body["user"]["id"]
        assert body["user"]["store_id"] == body["store"]["id"]

    def test_duplicate_email_is_rejected(self, client):
        register_owner(client, email="bob@shop.com")

        response = client.post("/register", json={
            "email": "BOB@shop.com", "password": "secret123", "username": "bob2", "store_name": "Other",
        })
        assert response.status_code == 400

    def test_store_name_is_required(self, client):
        response = client.post("/register", json={
            "email": "carol@shop.com", "password": "secret123", "username": "carol",
        })
        assert response.status_code == 422


class TestLogin:
    def test_wrong_password(self, client):
        register_owner(client, email="dan@shop.com")

        response = client.post("/login", json={"email": "dan@shop.com", "password": "nope-nope"})
        assert response.status_code == 401

    def test_missing_token(self, client):
        assert client.get("/me").status_code in (401, 403)

    def test_garbage_token(self, client):
        response = client.get("/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401


class TestLogout:
    def test_logout_revokes_the_token(self, client):
        headers = register_owner(client, email="erin@shop.com")

        assert client.post("/logout", headers=headers).status_code == 204
        assert client.get("/me", headers=headers).status_code == 401
        assert client.get("/products", headers=headers).status_code == 401

    def test_new_login_after_logout_works(self, client):
        headers = register_owner(client, email="finn@shop.com")
        client.post("/logout", headers=headers)

        login = client.post("/login", json={"email": "finn@shop.com", "password": "secret123"})
        new_headers = {"Authorization": f"Bearer {login.json()['access_token']}"}
        assert client.get("/me", headers=new_headers).status_code == 200
