"""
Pytest configuration: every test runs against a fresh SQLite file database.
"""
import os
import tempfile

# Must be set before config/database are imported
_DB_DIR = tempfile.mkdtemp(prefix="inventory-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["LOW_STOCK_THRESHOLD"] = "20"

import pytest
from fastapi.testclient import TestClient

from database import Base, SessionLocal, engine, init_db
from main import app
from models.product import Product
from models.store import Store
from models.users import User


@pytest.fixture(autouse=True)
def setup_db():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db):
    """A store with its owner, created directly in the database."""
    owner = User(email="owner@example.com", password_hash="x", role="owner", username="owner")
    db.add(owner)
    db.flush()
    store = Store(store_name="Corner Shop", owner_id=owner.id)
    db.add(store)
    db.flush()
    owner.store_id = store.id
    db.commit()
    return store.id


@pytest.fixture()
def make_product(db, store):
    def _make(product_id="p1", name="Widget", stock=20, price=10.0, store_id=None, **fields):
        product = Product(
            store_id=store_id or store, id=product_id, name=name,
            stock=stock, price=price, amount_bought=fields.pop("amount_bought", 0),
            amount_sold=fields.pop("amount_sold", 0), **fields,
        )
        db.add(product)
        db.commit()
        return product_id
    return _make


@pytest.fixture()
def client():
    return TestClient(app)


def register_owner(client, email="owner@shop.com", store_name="Corner Shop", password="secret123"):
    """Helper: sign up an owner, log in and return auth headers."""
    response = client.post("/register", json={
        "email": email,
        "password": password,
        "username": email.split("@")[0],
        "mobile": "555-0100",
        "store_name": store_name,
    })
    assert response.status_code == 201, response.text
    login = client.post("/login", json={"email": email, "password": password})
    assert login.status_code == 200, login.text
    return {"Authorization": f"Bearer {login.json()['access_token']}"}


@pytest.fixture()
def auth_headers(client):
    return register_owner(client)


def create_product(client, headers, **overrides):
    """Helper: POST /products and return the created product."""
    payload = {"name": "Widget", "category": "Tools", "price": 10.0, "stock": 20}
    payload.update(overrides)
    response = client.post("/products", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()
