"""
Shared fixtures.

The database is an in-memory SQLite shared through a StaticPool and rebuilt
for every test. Redis is replaced by a MagicMock client inside a real
LockService, so lock calls can be asserted on.
"""
import os

# must be set before storefront.utils.settings is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from storefront.api.deps import get_lock_service
from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models import CartModel, CategoryModel, ProductModel
from storefront.main import create_app
from storefront.services.cart_service import CartService
from storefront.services.lock_service import LockService


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def redis_client():
    client = MagicMock()
    client.set.return_value = True
    client.eval.return_value = 1
    return client


@pytest.fixture
def lock_service(redis_client):
    return LockService(client=redis_client, wait_seconds=0.1, poll_seconds=0.01)


@pytest.fixture
def cart_service(db, lock_service):
    return CartService(db=db, lock_service=lock_service)


@pytest.fixture
def category(db):
    category = CategoryModel(name="Electronics")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def make_product(db, category):
    def _make(price="100.00", tax_rate="0.1", inventory=10, name="Keyboard", category_id=None):
        product = ProductModel(
            name=name,
            price=Decimal(price),
            tax_rate=Decimal(tax_rate),
            inventory=inventory,
            category_id=category_id or category.id,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def cart(db):
    cart = CartModel(user_id=123)
    db.add(cart)
    db.commit()
    db.refresh(cart)
    return cart


@pytest.fixture
def test_client(lock_service):
    app = create_app()
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    return TestClient(app)


@pytest.fixture
def foreign_keys():
    # SQLite leaves FK enforcement off unless asked; StaticPool shares the connection
    with engine.connect() as conn:
        conn.exec_driver_sql("PRAGMA foreign_keys=ON")
    yield
    with engine.connect() as conn:
        conn.exec_driver_sql("PRAGMA foreign_keys=OFF")
