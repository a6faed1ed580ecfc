import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront_cart.data import models  # noqa: F401
from storefront_cart.data.database import Base, get_db, make_engine
from storefront_cart.data.models.product import InventoryModel, ProductImageModel, ProductModel
from storefront_cart.main import app
from storefront_cart.repos.cart_repo import CartRepo
from storefront_cart.services.cart_service import CartService
from storefront_cart.services.catalog_reader import SqlCatalogReader


@pytest.fixture
def engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_product(db):
    """Factory for catalog products; commits so the row is visible to other sessions."""

    def _make(price_cents=2499, stock=100, name="Keyboard", image_url=None):
        product = ProductModel(
            name=name,
            slug=f"{name.lower().replace(' ', '-')}-{uuid.uuid4().hex[:8]}",
            price_cents=price_cents,
        )
        if stock is not None:
            product.inventory = InventoryModel(quantity=stock)
        if image_url:
            product.images = [ProductImageModel(url=image_url, sort_order=0)]
        db.add(product)
        db.commit()
        return product

    return _make


@pytest.fixture
def set_price(db):
    def _set(product_id, price_cents):
        db.get(ProductModel, product_id).price_cents = price_cents
        db.commit()

    return _set


@pytest.fixture
def set_stock(db):
    def _set(product_id, quantity):
        db.get(ProductModel, product_id).inventory.quantity = quantity
        db.commit()

    return _set


@pytest.fixture
def cart_service(db):
    return CartService(repo=CartRepo(db), catalog=SqlCatalogReader(db))


@pytest.fixture
def test_client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"X-User-Id": "user-alice"}
