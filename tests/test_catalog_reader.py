import pytest
import requests

from storefront_cart.services import catalog_reader
from storefront_cart.services.catalog_reader import (
    HttpCatalogReader,
    ProductSnapshot,
    SqlCatalogReader,
    build_catalog_reader,
)
from storefront_cart.utils import settings


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


@pytest.fixture
def no_retry_wait(monkeypatch):
    from tenacity import wait_none

    monkeypatch.setattr(HttpCatalogReader._fetch.retry, "wait", wait_none())


class TestSqlCatalogReader:
    def test_snapshot_from_catalog_tables(self, db, make_product):
        product = make_product(price_cents=1250, stock=4, name="Lamp", image_url="/img/lamp.jpg")

        snapshot = SqlCatalogReader(db).get_product(product.id)

        assert snapshot == ProductSnapshot(
            id=product.id,
            name="Lamp",
            price_cents=1250,
            available_quantity=4,
            image_url="/img/lamp.jpg",
        )

    def test_unknown_product_is_none(self, db):
        assert SqlCatalogReader(db).get_product("missing") is None

    def test_get_products_skips_unknown_ids(self, db, make_product):
        a = make_product(name="A")
        b = make_product(name="B", stock=None)

        found = SqlCatalogReader(db).get_products([a.id, b.id, "missing", a.id])

        assert set(found) == {a.id, b.id}
        assert found[b.id].available_quantity == 0
        assert found[b.id].image_url is None


class TestHttpCatalogReader:
    def test_maps_product_service_payload(self, monkeypatch):
        calls = []

        def fake_get(url, timeout):
            calls.append((url, timeout))
            return FakeResponse(200, {"id": "p-1", "name": "Desk", "priceCents": 15000, "availableQuantity": 3})

        monkeypatch.setattr(catalog_reader.requests, "get", fake_get)

        snapshot = HttpCatalogReader(base_url="http://catalog:9000/", timeout=1.5).get_product("p-1")

        assert calls == [("http://catalog:9000/products/p-1", 1.5)]
        assert snapshot == ProductSnapshot(id="p-1", name="Desk", price_cents=15000, available_quantity=3)

    def test_404_is_none(self, monkeypatch):
        monkeypatch.setattr(catalog_reader.requests, "get", lambda url, timeout: FakeResponse(404))

        assert HttpCatalogReader(base_url="http://catalog").get_product("nope") is None

    def test_server_error_retried_then_propagates(self, monkeypatch, no_retry_wait):
        attempts = []

        def failing_get(url, timeout):
            attempts.append(url)
            return FakeResponse(503)

        monkeypatch.setattr(catalog_reader.requests, "get", failing_get)

        with pytest.raises(requests.HTTPError):
            HttpCatalogReader(base_url="http://catalog").get_product("p-1")
        assert len(attempts) == 3

    def test_connection_errors_are_retried(self, monkeypatch, no_retry_wait):
        attempts = []

        def flaky_get(url, timeout):
            attempts.append(url)
            if len(attempts) < 3:
                raise requests.ConnectionError("connection refused")
            return FakeResponse(200, {"id": "p-1", "name": "Desk", "priceCents": 100, "availableQuantity": 1})

        monkeypatch.setattr(catalog_reader.requests, "get", flaky_get)

        snapshot = HttpCatalogReader(base_url="http://catalog").get_product("p-1")

        assert len(attempts) == 3
        assert snapshot.price_cents == 100

    def test_gives_up_after_three_attempts(self, monkeypatch, no_retry_wait):
        attempts = []

        def down(url, timeout):
            attempts.append(url)
            raise requests.Timeout("timed out")

        monkeypatch.setattr(catalog_reader.requests, "get", down)

        with pytest.raises(requests.Timeout):
            HttpCatalogReader(base_url="http://catalog").get_product("p-1")
        assert len(attempts) == 3


class TestBuildCatalogReader:
    def test_sql_backend(self, db, monkeypatch):
        monkeypatch.setattr(settings, "CATALOG_BACKEND", "sql")
        assert isinstance(build_catalog_reader(db), SqlCatalogReader)

    def test_http_backend(self, db, monkeypatch):
        monkeypatch.setattr(settings, "CATALOG_BACKEND", "http")
        assert isinstance(build_catalog_reader(db), HttpCatalogReader)

    def test_unknown_backend(self, db, monkeypatch):
        monkeypatch.setattr(settings, "CATALOG_BACKEND", "ldap")
        with pytest.raises(ValueError):
            build_catalog_reader(db)
