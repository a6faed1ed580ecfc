# storefront_cart/services/catalog_reader.py
from dataclasses import dataclass
from typing import Dict, Iterable, Protocol

import requests
from sqlalchemy.orm import Session

from storefront_cart.data.models.product import ProductModel
from storefront_cart.repos.product_repo import ProductRepo
from storefront_cart.utils import settings
from storefront_cart.utils.logging import get_logger
from storefront_cart.utils.retry import http_retry

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProductSnapshot:
    """Aktualna cena i stan magazynu produktu w momencie odczytu."""

    id: str
    name: str
    price_cents: int
    available_quantity: int
    image_url: str | None = None


class CatalogReader(Protocol):
    def get_product(self, product_id: str) -> ProductSnapshot | None: ...

    def get_products(self, product_ids: Iterable[str]) -> Dict[str, ProductSnapshot]: ...


def _snapshot_from_model(product: ProductModel) -> ProductSnapshot:
    # brak wiersza inventory = brak towaru
    available = product.inventory.quantity if product.inventory else 0
    image_url = product.images[0].url if product.images else None
    return ProductSnapshot(
        id=product.id,
        name=product.name,
        price_cents=product.price_cents,
        available_quantity=available,
        image_url=image_url,
    )


class SqlCatalogReader:
    """Katalog w tej samej bazie, odczyt w tej samej transakcji co koszyk."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def get_product(self, product_id: str) -> ProductSnapshot | None:
        product = self.repo.get_product(product_id)
        if not product:
            return None
        return _snapshot_from_model(product)

    def get_products(self, product_ids: Iterable[str]) -> Dict[str, ProductSnapshot]:
        return {p.id: _snapshot_from_model(p) for p in self.repo.get_products(product_ids)}


class HttpCatalogReader:
    """Katalog w osobnym product-service, GET /products/{id}."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or settings.CATALOG_SERVICE_URL).rstrip("/")
        self.timeout = timeout or settings.CATALOG_TIMEOUT_SECONDS

    @http_retry()
    def _fetch(self, product_id: str) -> dict | None:
        url = f"{self.base_url}/products/{product_id}"
        logger.info(f"CatalogReader GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()

    def get_product(self, product_id: str) -> ProductSnapshot | None:
        data = self._fetch(product_id)
        if data is None:
            return None
        return ProductSnapshot(
            id=str(data["id"]),
            name=data["name"],
            price_cents=int(data["priceCents"]),
            available_quantity=int(data.get("availableQuantity", 0)),
            image_url=data.get("imageUrl"),
        )

    def get_products(self, product_ids: Iterable[str]) -> Dict[str, ProductSnapshot]:
        found = {}
        for product_id in dict.fromkeys(product_ids):
            snapshot = self.get_product(product_id)
            if snapshot:
                found[product_id] = snapshot
        return found


def build_catalog_reader(db: Session) -> CatalogReader:
    backend = settings.CATALOG_BACKEND
    if backend == "sql":
        return SqlCatalogReader(db)
    if backend == "http":
        return HttpCatalogReader()
    raise ValueError(f"Unknown CATALOG_BACKEND: {backend!r}")
