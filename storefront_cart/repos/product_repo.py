# storefront_cart/repos/product_repo.py
from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from storefront_cart.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return select(ProductModel).options(
            selectinload(ProductModel.inventory),
            selectinload(ProductModel.images),
        )

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.execute(
            self._query().where(ProductModel.id == product_id)
        ).scalar_one_or_none()

    def get_products(self, product_ids: Iterable[str]) -> list[ProductModel]:
        ids = list(set(product_ids))
        if not ids:
            return []
        return list(self.db.execute(self._query().where(ProductModel.id.in_(ids))).scalars())

    def count(self) -> int:
        return self.db.execute(select(func.count()).select_from(ProductModel)).scalar_one()

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product
