# storefront_cart/repos/cart_repo.py
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront_cart.data.models.cart import CartModel, CartStatus, utcnow
from storefront_cart.data.models.cart_item import CartItemModel
from storefront_cart.utils.logging import get_logger

logger = get_logger(__name__)


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart(self, cart_id: str) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def get_active_cart_by_user(self, user_id: str) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(
                CartModel.user_id == user_id,
                CartModel.status == CartStatus.ACTIVE.value,
            )
        ).scalar_one_or_none()

    def get_or_create_active_cart(self, user_id: str) -> tuple[CartModel, bool]:
        """
        Zwraca (koszyk, czy_utworzony).

        Insert idzie w SAVEPOINT, unikalny indeks uq_carts_user_active
        odrzuca drugi ACTIVE koszyk - wtedy czytamy koszyk zwyciezcy.
        """
        existing = self.get_active_cart_by_user(user_id)
        if existing:
            return existing, False

        cart = CartModel(user_id=user_id, status=CartStatus.ACTIVE.value)
        try:
            with self.db.begin_nested():
                self.db.add(cart)
        except IntegrityError:
            logger.info(f"Rownolegle utworzenie koszyka dla {user_id}, uzywam istniejacego")
            winner = self.get_active_cart_by_user(user_id)
            if winner is None:
                raise
            return winner, False

        return cart, True

    def get_cart_items(self, cart_id: str) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.created_at, CartItemModel.id)
            ).scalars()
        )

    def get_cart_item(self, cart_id: str, product_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .with_for_update()
        ).scalar_one_or_none()

    def get_owned_active_item(self, item_id: str, user_id: str) -> CartItemModel | None:
        # wlasnosc sprawdzana w samym zapytaniu, nie osobnym ifem
        return self.db.execute(
            select(CartItemModel)
            .join(CartModel, CartItemModel.cart_id == CartModel.id)
            .where(
                CartItemModel.id == item_id,
                CartModel.user_id == user_id,
                CartModel.status == CartStatus.ACTIVE.value,
            )
            .with_for_update()
        ).scalar_one_or_none()

    def insert_or_get_cart_item(self, item: CartItemModel) -> tuple[CartItemModel, bool]:
        """
        Zwraca (pozycja, czy_wstawiona).

        Nowej pozycji nie ma czego zablokowac przez FOR UPDATE, wiec insert idzie
        w SAVEPOINT - przy konflikcie na uq_cart_items_cart_product czytamy
        pozycje wstawiona przez rownolegly request.
        """
        try:
            with self.db.begin_nested():
                self.db.add(item)
        except IntegrityError:
            logger.info(f"Rownolegle dodanie produktu {item.product_id} do koszyka {item.cart_id}")
            winner = self.get_cart_item(item.cart_id, item.product_id)
            if winner is None:
                raise
            return winner, False

        return item, True

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def touch_cart(self, cart: CartModel) -> None:
        cart.updated_at = utcnow()
        self.db.flush()

    def abandon_idle_carts(self, cutoff: datetime) -> int:
        result = self.db.execute(
            update(CartModel)
            .where(
                CartModel.status == CartStatus.ACTIVE.value,
                CartModel.updated_at < cutoff,
            )
            .values(status=CartStatus.ABANDONED.value, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
