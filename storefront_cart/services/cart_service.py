from contextlib import contextmanager
from dataclasses import asdict
from typing import Any

from storefront_cart.data.models.cart import CartModel
from storefront_cart.data.models.cart_item import CartItemModel
from storefront_cart.domain.errors import NotFoundError, ValidationError
from storefront_cart.domain.schemas import CartItemOut, CartOut, ProductOut
from storefront_cart.repos.cart_repo import CartRepo
from storefront_cart.services.catalog_reader import CatalogReader
from storefront_cart.utils.logging import get_logger

logger = get_logger(__name__)


def _require_int(value: Any, field: str) -> int:
    # bool to tez int w pythonie, ale nie jako ilosc
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer", {field: value})
    return value


class CartService:
    """
    Silnik koszyka: aktywny koszyk usera, dodawanie/zmiana/usuwanie pozycji.

    Kazda operacja to jedna transakcja na sesji repo: commit na koncu,
    rollback przy dowolnym wyjatku, wiec nieudane wywolanie nie zostawia
    zadnych zmian. Cena pozycji jest zapisywana przy pierwszym dodaniu
    (price_snapshot_cents) i pozniej juz sie nie zmienia.
    """

    def __init__(self, repo: CartRepo, catalog: CatalogReader):
        self.repo = repo
        self.catalog = catalog

    @contextmanager
    def _transaction(self):
        try:
            yield
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

    #query (tworzy koszyk leniwie przy pierwszym odczycie)
    def get_or_create_active_cart(self, user_id: str) -> CartOut:
        with self._transaction():
            cart, created = self.repo.get_or_create_active_cart(user_id)
            result = self._hydrate(cart)

        if created:
            logger.info(f"Utworzono nowy koszyk {cart.id} dla uzytkownika {user_id}")
        return result

    #commands
    def add_item(self, user_id: str, product_id: str, quantity: int = 1) -> CartOut:
        quantity = _require_int(quantity, "quantity")
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1", {"quantity": quantity})

        with self._transaction():
            cart, created = self.repo.get_or_create_active_cart(user_id)

            product = self.catalog.get_product(product_id)
            if not product:
                raise NotFoundError("Product not found", {"productId": product_id})

            # sprawdzamy tylko dodawana ilosc, nie sume z tym co juz jest w koszyku
            if product.available_quantity < quantity:
                raise ValidationError(
                    "Insufficient inventory",
                    {"productId": product_id, "requested": quantity, "available": product.available_quantity},
                )

            item = self.repo.get_cart_item(cart.id, product_id)
            inserted = False

            if item is None:
                item, inserted = self.repo.insert_or_get_cart_item(
                    CartItemModel(
                        cart_id=cart.id,
                        product_id=product_id,
                        quantity=quantity,
                        price_snapshot_cents=product.price_cents,
                    )
                )

            # istniejaca pozycja: tylko ilosc, snapshot ceny zostaje
            if not inserted:
                item.quantity += quantity
                self.repo.add_cart_item(item)

            self.repo.touch_cart(cart)
            result = self._hydrate(cart)

        if created:
            logger.info(f"Utworzono nowy koszyk {cart.id} dla uzytkownika {user_id}")
        logger.info(f"Produkt {product_id} (+{quantity}) dodany do koszyka {cart.id}")
        return result

    def update_item(self, user_id: str, item_id: str, quantity: int) -> CartOut:
        quantity = _require_int(quantity, "quantity")
        if quantity < 0:
            raise ValidationError("Quantity cannot be negative", {"quantity": quantity})

        with self._transaction():
            item = self._owned_item_or_not_found(user_id, item_id)
            cart = self.repo.get_cart(item.cart_id)

            if quantity == 0:
                self.repo.delete_cart_item(item)
            else:
                product = self.catalog.get_product(item.product_id)
                if not product:
                    raise NotFoundError("Product not found", {"productId": item.product_id})

                # tu porownujemy docelowa ilosc, nie przyrost
                if product.available_quantity < quantity:
                    raise ValidationError(
                        "Insufficient inventory",
                        {"productId": item.product_id, "requested": quantity, "available": product.available_quantity},
                    )
                item.quantity = quantity
                self.repo.add_cart_item(item)

            self.repo.touch_cart(cart)
            result = self._hydrate(cart)

        logger.info(f"Pozycja {item_id} w koszyku {cart.id} ustawiona na {quantity}")
        return result

    def remove_item(self, user_id: str, item_id: str) -> CartOut:
        with self._transaction():
            item = self._owned_item_or_not_found(user_id, item_id)
            cart = self.repo.get_cart(item.cart_id)

            self.repo.delete_cart_item(item)
            self.repo.touch_cart(cart)
            result = self._hydrate(cart)

        logger.info(f"Pozycja {item_id} usunieta z koszyka {cart.id}")
        return result

    def _owned_item_or_not_found(self, user_id: str, item_id: str) -> CartItemModel:
        """
        Polityka widocznosci pozycji: user widzi tylko pozycje swojego
        aktywnego koszyka. Cudza pozycja (albo pozycja z koszyka
        ABANDONED/CONVERTED) daje NotFoundError, nigdy 403, zeby nie
        zdradzac ze taka pozycja w ogole istnieje.
        """
        item = self.repo.get_owned_active_item(item_id, user_id)
        if not item:
            raise NotFoundError("Cart item not found", {"itemId": item_id})
        return item

    def _hydrate(self, cart: CartModel) -> CartOut:
        # dane produktu tylko do wyswietlenia, snapshot ceny zostaje z bazy
        items = self.repo.get_cart_items(cart.id)
        products = self.catalog.get_products(i.product_id for i in items)

        return CartOut(
            id=cart.id,
            user_id=cart.user_id,
            status=cart.status,
            items=[
                CartItemOut(
                    id=i.id,
                    cart_id=i.cart_id,
                    product_id=i.product_id,
                    quantity=i.quantity,
                    price_snapshot_cents=i.price_snapshot_cents,
                    product=ProductOut(**asdict(products[i.product_id])) if i.product_id in products else None,
                    created_at=i.created_at,
                    updated_at=i.updated_at,
                )
                for i in items
            ],
            created_at=cart.created_at,
            updated_at=cart.updated_at,
        )
