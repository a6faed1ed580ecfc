# storefront_cart/domain/errors.py
from typing import Any


class CartError(Exception):
    """Bledy biznesowe silnika koszyka, zawsze wina klienta (4xx)."""

    code = "CART_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(CartError):
    """Zla wartosc albo naruszona regula (ilosc, brak towaru)."""

    code = "VALIDATION_ERROR"


class NotFoundError(CartError):
    """Produkt albo pozycja koszyka nie istnieje lub nie jest widoczna dla usera."""

    code = "NOT_FOUND"
