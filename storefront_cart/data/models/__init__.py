#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront_cart.data.models.cart import CartModel, CartStatus
from storefront_cart.data.models.cart_item import CartItemModel
from storefront_cart.data.models.product import InventoryModel, ProductImageModel, ProductModel

__all__ = [
    "CartModel",
    "CartStatus",
    "CartItemModel",
    "ProductModel",
    "InventoryModel",
    "ProductImageModel",
]
