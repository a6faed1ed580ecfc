# storefront_cart/api/deps.py
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from storefront_cart.data.database import get_db
from storefront_cart.repos.cart_repo import CartRepo
from storefront_cart.services.cart_service import CartService
from storefront_cart.services.catalog_reader import build_catalog_reader
from storefront_cart.utils import settings


def get_current_user_id(request: Request) -> str:
    # token weryfikuje gateway przed nami, tu tylko stabilne id usera
    user_id = (request.headers.get(settings.USER_ID_HEADER) or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user_id


def get_cart_service(db: Session = Depends(get_db)) -> CartService:
    return CartService(
        repo=CartRepo(db),
        catalog=build_catalog_reader(db),
    )
