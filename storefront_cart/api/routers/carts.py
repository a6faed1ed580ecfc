#storefront_cart/api/routers/carts.py
from uuid import UUID

from fastapi import APIRouter, Depends

from storefront_cart.api.deps import get_cart_service, get_current_user_id
from storefront_cart.domain.schemas import AddItemIn, CartEnvelope, UpdateItemIn
from storefront_cart.services.cart_service import CartService

router = APIRouter(prefix="/me/cart", tags=["cart"])


@router.get("", response_model=CartEnvelope)
def get_cart(
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_cart_service),
):
    return CartEnvelope(data=svc.get_or_create_active_cart(user_id))


@router.post("/items", response_model=CartEnvelope)
def add_item(
    payload: AddItemIn,
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_cart_service),
):
    cart = svc.add_item(
        user_id=user_id,
        product_id=str(payload.product_id),
        quantity=payload.quantity,
    )
    return CartEnvelope(data=cart)


@router.patch("/items/{item_id}", response_model=CartEnvelope)
def update_item(
    item_id: UUID,
    payload: UpdateItemIn,
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_cart_service),
):
    return CartEnvelope(data=svc.update_item(user_id, str(item_id), payload.quantity))


@router.delete("/items/{item_id}", response_model=CartEnvelope)
def remove_item(
    item_id: UUID,
    user_id: str = Depends(get_current_user_id),
    svc: CartService = Depends(get_cart_service),
):
    return CartEnvelope(data=svc.remove_item(user_id, str(item_id)))
