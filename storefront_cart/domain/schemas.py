# storefront_cart/domain/schemas.py
from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Bazowy schema: snake_case w kodzie, camelCase na wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AddItemIn(CamelModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: UUID
    quantity: int = Field(1, ge=1, strict=True, description="Ilosc do dodania (>= 1)")


class UpdateItemIn(CamelModel):
    """Schema dla zmiany ilosci pozycji, 0 usuwa pozycje."""

    quantity: int = Field(..., ge=0, strict=True, description="Nowa ilosc (>= 0)")


class ProductOut(CamelModel):
    """Aktualne dane produktu z katalogu, tylko do wyswietlenia."""

    id: str
    name: str
    price_cents: int
    available_quantity: int
    image_url: str | None = None


class CartItemOut(CamelModel):
    id: str
    cart_id: str
    product_id: str
    quantity: int
    price_snapshot_cents: int
    product: ProductOut | None = None
    created_at: datetime
    updated_at: datetime

    @computed_field(alias="lineTotalCents")
    @property
    def line_total_cents(self) -> int:
        return self.price_snapshot_cents * self.quantity


class CartOut(CamelModel):
    """Koszyk z pozycjami, subtotal i item count liczone przy odczycie."""

    id: str
    user_id: str
    status: str
    items: List[CartItemOut]
    created_at: datetime
    updated_at: datetime

    @computed_field(alias="subtotalCents")
    @property
    def subtotal_cents(self) -> int:
        return sum(i.price_snapshot_cents * i.quantity for i in self.items)

    @computed_field(alias="itemCount")
    @property
    def item_count(self) -> int:
        return sum(i.quantity for i in self.items)


class CartEnvelope(BaseModel):
    success: bool = True
    data: CartOut

