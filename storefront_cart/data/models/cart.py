# storefront_cart/data/models/cart.py
import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, String, text
from sqlalchemy.orm import relationship

from storefront_cart.data.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CartStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    ABANDONED = "ABANDONED"
    CONVERTED = "CONVERTED"


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(128), nullable=False, index=True)

    status = Column(String(20), nullable=False, default=CartStatus.ACTIVE.value)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="[CartItemModel.created_at, CartItemModel.id]",
    )

    # jeden ACTIVE koszyk na usera pilnuje baza, nie serwis
    __table_args__ = (
        Index(
            "uq_carts_user_active",
            "user_id",
            unique=True,
            postgresql_where=text("status = 'ACTIVE'"),
            sqlite_where=text("status = 'ACTIVE'"),
        ),
    )
