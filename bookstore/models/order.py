from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import CheckConstraint, Column, JSON
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

from bookstore.constants.order_status import OrderStatus
from bookstore.models.order_item import OrderItem


class Order(SQLModel, table=True):
    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_order_total_non_negative"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)

    total_amount: Decimal = Field(max_digits=10, decimal_places=2)
    status: str = Field(default=OrderStatus.PENDING.value, index=True)

    # street, city, state, zip_code, country
    shipping_address: dict = Field(sa_column=Column(JSON, nullable=False))
    payment_method: str
    customer_email: str
    customer_phone: str
    notes: Optional[str] = None
    tracking_number: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    items: List["OrderItem"] = Relationship(back_populates="order")
