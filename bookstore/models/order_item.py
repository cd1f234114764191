from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import CheckConstraint
from typing import Optional, TYPE_CHECKING
from decimal import Decimal

if TYPE_CHECKING:
    from bookstore.models.order import Order
    from bookstore.models.book import Book


class OrderItem(SQLModel, table=True):
    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_orderitem_quantity_positive"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="order.id", index=True)
    book_id: int = Field(foreign_key="book.id")

    quantity: int = Field(ge=1)
    # copied from Book.price at purchase time, never re-read
    price: Decimal = Field(max_digits=10, decimal_places=2)

    order: Optional["Order"] = Relationship(back_populates="items")
    book: Optional["Book"] = Relationship()

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity
