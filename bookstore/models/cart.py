from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import CheckConstraint, UniqueConstraint
from typing import Optional, TYPE_CHECKING
from datetime import datetime

if TYPE_CHECKING:
    from bookstore.models.book import Book


class CartItem(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("user_id", "book_id", name="uq_cartitem_user_book"),
        CheckConstraint("quantity >= 1", name="ck_cartitem_quantity_positive"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    book_id: int = Field(foreign_key="book.id")
    quantity: int = Field(default=1, ge=1)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    book: Optional["Book"] = Relationship()
