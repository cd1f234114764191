from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import joinedload
from sqlmodel import Session, select

from bookstore.models.book import Book
from bookstore.models.cart import CartItem


class CartRepository:
    """Cart lines for one session. Never commits; callers own the transaction."""

    def __init__(self, session: Session):
        self.session = session

    def list_lines(self, owner_id: int, for_update: bool = False) -> List[CartItem]:
        statement = (
            select(CartItem)
            .options(joinedload(CartItem.book, innerjoin=True))
            .where(CartItem.user_id == owner_id)
            .order_by(CartItem.id)
        )
        if for_update:
            # no-op on sqlite
            statement = statement.with_for_update(of=CartItem)

        return list(self.session.exec(statement).unique().all())

    def get_line(self, owner_id: int, line_id: int) -> Optional[CartItem]:
        item = self.session.get(CartItem, line_id)
        if not item or item.user_id != owner_id:
            return None
        return item

    def find_by_book(self, owner_id: int, book_id: int) -> Optional[CartItem]:
        return self.session.exec(
            select(CartItem).where(
                CartItem.user_id == owner_id,
                CartItem.book_id == book_id
            )
        ).first()

    def add(self, owner_id: int, book: Book, quantity: int = 1) -> CartItem:
        existing_item = self.find_by_book(owner_id, book.id)

        if existing_item:
            existing_item.quantity += quantity
            existing_item.updated_at = datetime.utcnow()
            self.session.add(existing_item)
            self.session.flush()
            return existing_item

        new_item = CartItem(user_id=owner_id, book_id=book.id, quantity=quantity)
        self.session.add(new_item)
        self.session.flush()
        return new_item

    def set_quantity(self, item: CartItem, quantity: int) -> CartItem:
        item.quantity = quantity
        item.updated_at = datetime.utcnow()
        self.session.add(item)
        self.session.flush()
        return item

    def remove(self, item: CartItem) -> None:
        self.session.delete(item)
        self.session.flush()

    def delete_all(self, owner_id: int) -> int:
        items = self.session.exec(
            select(CartItem).where(CartItem.user_id == owner_id)
        ).all()

        for item in items:
            self.session.delete(item)

        self.session.flush()
        return len(items)
