from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from bookstore.constants.order_status import OrderStatus, can_transition
from bookstore.exceptions import InvalidStateTransitionError
from bookstore.models.book import Book
from bookstore.models.order import Order
from bookstore.models.order_item import OrderItem


class OrderRepository:
    """Orders and their items. Never commits; callers own the transaction."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, **fields) -> Order:
        order = Order(status=OrderStatus.PENDING.value, **fields)
        self.session.add(order)
        self.session.flush()
        return order

    def create_lines(self, order: Order, lines: List[Tuple[Book, int]]) -> List[OrderItem]:
        """Persist one item per (book, quantity), freezing the book's current price."""
        items = [
            OrderItem(
                order_id=order.id,
                book_id=book.id,
                quantity=quantity,
                price=book.price or Decimal("0"),
            )
            for book, quantity in lines
        ]
        self.session.add_all(items)
        self.session.flush()
        return items

    def find_by_id(
        self,
        order_id: int,
        owner_id: int,
        with_items: bool = False,
    ) -> Optional[Order]:
        statement = select(Order).where(
            Order.id == order_id,
            Order.user_id == owner_id
        )
        if with_items:
            statement = statement.options(
                selectinload(Order.items).selectinload(OrderItem.book)
            ).execution_options(populate_existing=True)

        return self.session.exec(statement).first()

    def update_status(self, order: Order, status: str) -> Order:
        if not can_transition(order.status, status):
            raise InvalidStateTransitionError(order.status)

        order.status = status
        order.updated_at = datetime.utcnow()
        self.session.add(order)
        self.session.flush()
        return order

    def list_query(self, owner_id: int, status: Optional[str] = None):
        query = select(Order).where(Order.user_id == owner_id)

        if status:
            query = query.where(Order.status == status)

        return query.order_by(Order.created_at.desc(), Order.id.desc())
