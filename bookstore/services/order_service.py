import logging
import threading
from contextlib import contextmanager
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from bookstore.constants.order_status import OrderStatus
from bookstore.exceptions import (
    BookstoreError,
    BookUnavailableError,
    EmptyCartError,
    NotFoundError,
    PersistenceError,
)
from bookstore.models.book import Book
from bookstore.models.order import Order
from bookstore.notifications import LoggingNotifier, Notifier, send_order_notifications
from bookstore.repositories import (
    CartRepository,
    OrderRepository,
    transaction,
    with_transaction,
)
from bookstore.utils.pagination import paginate

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

# One checkout at a time per owner inside this process. The row lock taken
# while reading the cart covers other processes on PostgreSQL. Entries are
# dropped once no thread holds or waits on them.
_owner_locks: Dict[int, list] = {}
_owner_locks_guard = threading.Lock()


@contextmanager
def owner_lock(owner_id: int):
    with _owner_locks_guard:
        entry = _owner_locks.setdefault(owner_id, [threading.Lock(), 0])
        entry[1] += 1

    try:
        with entry[0]:
            yield
    finally:
        with _owner_locks_guard:
            entry[1] -= 1
            if entry[1] == 0:
                del _owner_locks[owner_id]


def round_money(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def order_total(lines: Iterable[Tuple[Book, int]]) -> Decimal:
    """Sum of quantity x current price (missing price counts as 0), to the cent."""
    total = Decimal("0")
    for book, quantity in lines:
        total += (book.price or Decimal("0")) * quantity
    return round_money(total)


def ensure_available(books: Iterable[Book]) -> None:
    """All-or-nothing: the first unavailable book aborts the whole order."""
    for book in books:
        if not book.is_available:
            raise BookUnavailableError(book.title)


def _run_inline(fn, *args, **kwargs):
    fn(*args, **kwargs)


class OrderService:
    """
    Turns carts into orders and manages their lifecycle.

    Every write goes through one session transaction. Notifications are handed
    to ``dispatch`` only after the order has been committed; the API passes
    ``BackgroundTasks.add_task`` there, otherwise they run inline.
    """

    def __init__(
        self,
        session: Session,
        notifier: Optional[Notifier] = None,
        dispatch: Optional[Callable] = None,
    ):
        self.session = session
        self.notifier = notifier or LoggingNotifier()
        self.dispatch = dispatch or _run_inline
        self.carts = CartRepository(session)
        self.orders = OrderRepository(session)

    # ------------------------------------------
    # Checkout
    # ------------------------------------------

    def create_order(
        self,
        owner_id: int,
        shipping_address: dict,
        payment_method: str,
        customer_email: str,
        customer_phone: str,
        notes: Optional[str] = None,
    ) -> Order:
        """
        Create an order from the owner's cart:
        1. Load the cart lines with their books (row locked)
        2. Refuse an empty cart or any unavailable book
        3. Total the lines at current prices
        4. Save the order and its items with a price snapshot
        5. Clear the cart
        6. Commit, then send the customer and admin emails

        Raises EmptyCartError, BookUnavailableError or PersistenceError; in
        all three cases nothing is written and the cart is left as it was.
        """
        fields = dict(
            user_id=owner_id,
            shipping_address=shipping_address,
            payment_method=payment_method,
            customer_email=customer_email,
            customer_phone=customer_phone,
            notes=notes or "",
        )

        def checkout() -> Tuple[int, Decimal]:
            cart_items = self.carts.list_lines(owner_id, for_update=True)
            if not cart_items:
                raise EmptyCartError()

            lines = [(item.book, item.quantity) for item in cart_items]
            ensure_available(book for book, _ in lines)

            order = self.orders.create(total_amount=order_total(lines), **fields)
            self.orders.create_lines(order, lines)
            self.carts.delete_all(owner_id)
            return order.id, order.total_amount

        with owner_lock(owner_id):
            try:
                order_id, total_amount = with_transaction(self.session, checkout)
            except PersistenceError:
                # already logged with its traceback by transaction()
                raise
            except BookstoreError as e:
                logger.warning(f"Checkout failed for user {owner_id}: {e.message}")
                raise

        logger.info(f"Order {order_id} created for user {owner_id}")

        # The order is committed from here on; a failed read must not fail the call.
        try:
            complete_order = self.orders.find_by_id(order_id, owner_id, with_items=True)
        except SQLAlchemyError:
            logger.exception(f"Order {order_id} committed but could not be reloaded, skipping emails")
            self.session.rollback()
            return Order(
                id=order_id,
                total_amount=total_amount,
                status=OrderStatus.PENDING.value,
                **fields,
            )

        self.dispatch(send_order_notifications, self.notifier, complete_order)

        return complete_order

    # ------------------------------------------
    # Cancel
    # ------------------------------------------

    def cancel_order(self, owner_id: int, order_id: int) -> Order:
        """Pending -> cancelled. Any other status raises InvalidStateTransitionError."""
        with transaction(self.session):
            order = self.orders.find_by_id(order_id, owner_id)
            if not order:
                raise NotFoundError("Order not found")

            self.orders.update_status(order, OrderStatus.CANCELLED.value)

        logger.info(f"Order {order_id} cancelled by user {owner_id}")
        return self.orders.find_by_id(order_id, owner_id, with_items=True)

    # ------------------------------------------
    # Reorder
    # ------------------------------------------

    def reorder(
        self,
        owner_id: int,
        original_order_id: int,
        shipping_address: dict,
        payment_method: str,
        notes: Optional[str] = None,
    ) -> Order:
        """
        Place the same books and quantities as an earlier order, re-priced at
        today's catalog prices. The cart is not involved and no emails go out.
        """
        def place_again() -> int:
            original = self.orders.find_by_id(original_order_id, owner_id, with_items=True)
            if not original:
                raise NotFoundError("Order not found")

            lines: List[Tuple[Book, int]] = [(item.book, item.quantity) for item in original.items]
            ensure_available(book for book, _ in lines)

            order = self.orders.create(
                user_id=owner_id,
                total_amount=order_total(lines),
                shipping_address=shipping_address,
                payment_method=payment_method,
                customer_email=original.customer_email,
                customer_phone=original.customer_phone,
                notes=notes or "",
            )
            self.orders.create_lines(order, lines)
            return order.id

        order_id = with_transaction(self.session, place_again)
        logger.info(f"Order {order_id} reordered from {original_order_id} by user {owner_id}")

        return self.orders.find_by_id(order_id, owner_id, with_items=True)

    # ------------------------------------------
    # Queries
    # ------------------------------------------

    def get_order(self, owner_id: int, order_id: int) -> Order:
        order = self.orders.find_by_id(order_id, owner_id, with_items=True)
        if not order:
            raise NotFoundError("Order not found")
        return order

    def list_orders(
        self,
        owner_id: int,
        page: int = 1,
        limit: int = 10,
        status: Optional[str] = None,
    ) -> dict:
        query = self.orders.list_query(owner_id, status=status)
        return paginate(session=self.session, query=query, page=page, limit=limit)
