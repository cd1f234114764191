from bookstore.repositories.transaction import transaction, with_transaction
from bookstore.repositories.cart_repository import CartRepository
from bookstore.repositories.book_repository import BookRepository
from bookstore.repositories.order_repository import OrderRepository

__all__ = [
    "transaction",
    "with_transaction",
    "CartRepository",
    "BookRepository",
    "OrderRepository",
]
