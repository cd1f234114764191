"""
Business-level exceptions raised by the order and cart services.

Every error carries an HTTP status code so the API layer can turn it into a
response without knowing the individual kinds.
"""


class BookstoreError(Exception):
    """Base exception for all business logic errors."""
    status_code = 400

    def __init__(self, message: str = "Something went wrong."):
        self.message = message
        super().__init__(self.message)


class EmptyCartError(BookstoreError):
    """Raised when checkout is attempted with no cart lines."""
    def __init__(self):
        super().__init__("Cart is empty")


class BookUnavailableError(BookstoreError):
    """Raised when a book in the cart (or a reordered book) can't be bought."""
    def __init__(self, title: str):
        self.title = title
        super().__init__(f'Book "{title}" is no longer available')


class NotFoundError(BookstoreError):
    """Raised when a requested resource doesn't exist for the caller."""
    status_code = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class InvalidStateTransitionError(BookstoreError):
    """Raised when an order can't move out of its current status."""
    status_code = 409

    def __init__(self, current_status: str):
        self.current_status = current_status
        super().__init__(f"Cannot change order. Current status: {current_status}")


class PersistenceError(BookstoreError):
    """Raised when the storage layer fails underneath a transaction."""
    status_code = 500

    def __init__(self, message: str = "Storage failure"):
        super().__init__(message)
