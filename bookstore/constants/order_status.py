from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class BookAvailability(str, Enum):
    AVAILABLE = "available"
    OUT_OF_STOCK = "out_of_stock"
    PRE_ORDER = "pre_order"


# forward only; fulfillment drives everything except pending -> cancelled
ALLOWED_TRANSITIONS = {
    "pending": ["confirmed", "shipped", "delivered", "cancelled"],
    "confirmed": ["shipped", "delivered"],
    "shipped": ["delivered"],
    "delivered": [],
    "cancelled": []
}


def can_transition(current: str, new: str) -> bool:
    return new in ALLOWED_TRANSITIONS.get(current, [])
