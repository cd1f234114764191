import logging

from bookstore.models.order import Order
from bookstore.notifications.notifier import Notifier

logger = logging.getLogger(__name__)


def send_order_notifications(notifier: Notifier, order: Order) -> None:
    """
    Customer confirmation then admin notice for a committed order.

    Never raises: the order already exists, so a mail failure is only logged.
    """
    try:
        notifier.notify_customer(order)
    except Exception:
        logger.exception(f"Customer notification failed for order {order.id}")

    try:
        notifier.notify_admin(order)
    except Exception:
        logger.exception(f"Admin notification failed for order {order.id}")

    logger.info(f"Order notifications processed for order {order.id}")
