import logging
from typing import Protocol

from bookstore.config import settings
from bookstore.models.order import Order
from bookstore.services.email_service import send_email
from bookstore.utils.template import render_template, short_order_ref

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify_customer(self, order: Order) -> None: ...

    def notify_admin(self, order: Order) -> None: ...


class EmailNotifier:
    """Order emails rendered with Jinja2 and delivered through Brevo."""

    customer_template = "user_emails/order_confirmation.html"
    admin_template = "admin_emails/new_order.html"

    def __init__(self, admin_emails=None, send=send_email):
        self.admin_emails = admin_emails if admin_emails is not None else settings.admin_emails
        self.send = send

    def notify_customer(self, order: Order) -> None:
        html = render_template(
            self.customer_template,
            order=order,
            store_name=settings.store_name,
        )
        self.send(
            to=order.customer_email,
            subject=f"Order Confirmation - {short_order_ref(order.id)}",
            html=html,
        )

    def notify_admin(self, order: Order) -> None:
        if not self.admin_emails:
            logger.warning(f"No admin emails configured, order {order.id} not announced")
            return

        html = render_template(
            self.admin_template,
            order=order,
            admin_url=settings.admin_url,
        )
        self.send(
            to=self.admin_emails,
            subject=f"New Order Received - {short_order_ref(order.id)}",
            html=html,
        )


class LoggingNotifier:
    """Stand-in when no mail provider is configured."""

    def notify_customer(self, order: Order) -> None:
        logger.info(
            f"Order confirmation for {order.customer_email}: "
            f"order {order.id}, total {order.total_amount}, items {len(order.items)}"
        )

    def notify_admin(self, order: Order) -> None:
        logger.info(
            f"New order {order.id} from {order.customer_email} {order.customer_phone}"
        )
