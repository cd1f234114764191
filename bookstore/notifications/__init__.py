from .notifier import EmailNotifier, LoggingNotifier, Notifier
from .dispatcher import send_order_notifications

__all__ = [
    "Notifier",
    "EmailNotifier",
    "LoggingNotifier",
    "send_order_notifications",
]
