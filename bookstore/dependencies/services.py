from fastapi import BackgroundTasks, Depends
from sqlmodel import Session

from bookstore.config import settings
from bookstore.database import get_session
from bookstore.notifications import EmailNotifier, LoggingNotifier, Notifier
from bookstore.services.order_service import OrderService


def get_notifier() -> Notifier:
    if settings.brevo_api_key:
        return EmailNotifier()
    return LoggingNotifier()


def get_order_service(
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier),
) -> OrderService:
    # emails run after the response is sent
    return OrderService(session, notifier=notifier, dispatch=background_tasks.add_task)
