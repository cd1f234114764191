import os

os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("ENV", "test")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("ALGORITHM", "HS256")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from bookstore.constants.order_status import BookAvailability
from bookstore.database import create_db_and_tables, drop_db_and_tables, engine
from bookstore.dependencies.services import get_notifier
from bookstore.main import app
from bookstore.models import Book, CartItem, User
from bookstore.utils.token import create_user_token

SHIPPING_ADDRESS = {
    "street": "12 Paper Lane",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
    "country": "US",
}


class RecordingNotifier:
    def __init__(self):
        self.customer = []
        self.admin = []

    def notify_customer(self, order):
        self.customer.append(order)

    def notify_admin(self, order):
        self.admin.append(order)


class FailingNotifier(RecordingNotifier):
    def notify_customer(self, order):
        super().notify_customer(order)
        raise RuntimeError("smtp down")

    def notify_admin(self, order):
        super().notify_admin(order)
        raise RuntimeError("smtp down")


@pytest.fixture(autouse=True)
def db():
    create_db_and_tables()
    yield
    drop_db_and_tables()


@pytest.fixture()
def session(db):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def make_user(session):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "first_name": "Reader",
            "last_name": str(counter["n"]),
            "email": f"reader{counter['n']}@example.com",
        }
        data.update(overrides)
        user = User(**data)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


@pytest.fixture()
def make_book(session):
    def _make(title="Dune", price="10.00", availability=BookAvailability.AVAILABLE, **overrides):
        book = Book(
            title=title,
            authors=overrides.pop("authors", ["Frank Herbert"]),
            categories=overrides.pop("categories", ["Science Fiction"]),
            price=Decimal(price) if price is not None else None,
            availability=availability.value,
            **overrides,
        )
        session.add(book)
        session.commit()
        session.refresh(book)
        return book

    return _make


@pytest.fixture()
def add_to_cart(session):
    def _add(user, book, quantity=1):
        item = CartItem(user_id=user.id, book_id=book.id, quantity=quantity)
        session.add(item)
        session.commit()
        session.refresh(item)
        return item

    return _add


@pytest.fixture()
def user(make_user):
    return make_user()


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def client(notifier):
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_user_token(user)}"}

    return _headers
