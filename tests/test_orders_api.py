"""Integration tests for the /orders endpoints."""

from sqlmodel import select

from bookstore.constants.order_status import BookAvailability, OrderStatus
from bookstore.models import CartItem, Order

from tests.conftest import SHIPPING_ADDRESS


def order_payload(**overrides):
    payload = {
        "shipping_address": dict(SHIPPING_ADDRESS),
        "payment_method": "card",
        "customer_email": "reader@example.com",
        "customer_phone": "+1 555 123 4567",
        "notes": "Gift wrap please",
    }
    payload.update(overrides)
    return payload


class TestCreateOrderEndpoint:
    def test_create_order(self, client, session, notifier, user, make_book, add_to_cart, auth_headers):
        add_to_cart(user, make_book(title="Book A", price="12.50"), 2)
        add_to_cart(user, make_book(title="Book B", price="7.25"), 1)

        response = client.post("/orders/create", json=order_payload(), headers=auth_headers(user))

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["total_amount"] == 32.25
        assert data["status"] == "pending"
        assert {i["title"] for i in data["items"]} == {"Book A", "Book B"}
        assert data["shipping_address"] == SHIPPING_ADDRESS

        session.expire_all()
        assert session.exec(select(CartItem).where(CartItem.user_id == user.id)).all() == []
        assert [o.id for o in notifier.customer] == [data["id"]]
        assert [o.id for o in notifier.admin] == [data["id"]]

    def test_empty_cart(self, client, user, auth_headers):
        response = client.post("/orders/create", json=order_payload(), headers=auth_headers(user))

        assert response.status_code == 400
        assert response.json()["detail"] == "Cart is empty"

    def test_unavailable_book(self, client, session, notifier, user, make_book, add_to_cart, auth_headers):
        add_to_cart(user, make_book(title="Book A"))
        add_to_cart(user, make_book(title="Book C", availability=BookAvailability.OUT_OF_STOCK))

        response = client.post("/orders/create", json=order_payload(), headers=auth_headers(user))

        assert response.status_code == 400
        assert "Book C" in response.json()["detail"]
        session.expire_all()
        assert len(session.exec(select(CartItem)).all()) == 2
        assert session.exec(select(Order)).all() == []
        assert notifier.customer == []

    def test_invalid_email(self, client, user, auth_headers):
        response = client.post(
            "/orders/create",
            json=order_payload(customer_email="not-an-email"),
            headers=auth_headers(user),
        )
        assert response.status_code == 422

    def test_email_with_empty_domain_label(self, client, user, make_book, add_to_cart, auth_headers):
        add_to_cart(user, make_book())

        response = client.post(
            "/orders/create",
            json=order_payload(customer_email="a@b..c"),
            headers=auth_headers(user),
        )

        assert response.status_code == 422
        assert client.get("/cart/count", headers=auth_headers(user)).json()["count"] == 1

    def test_short_phone(self, client, user, auth_headers):
        response = client.post(
            "/orders/create",
            json=order_payload(customer_phone="12345"),
            headers=auth_headers(user),
        )
        assert response.status_code == 422

    def test_blank_address_field(self, client, user, auth_headers):
        address = dict(SHIPPING_ADDRESS, city="   ")
        response = client.post(
            "/orders/create",
            json=order_payload(shipping_address=address),
            headers=auth_headers(user),
        )
        assert response.status_code == 422

    def test_requires_authentication(self, client):
        response = client.post("/orders/create", json=order_payload())
        assert response.status_code == 401


class TestReadOrders:
    def _place(self, client, user, book, add_to_cart, auth_headers):
        add_to_cart(user, book)
        response = client.post("/orders/create", json=order_payload(), headers=auth_headers(user))
        return response.json()["data"]["id"]

    def test_list_and_detail(self, client, user, make_book, add_to_cart, auth_headers):
        book = make_book()
        first = self._place(client, user, book, add_to_cart, auth_headers)
        second = self._place(client, user, book, add_to_cart, auth_headers)

        listing = client.get("/orders/", headers=auth_headers(user)).json()
        assert listing["total_items"] == 2
        assert [o["id"] for o in listing["results"]] == [second, first]

        detail = client.get(f"/orders/{first}", headers=auth_headers(user))
        assert detail.status_code == 200
        assert detail.json()["items"][0]["quantity"] == 1

    def test_filter_by_status(self, client, user, make_book, add_to_cart, auth_headers):
        book = make_book()
        first = self._place(client, user, book, add_to_cart, auth_headers)
        self._place(client, user, book, add_to_cart, auth_headers)
        client.post(f"/orders/{first}/cancel", headers=auth_headers(user))

        listing = client.get("/orders/?status=cancelled", headers=auth_headers(user)).json()

        assert [o["id"] for o in listing["results"]] == [first]

    def test_other_users_order_is_hidden(self, client, make_user, make_book, add_to_cart, auth_headers):
        owner, stranger = make_user(), make_user()
        order_id = self._place(client, owner, make_book(), add_to_cart, auth_headers)

        response = client.get(f"/orders/{order_id}", headers=auth_headers(stranger))

        assert response.status_code == 404


class TestCancelEndpoint:
    def test_cancel_then_cancel_again(self, client, user, make_book, add_to_cart, auth_headers):
        add_to_cart(user, make_book())
        order_id = client.post(
            "/orders/create", json=order_payload(), headers=auth_headers(user)
        ).json()["data"]["id"]

        first = client.post(f"/orders/{order_id}/cancel", headers=auth_headers(user))
        second = client.post(f"/orders/{order_id}/cancel", headers=auth_headers(user))

        assert first.status_code == 200
        assert first.json()["data"]["status"] == "cancelled"
        assert second.status_code == 409
        assert "cancelled" in second.json()["detail"]

    def test_shipped_order_conflict(self, client, session, user, make_book, add_to_cart, auth_headers):
        add_to_cart(user, make_book())
        order_id = client.post(
            "/orders/create", json=order_payload(), headers=auth_headers(user)
        ).json()["data"]["id"]
        order = session.get(Order, order_id)
        order.status = OrderStatus.SHIPPED.value
        session.add(order)
        session.commit()

        response = client.post(f"/orders/{order_id}/cancel", headers=auth_headers(user))

        assert response.status_code == 409
        session.expire_all()
        assert session.get(Order, order_id).status == "shipped"

    def test_unknown_order(self, client, user, auth_headers):
        response = client.post("/orders/999/cancel", headers=auth_headers(user))
        assert response.status_code == 404


class TestReorderEndpoint:
    def test_reorder_reprices(self, client, session, notifier, user, make_book, add_to_cart, auth_headers):
        book = make_book(price="10.00")
        add_to_cart(user, book)
        order_id = client.post(
            "/orders/create", json=order_payload(), headers=auth_headers(user)
        ).json()["data"]["id"]

        book.price = 15
        session.add(book)
        session.commit()

        response = client.post(
            f"/orders/{order_id}/reorder",
            json={"shipping_address": SHIPPING_ADDRESS, "payment_method": "cash"},
            headers=auth_headers(user),
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["id"] != order_id
        assert data["items"][0]["price"] == 15
        assert data["total_amount"] == 15
        assert len(notifier.customer) == 1
