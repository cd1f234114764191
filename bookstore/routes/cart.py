from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from bookstore.database import get_session
from bookstore.models.cart import CartItem
from bookstore.models.user import User
from bookstore.repositories import BookRepository, CartRepository, transaction
from bookstore.routes.books import book_to_dict
from bookstore.schemas.cart_schemas import CartAddRequest, CartUpdateRequest
from bookstore.services.order_service import round_money
from bookstore.utils.token import get_current_user

router = APIRouter()


def cart_item_to_dict(item: CartItem) -> dict:
    return {
        "item_id": item.id,
        "book_id": item.book_id,
        "quantity": item.quantity,
        "book": book_to_dict(item.book) if item.book else None,
    }


# View Cart

@router.get("/")
def get_cart(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    items = CartRepository(session).list_lines(current_user.id)

    total_items = sum(i.quantity for i in items)
    total_price = sum(
        ((i.book.price or Decimal("0")) * i.quantity for i in items),
        Decimal("0"),
    )

    return {
        "items": [cart_item_to_dict(i) for i in items],
        "total_items": total_items,
        "total_price": round_money(total_price),
    }


@router.get("/count")
def get_cart_count(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    items = CartRepository(session).list_lines(current_user.id)
    return {"count": sum(i.quantity for i in items)}


# Add to Cart

@router.post("/add", status_code=status.HTTP_201_CREATED)
def add_to_cart(
    data: CartAddRequest,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    book = BookRepository(session).get(data.book_id)
    if not book:
        raise HTTPException(404, "Book not found")

    if not book.is_available:
        raise HTTPException(400, "Book is not available for purchase")

    carts = CartRepository(session)
    with transaction(session):
        item = carts.add(current_user.id, book, data.quantity)
        item_id = item.id

    return {"message": "Added to cart", "item": cart_item_to_dict(carts.get_line(current_user.id, item_id))}


# Update Cart

@router.put("/update/{item_id}")
def update_cart_item(
    item_id: int,
    data: CartUpdateRequest,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    carts = CartRepository(session)
    item = carts.get_line(current_user.id, item_id)
    if not item:
        raise HTTPException(404, "Cart item not found")

    with transaction(session):
        carts.set_quantity(item, data.quantity)

    return {"message": "Quantity updated", "item": cart_item_to_dict(item)}


# Remove Cart

@router.delete("/remove/{item_id}")
def remove_item(
    item_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    carts = CartRepository(session)
    item = carts.get_line(current_user.id, item_id)
    if not item:
        raise HTTPException(404, "Cart item not found")

    with transaction(session):
        carts.remove(item)

    return {"message": "Item removed from cart"}


# Clear Cart

@router.delete("/clear")
def clear_cart(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user)
):
    with transaction(session):
        removed = CartRepository(session).delete_all(current_user.id)

    return {"message": "Cart cleared", "removed": removed}
