from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from bookstore.constants.order_status import OrderStatus
from bookstore.models.order import Order
from bookstore.models.user import User
from bookstore.schemas.orders_schemas import CreateOrderRequest, ReorderRequest
from bookstore.dependencies.services import get_order_service
from bookstore.services.order_service import OrderService
from bookstore.utils.token import get_current_user

router = APIRouter()


def order_to_dict(order: Order) -> dict:
    return {
        "id": order.id,
        "status": order.status,
        "total_amount": order.total_amount,
        "shipping_address": order.shipping_address,
        "payment_method": order.payment_method,
        "customer_email": order.customer_email,
        "customer_phone": order.customer_phone,
        "notes": order.notes,
        "tracking_number": order.tracking_number,
        "created_at": order.created_at,
        "items": [
            {
                "book_id": i.book_id,
                "title": i.book.title if i.book else None,
                "quantity": i.quantity,
                "price": i.price,
                "total": i.line_total,
            }
            for i in order.items
        ],
    }


def order_summary(order: Order) -> dict:
    return {
        "id": order.id,
        "status": order.status,
        "total_amount": order.total_amount,
        "created_at": order.created_at,
    }


@router.post("/create", status_code=status.HTTP_201_CREATED)
def create_order(
    data: CreateOrderRequest,
    service: OrderService = Depends(get_order_service),
    current_user: User = Depends(get_current_user)
):
    order = service.create_order(
        owner_id=current_user.id,
        shipping_address=data.shipping_address.model_dump(),
        payment_method=data.payment_method,
        customer_email=data.customer_email,
        customer_phone=data.customer_phone,
        notes=data.notes,
    )

    return {"message": "Order created successfully", "data": order_to_dict(order)}


@router.get("/")
def list_my_orders(
    page: int = 1,
    limit: int = 10,
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    service: OrderService = Depends(get_order_service),
    current_user: User = Depends(get_current_user)
):
    data = service.list_orders(
        current_user.id,
        page=page,
        limit=limit,
        status=status_filter.value if status_filter else None,
    )
    data["results"] = [order_summary(o) for o in data["results"]]
    return data


@router.get("/{order_id}")
def get_order(
    order_id: int,
    service: OrderService = Depends(get_order_service),
    current_user: User = Depends(get_current_user)
):
    return order_to_dict(service.get_order(current_user.id, order_id))


@router.post("/{order_id}/cancel")
def cancel_order(
    order_id: int,
    service: OrderService = Depends(get_order_service),
    current_user: User = Depends(get_current_user)
):
    order = service.cancel_order(current_user.id, order_id)
    return {"message": "Order cancelled", "data": order_to_dict(order)}


@router.post("/{order_id}/reorder", status_code=status.HTTP_201_CREATED)
def reorder(
    order_id: int,
    data: ReorderRequest,
    service: OrderService = Depends(get_order_service),
    current_user: User = Depends(get_current_user)
):
    order = service.reorder(
        owner_id=current_user.id,
        original_order_id=order_id,
        shipping_address=data.shipping_address.model_dump(),
        payment_method=data.payment_method,
        notes=data.notes,
    )
    return {"message": "Order placed again", "data": order_to_dict(order)}
