"""Order placement and fulfilment endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from lankanutri.api.dependencies import admin_user, current_user, get_container
from lankanutri.api.schemas import OrderCreate, OrderStatusUpdate
from lankanutri.api.serializers import order_to_dict
from lankanutri.containers import AppContainer
from lankanutri.domain.catalog import ShippingAddress
from lankanutri.domain.users import UserProfile
from lankanutri.services.orders import OrderLine

router = APIRouter(prefix="/api/orders", tags=["orders"])
admin_router = APIRouter(prefix="/api/admin/orders", tags=["admin"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    user: UserProfile = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict:
    """Place an order priced from the current catalog."""
    address = payload.shipping_address
    order = container.order_service.place_order(
        user,
        [
            OrderLine(product_id=item.product_id, quantity=item.quantity)
            for item in payload.order_items
        ],
        ShippingAddress(
            address=address.address,
            city=address.city,
            postal_code=address.postal_code,
            country=address.country,
        ),
        payment_method=payload.payment_method,
    )
    return order_to_dict(order)


@router.get("/mine")
def my_orders(
    user: UserProfile = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> list[dict]:
    return [order_to_dict(o) for o in container.order_service.list_for_user(user.id)]


@router.get("/{order_id}")
def get_order(
    order_id: UUID,
    user: UserProfile = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict:
    return order_to_dict(container.order_service.get_order(order_id, user))


@admin_router.get("", dependencies=[Depends(admin_user)])
def list_orders(container: AppContainer = Depends(get_container)) -> list[dict]:
    return [order_to_dict(order) for order in container.order_service.list_all()]


@admin_router.put("/{order_id}", dependencies=[Depends(admin_user)])
def update_order_status(
    order_id: UUID,
    payload: OrderStatusUpdate,
    container: AppContainer = Depends(get_container),
) -> dict:
    """Mark an order paid and/or delivered."""
    order = container.order_service.update_status(
        order_id, is_paid=payload.is_paid, is_delivered=payload.is_delivered
    )
    return order_to_dict(order)
