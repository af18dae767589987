"""Order placement and fulfilment service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from lankanutri.domain.catalog import Order, OrderItem, ShippingAddress
from lankanutri.domain.users import UserProfile
from lankanutri.errors import NotFoundError, PermissionDeniedError, ValidationError
from lankanutri.services.products import ProductRepository

_logger = logging.getLogger(__name__)


class OrderRepository(Protocol):
    """Persistence interface for orders."""

    def create(self, order: Order) -> Order:
        """Persist a new order."""

    def get(self, order_id: UUID) -> Order | None:
        """Return an order by id, if present."""

    def list_orders(self, user_id: UUID | None = None) -> list[Order]:
        """Return orders, newest first, optionally for one user."""

    def update(self, order: Order) -> Order:
        """Persist order status changes."""


@dataclass(frozen=True)
class OrderLine:
    """Requested product and quantity."""

    product_id: UUID
    quantity: int


@dataclass
class OrderService:
    """Place orders priced from the catalog and track their status."""

    repository: OrderRepository
    product_repository: ProductRepository
    shipping_price: float = 200.0

    def place_order(
        self,
        user: UserProfile,
        lines: list[OrderLine],
        shipping_address: ShippingAddress,
        payment_method: str = "cash",
    ) -> Order:
        """Create an order using current catalog prices."""
        if not lines:
            raise ValidationError("No order items", field="orderItems")
        items = []
        for line in lines:
            product = self.product_repository.get(line.product_id)
            if product is None or not product.is_available:
                raise NotFoundError("Product")
            if line.quantity > product.stock:
                raise ValidationError(
                    f"Only {product.stock} of {product.name} in stock",
                    field="orderItems",
                )
            items.append(
                OrderItem(
                    product_id=line.product_id,
                    name=product.name,
                    quantity=line.quantity,
                    price=product.price,
                    image=product.image,
                )
            )
        items_price = round(sum(item.price * item.quantity for item in items), 2)
        order = self.repository.create(
            Order(
                id=None,
                user_id=user.id,
                items=items,
                shipping_address=shipping_address,
                payment_method=payment_method,
                items_price=items_price,
                shipping_price=self.shipping_price,
                total_price=round(items_price + self.shipping_price, 2),
            )
        )
        _logger.info("Order placed: order=%s user=%s", order.id, user.id)
        return order

    def get_order(self, order_id: UUID, actor: UserProfile) -> Order:
        """Return an order visible to its owner or an admin."""
        order = self.repository.get(order_id)
        if order is None:
            raise NotFoundError("Order")
        if order.user_id != actor.id and not actor.is_admin:
            raise PermissionDeniedError("Not authorized to view this order")
        return order

    def list_for_user(self, user_id: UUID) -> list[Order]:
        return self.repository.list_orders(user_id=user_id)

    def list_all(self) -> list[Order]:
        return self.repository.list_orders()

    def update_status(
        self,
        order_id: UUID,
        is_paid: bool | None = None,
        is_delivered: bool | None = None,
    ) -> Order:
        """Mark an order paid or delivered, stamping the transition time."""
        order = self.repository.get(order_id)
        if order is None:
            raise NotFoundError("Order")
        now = datetime.now(tz=UTC)
        if is_paid is not None:
            paid_at = (order.paid_at or now) if is_paid else None
            order = replace(order, is_paid=is_paid, paid_at=paid_at)
        if is_delivered is not None:
            order = replace(
                order,
                is_delivered=is_delivered,
                delivered_at=(order.delivered_at or now) if is_delivered else None,
            )
        return self.repository.update(order)
