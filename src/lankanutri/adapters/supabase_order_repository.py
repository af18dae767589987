"""Supabase repository for orders."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from lankanutri.adapters.supabase_rows import first_row, parse_timestamp, parse_uuid
from lankanutri.domain.catalog import Order, OrderItem, ShippingAddress
from lankanutri.services.orders import OrderRepository

TABLE = "orders"


@dataclass
class SupabaseOrderRepository(OrderRepository):
    """Supabase implementation for orders."""

    client: Client

    def create(self, order: Order) -> Order:
        payload = {
            "user_id": str(order.user_id),
            "order_items": [
                {
                    "product_id": str(item.product_id),
                    "name": item.name,
                    "quantity": item.quantity,
                    "price": item.price,
                    "image": item.image,
                }
                for item in order.items
            ],
            "shipping_address": {
                "address": order.shipping_address.address,
                "city": order.shipping_address.city,
                "postal_code": order.shipping_address.postal_code,
                "country": order.shipping_address.country,
            },
            "payment_method": order.payment_method,
            "items_price": order.items_price,
            "shipping_price": order.shipping_price,
            "total_price": order.total_price,
            "is_paid": order.is_paid,
            "is_delivered": order.is_delivered,
        }
        response = self.client.table(TABLE).insert(payload).execute()
        return _parse_order(first_row(response.data, "create order"))

    def get(self, order_id: UUID) -> Order | None:
        response = (
            self.client.table(TABLE)
            .select("*")
            .eq("id", str(order_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_order(response.data[0])

    def list_orders(self, user_id: UUID | None = None) -> list[Order]:
        query = self.client.table(TABLE).select("*")
        if user_id is not None:
            query = query.eq("user_id", str(user_id))
        response = query.order("created_at", desc=True).execute()
        return [_parse_order(row) for row in response.data or []]

    def update(self, order: Order) -> Order:
        payload = {
            "is_paid": order.is_paid,
            "paid_at": order.paid_at.isoformat() if order.paid_at else None,
            "is_delivered": order.is_delivered,
            "delivered_at": (
                order.delivered_at.isoformat() if order.delivered_at else None
            ),
        }
        response = (
            self.client.table(TABLE).update(payload).eq("id", str(order.id)).execute()
        )
        return _parse_order(first_row(response.data, "update order"))


def _parse_order(row: dict[str, object]) -> Order:
    address = row.get("shipping_address") or {}
    return Order(
        id=parse_uuid(row.get("id")),
        user_id=UUID(str(row["user_id"])),
        items=[
            OrderItem(
                product_id=UUID(str(item["product_id"])),
                name=str(item.get("name") or ""),
                quantity=int(item.get("quantity") or 0),
                price=float(item.get("price") or 0.0),
                image=str(item.get("image") or ""),
            )
            for item in row.get("order_items") or []
        ],
        shipping_address=ShippingAddress(
            address=str(address.get("address") or ""),
            city=str(address.get("city") or ""),
            postal_code=str(address.get("postal_code") or ""),
            country=str(address.get("country") or "Sri Lanka"),
        ),
        payment_method=str(row.get("payment_method") or "cash"),
        items_price=float(row.get("items_price") or 0.0),
        shipping_price=float(row.get("shipping_price") or 0.0),
        total_price=float(row.get("total_price") or 0.0),
        is_paid=bool(row.get("is_paid", False)),
        paid_at=parse_timestamp(row.get("paid_at")),
        is_delivered=bool(row.get("is_delivered", False)),
        delivered_at=parse_timestamp(row.get("delivered_at")),
        created_at=parse_timestamp(row.get("created_at")),
    )
