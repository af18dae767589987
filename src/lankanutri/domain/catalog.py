"""Domain models for the shop catalog and orders."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from lankanutri.domain.nutrition import NutritionTotals


@dataclass(frozen=True)
class Product:
    """A product sold in the shop with nutrition per 100 g."""

    id: UUID | None
    name: str
    price: float
    category: str
    stock: int = 0
    description: str = ""
    image: str = ""
    is_available: bool = True
    nutrition: NutritionTotals = field(default_factory=NutritionTotals)
    created_at: datetime | None = None


@dataclass(frozen=True)
class OrderItem:
    """A product line within an order."""

    product_id: UUID
    name: str
    quantity: int
    price: float
    image: str = ""


@dataclass(frozen=True)
class ShippingAddress:
    """Delivery address for an order."""

    address: str
    city: str
    postal_code: str = ""
    country: str = "Sri Lanka"


@dataclass(frozen=True)
class Order:
    """A customer order and its fulfilment status."""

    id: UUID | None
    user_id: UUID
    items: list[OrderItem]
    shipping_address: ShippingAddress
    payment_method: str
    items_price: float
    shipping_price: float
    total_price: float
    is_paid: bool = False
    paid_at: datetime | None = None
    is_delivered: bool = False
    delivered_at: datetime | None = None
    created_at: datetime | None = None
