"""Supabase repository for shop products."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from lankanutri.adapters.supabase_rows import first_row, parse_timestamp, parse_uuid
from lankanutri.domain.catalog import Product
from lankanutri.domain.nutrition import NutritionTotals
from lankanutri.services.products import ProductRepository

TABLE = "products"


@dataclass
class SupabaseProductRepository(ProductRepository):
    """Supabase implementation for products."""

    client: Client

    def list_products(
        self,
        category: str | None = None,
        search: str | None = None,
        available_only: bool = True,
    ) -> list[Product]:
        query = self.client.table(TABLE).select("*")
        if category:
            query = query.eq("category", category)
        if search:
            query = query.ilike("name", f"%{search}%")
        if available_only:
            query = query.eq("is_available", True)
        response = query.order("created_at", desc=True).execute()
        return [_parse_product(row) for row in response.data or []]

    def get(self, product_id: UUID) -> Product | None:
        response = (
            self.client.table(TABLE)
            .select("*")
            .eq("id", str(product_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_product(response.data[0])

    def create(self, product: Product) -> Product:
        response = self.client.table(TABLE).insert(_product_row(product)).execute()
        return _parse_product(first_row(response.data, "create product"))

    def update(self, product: Product) -> Product:
        response = (
            self.client.table(TABLE)
            .update(_product_row(product))
            .eq("id", str(product.id))
            .execute()
        )
        return _parse_product(first_row(response.data, "update product"))

    def delete(self, product_id: UUID) -> None:
        self.client.table(TABLE).delete().eq("id", str(product_id)).execute()


def _product_row(product: Product) -> dict[str, object]:
    return {
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "category": product.category,
        "stock": product.stock,
        "image": product.image,
        "is_available": product.is_available,
        "nutrition": product.nutrition.as_dict(),
    }


def _parse_product(row: dict[str, object]) -> Product:
    return Product(
        id=parse_uuid(row.get("id")),
        name=str(row.get("name") or ""),
        description=str(row.get("description") or ""),
        price=float(row.get("price") or 0.0),
        category=str(row.get("category") or ""),
        stock=int(row.get("stock") or 0),
        image=str(row.get("image") or ""),
        is_available=bool(row.get("is_available", True)),
        nutrition=NutritionTotals.from_mapping(row.get("nutrition")),
        created_at=parse_timestamp(row.get("created_at")),
    )
