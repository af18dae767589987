"""Shop product catalog service."""

from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from lankanutri.domain.catalog import Product
from lankanutri.errors import NotFoundError
from lankanutri.services.storage import ImageService, ImageUpload

IMAGE_FOLDER = "products"


class ProductRepository(Protocol):
    """Persistence interface for products."""

    def list_products(
        self,
        category: str | None = None,
        search: str | None = None,
        available_only: bool = True,
    ) -> list[Product]:
        """Return products, newest first."""

    def get(self, product_id: UUID) -> Product | None:
        """Return a product by id, if present."""

    def create(self, product: Product) -> Product:
        """Persist a new product."""

    def update(self, product: Product) -> Product:
        """Persist changes to an existing product."""

    def delete(self, product_id: UUID) -> None:
        """Delete a product."""


@dataclass
class ProductService:
    """CRUD operations for shop products."""

    repository: ProductRepository
    images: ImageService

    def list_products(
        self,
        category: str | None = None,
        search: str | None = None,
        include_unavailable: bool = False,
    ) -> list[Product]:
        return self.repository.list_products(
            category=category,
            search=search,
            available_only=not include_unavailable,
        )

    def get_product(self, product_id: UUID) -> Product:
        product = self.repository.get(product_id)
        if product is None:
            raise NotFoundError("Product")
        return product

    def create_product(
        self, product: Product, image: ImageUpload | None = None
    ) -> Product:
        """Create a product, uploading its image first when given."""
        url = self.images.store_optional(image, IMAGE_FOLDER)
        if url:
            product = replace(product, image=url)
        return self.repository.create(product)

    def update_product(
        self,
        product_id: UUID,
        changes: dict[str, object],
        image: ImageUpload | None = None,
    ) -> Product:
        """Apply partial changes; a failed image upload leaves the record as is."""
        current = self.get_product(product_id)
        url = self.images.store_optional(image, IMAGE_FOLDER)
        if url:
            changes = {**changes, "image": url}
        return self.repository.update(replace(current, **changes))

    def delete_product(self, product_id: UUID) -> None:
        self.get_product(product_id)
        self.repository.delete(product_id)
