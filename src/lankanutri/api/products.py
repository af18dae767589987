"""Shop product endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from lankanutri.api.dependencies import admin_user, get_container, read_image
from lankanutri.api.schemas import NutritionIn, parse_json_form
from lankanutri.api.serializers import product_to_dict
from lankanutri.containers import AppContainer
from lankanutri.domain.catalog import Product
from lankanutri.domain.nutrition import NutritionTotals

router = APIRouter(prefix="/api/products", tags=["products"])
admin_router = APIRouter(prefix="/api/admin/products", tags=["admin"])


@router.get("")
def list_products(
    category: str | None = None,
    search: str | None = None,
    container: AppContainer = Depends(get_container),
) -> list[dict]:
    """Return available products matching the filters."""
    products = container.product_service.list_products(
        category=category, search=search
    )
    return [product_to_dict(product) for product in products]


@router.get("/{product_id}")
def get_product(
    product_id: UUID, container: AppContainer = Depends(get_container)
) -> dict:
    return product_to_dict(container.product_service.get_product(product_id))


@router.post(
    "", status_code=status.HTTP_201_CREATED, dependencies=[Depends(admin_user)]
)
async def create_product(  # noqa: PLR0913
    name: str = Form(min_length=1),
    price: float = Form(ge=0),
    category: str = Form(min_length=1),
    stock: int = Form(default=0, ge=0),
    description: str = Form(default=""),
    is_available: bool = Form(default=True, alias="isAvailable"),
    nutrition: str | None = Form(default=None),
    image: UploadFile | None = File(default=None),
    container: AppContainer = Depends(get_container),
) -> dict:
    nutrition_in = parse_json_form(nutrition, NutritionIn, "nutrition")
    product = container.product_service.create_product(
        Product(
            id=None,
            name=name,
            price=price,
            category=category,
            stock=stock,
            description=description,
            is_available=is_available,
            nutrition=nutrition_in.to_totals() if nutrition_in else NutritionTotals(),
        ),
        image=await read_image(image, container.image_service),
    )
    return product_to_dict(product)


@router.put("/{product_id}", dependencies=[Depends(admin_user)])
async def update_product(  # noqa: PLR0913
    product_id: UUID,
    name: str | None = Form(default=None),
    price: float | None = Form(default=None, ge=0),
    category: str | None = Form(default=None),
    stock: int | None = Form(default=None, ge=0),
    description: str | None = Form(default=None),
    is_available: bool | None = Form(default=None, alias="isAvailable"),
    nutrition: str | None = Form(default=None),
    image: UploadFile | None = File(default=None),
    container: AppContainer = Depends(get_container),
) -> dict:
    """Apply the submitted fields to a product."""
    nutrition_in = parse_json_form(nutrition, NutritionIn, "nutrition")
    changes = {
        key: value
        for key, value in {
            "name": name,
            "price": price,
            "category": category,
            "stock": stock,
            "description": description,
            "is_available": is_available,
            "nutrition": nutrition_in.to_totals() if nutrition_in else None,
        }.items()
        if value is not None
    }
    product = container.product_service.update_product(
        product_id, changes, image=await read_image(image, container.image_service)
    )
    return product_to_dict(product)


@router.delete("/{product_id}", dependencies=[Depends(admin_user)])
def delete_product(
    product_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, str]:
    container.product_service.delete_product(product_id)
    return {"message": "Product removed"}


@admin_router.get("", dependencies=[Depends(admin_user)])
def list_all_products(container: AppContainer = Depends(get_container)) -> list[dict]:
    """Return every product, including unavailable ones."""
    products = container.product_service.list_products(include_unavailable=True)
    return [product_to_dict(product) for product in products]
