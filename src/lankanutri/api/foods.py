"""Traditional food catalog endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from lankanutri.api.dependencies import admin_user, get_container
from lankanutri.api.schemas import FoodCreate
from lankanutri.api.serializers import food_to_dict
from lankanutri.containers import AppContainer
from lankanutri.domain.foods import TraditionalFood

router = APIRouter(prefix="/api/traditional-foods", tags=["traditional-foods"])


@router.get("")
def list_foods(
    category: str | None = None,
    food_type: str | None = Query(default=None, alias="type"),
    language: str | None = None,
    container: AppContainer = Depends(get_container),
) -> list[dict]:
    """Return foods, common ones first."""
    foods = container.food_service.list_foods(category=category, food_type=food_type)
    return [food_to_dict(food, language) for food in foods]


@router.get("/{food_id}")
def get_food(
    food_id: UUID,
    language: str | None = None,
    container: AppContainer = Depends(get_container),
) -> dict:
    return food_to_dict(container.food_service.get_food(food_id), language)


@router.post(
    "", status_code=status.HTTP_201_CREATED, dependencies=[Depends(admin_user)]
)
def create_food(
    payload: FoodCreate, container: AppContainer = Depends(get_container)
) -> dict:
    food = container.food_service.create_food(
        TraditionalFood(
            id=None,
            name=payload.name.to_domain(),
            description=payload.description.to_domain(),
            type=payload.type,
            category=payload.category,
            nutrition=payload.nutrition.to_facts(),
            serving_size=payload.serving_size.to_domain(),
            traditional_uses=payload.traditional_uses,
            health_benefits=payload.health_benefits,
            preparation_methods=payload.preparation_methods,
            image=payload.image,
            is_common=payload.is_common,
            is_affordable=payload.is_affordable,
        )
    )
    return food_to_dict(food)
