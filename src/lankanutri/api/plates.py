"""Sri Lankan plate endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from lankanutri.api.dependencies import admin_user, get_container
from lankanutri.api.schemas import PlateCreate
from lankanutri.api.serializers import plate_to_dict
from lankanutri.containers import AppContainer
from lankanutri.domain.nutrition import NutritionTotals
from lankanutri.domain.plates import Plate, PlateItem, Substitution
from lankanutri.errors import ValidationError
from lankanutri.services.plates import parse_goal

router = APIRouter(prefix="/api/sri-lankan-plates", tags=["sri-lankan-plates"])


@router.get("")
def list_plates(
    goal: str | None = None,
    busy_life: bool = Query(default=False, alias="busyLife"),
    language: str | None = None,
    container: AppContainer = Depends(get_container),
) -> list[dict]:
    plates = container.plate_service.list_plates(
        goal=parse_goal(goal) if goal else None, busy_life_only=busy_life
    )
    return [plate_to_dict(plate, language) for plate in plates]


@router.get("/generate")
def generate_plate(
    goal: str | None = None,
    calories: int | None = None,
    language: str | None = None,
    container: AppContainer = Depends(get_container),
) -> dict:
    """Return a stored plate for the goal or generate a new one."""
    if calories is not None and calories <= 0:
        raise ValidationError("calories must be positive", field="calories")
    plate = container.plate_service.generate(parse_goal(goal), calories)
    return plate_to_dict(plate, language)


@router.get("/{plate_id}")
def get_plate(
    plate_id: UUID,
    language: str | None = None,
    container: AppContainer = Depends(get_container),
) -> dict:
    return plate_to_dict(container.plate_service.get_plate(plate_id), language)


@router.post(
    "", status_code=status.HTTP_201_CREATED, dependencies=[Depends(admin_user)]
)
def create_plate(
    payload: PlateCreate, container: AppContainer = Depends(get_container)
) -> dict:
    """Store a curated plate; totals are recomputed from its items."""
    plate = container.plate_service.create_plate(
        Plate(
            id=None,
            name=payload.name.to_domain(),
            description=payload.description.to_domain(),
            goal=parse_goal(payload.goal),
            items=[
                PlateItem(
                    food_id=item.food_id,
                    name=item.name,
                    portion=item.portion,
                    nutrition=item.nutrition.to_totals(),
                )
                for item in payload.items
            ],
            total_nutrition=NutritionTotals(),
            substitutions=[
                Substitution(
                    original=sub.original, substitute=sub.substitute, reason=sub.reason
                )
                for sub in payload.substitutions
            ],
            is_busy_life_friendly=payload.is_busy_life_friendly,
            prep_time=payload.prep_time,
            image=payload.image,
        )
    )
    return plate_to_dict(plate)
