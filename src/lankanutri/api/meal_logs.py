"""Meal logging endpoints."""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from lankanutri.api.dependencies import current_user, get_container, read_image
from lankanutri.api.schemas import ManualItemIn, RecognizedItemIn, parse_json_form
from lankanutri.api.serializers import meal_log_to_dict, meal_stats_to_dict
from lankanutri.containers import AppContainer
from lankanutri.domain.meals import ManualItem, RecognizedItem
from lankanutri.domain.users import UserProfile
from lankanutri.services.meal_logs import DEFAULT_LIST_LIMIT

router = APIRouter(prefix="/api/meal-logs", tags=["meal-logs"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_meal_log(  # noqa: PLR0913
    meal_type: str = Form(alias="mealType"),
    recognized_items: str | None = Form(default=None, alias="recognizedItems"),
    manual_items: str | None = Form(default=None, alias="manualItems"),
    notes: str = Form(default=""),
    image: UploadFile | None = File(default=None),
    user: UserProfile = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict:
    """Log a meal; totals are computed from known traditional foods."""
    recognized = (
        parse_json_form(recognized_items, list[RecognizedItemIn], "recognizedItems")
        or []
    )
    manual = parse_json_form(manual_items, list[ManualItemIn], "manualItems") or []
    meal_log = container.meal_log_service.log_meal(
        user.id,
        meal_type,
        [
            RecognizedItem(
                name=item.name,
                confidence=item.confidence,
                estimated_portion=item.estimated_portion,
            )
            for item in recognized
        ],
        [
            ManualItem(
                name=item.name,
                portion=item.portion,
                calories=item.calories,
                food_id=item.food_id,
            )
            for item in manual
        ],
        notes=notes,
        image=await read_image(image, container.image_service),
    )
    return meal_log_to_dict(meal_log)


@router.get("")
def list_meal_logs(
    meal_type: str | None = Query(default=None, alias="mealType"),
    limit: int = DEFAULT_LIST_LIMIT,
    user: UserProfile = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> list[dict]:
    meal_logs = container.meal_log_service.list_for_user(
        user.id, meal_type=meal_type, limit=limit
    )
    return [meal_log_to_dict(meal_log) for meal_log in meal_logs]


@router.get("/stats")
def meal_log_stats(
    days: int = 7,
    user: UserProfile = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict:
    """Return per-day totals for the last ``days`` days."""
    return meal_stats_to_dict(container.meal_log_service.stats(user.id, days=days))
