"""AI diet planner endpoints."""

from fastapi import APIRouter, Depends

from lankanutri.api.dependencies import current_user, get_container
from lankanutri.api.schemas import DietPlanRequest
from lankanutri.api.serializers import diet_plan_to_dict
from lankanutri.containers import AppContainer
from lankanutri.domain.users import UserProfile

router = APIRouter(prefix="/api/diet", tags=["diet"])


@router.post("/plan")
async def generate_plan(
    payload: DietPlanRequest,
    user: UserProfile = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, str | None]:
    """Generate and store a personalised diet plan."""
    record = await container.diet_plan_service.generate(user.id, payload.to_profile())
    return {
        "planId": str(record.id) if record.id else None,
        "planText": record.plan_text,
    }


@router.get("/my-plans")
def my_plans(
    user: UserProfile = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> list[dict]:
    records = container.diet_plan_service.list_for_user(user.id)
    return [diet_plan_to_dict(record) for record in records]
