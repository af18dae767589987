"""Daily tip endpoints."""

from fastapi import APIRouter, Depends, status

from lankanutri.api.dependencies import admin_user, get_container
from lankanutri.api.schemas import TipCreate
from lankanutri.api.serializers import tip_to_dict
from lankanutri.containers import AppContainer
from lankanutri.domain.tips import DailyTip

router = APIRouter(prefix="/api/daily-tips", tags=["daily-tips"])


@router.get("/today")
def today_tip(
    language: str | None = None,
    category: str | None = None,
    container: AppContainer = Depends(get_container),
) -> dict:
    """Return the tip rotated in for today."""
    return tip_to_dict(container.tip_service.tip_of_the_day(category), language)


@router.get("")
def list_tips(
    language: str | None = None,
    category: str | None = None,
    container: AppContainer = Depends(get_container),
) -> list[dict]:
    tips = container.tip_service.list_tips(category)
    return [tip_to_dict(tip, language) for tip in tips]


@router.post(
    "", status_code=status.HTTP_201_CREATED, dependencies=[Depends(admin_user)]
)
def create_tip(
    payload: TipCreate, container: AppContainer = Depends(get_container)
) -> dict:
    tip = container.tip_service.create_tip(
        DailyTip(
            id=None,
            tip=payload.tip.to_domain(),
            category=payload.category,
            date=payload.tip_date or container.tip_service.today(),
            difficulty=payload.difficulty,
            cultural_relevance=payload.cultural_relevance,
            related_foods=payload.related_foods,
            is_active=payload.is_active,
        )
    )
    return tip_to_dict(tip)
