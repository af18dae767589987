"""Nutrition calculator endpoint."""

from fastapi import APIRouter, Depends

from lankanutri.api.dependencies import get_container
from lankanutri.api.schemas import CalculateRequest
from lankanutri.containers import AppContainer
from lankanutri.services.nutrition import CalculatorItem

router = APIRouter(prefix="/api/nutrition", tags=["nutrition"])


@router.post("/calculate")
def calculate(
    payload: CalculateRequest, container: AppContainer = Depends(get_container)
) -> dict:
    """Return display totals for the requested products and foods."""
    totals = container.calculator_service.calculate(
        [
            CalculatorItem(
                quantity=item.quantity,
                product_id=item.product_id,
                food_id=item.food_id,
            )
            for item in payload.items
        ]
    )
    return {"totalNutrition": totals.as_dict()}
