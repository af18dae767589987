"""Nutrition aggregation and the nutrition calculator."""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

from lankanutri.domain.nutrition import (
    DEFAULT_SERVING_AMOUNT,
    NutritionFacts,
    NutritionTotals,
)
from lankanutri.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from lankanutri.services.foods import FoodRepository
    from lankanutri.services.products import ProductRepository

_AMOUNT_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*([a-zA-Z]*)")
_UNIT_ALIASES = {
    "gram": "g",
    "grams": "g",
    "gm": "g",
    "gms": "g",
    "milliliter": "ml",
    "milliliters": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
}


@dataclass(frozen=True)
class Portion:
    """A nutrition record paired with its reference and requested amounts."""

    nutrition: NutritionFacts | NutritionTotals
    reference_amount: float
    requested_amount: float


def scale_nutrition(
    nutrition: NutritionFacts | NutritionTotals,
    reference_amount: float,
    requested_amount: float,
) -> NutritionTotals:
    """Scale a per-reference record linearly to the requested amount."""
    if reference_amount <= 0:
        reference_amount = DEFAULT_SERVING_AMOUNT
    factor = requested_amount / reference_amount
    return NutritionTotals(
        calories=nutrition.calories * factor,
        protein=nutrition.protein * factor,
        carbs=nutrition.carbs * factor,
        fat=nutrition.fat * factor,
        fiber=nutrition.fiber * factor,
    )


def aggregate_nutrition(portions: Iterable[Portion]) -> NutritionTotals:
    """Sum the scaled nutrition of every portion."""
    total = NutritionTotals()
    for portion in portions:
        total += scale_nutrition(
            portion.nutrition, portion.reference_amount, portion.requested_amount
        )
    return total


def sum_nutrition(values: Iterable[NutritionTotals]) -> NutritionTotals:
    """Sum precomputed nutrition snapshots."""
    total = NutritionTotals()
    for value in values:
        total += value
    return total


def round_for_display(totals: NutritionTotals) -> NutritionTotals:
    """Round calories to whole numbers and grams to one decimal."""
    return NutritionTotals(
        calories=float(round(totals.calories)),
        protein=round(totals.protein, 1),
        carbs=round(totals.carbs, 1),
        fat=round(totals.fat, 1),
        fiber=round(totals.fiber, 1),
    )


def _normalize_unit(unit: str) -> str:
    unit = unit.lower()
    return _UNIT_ALIASES.get(unit, unit)


def parse_portion_amount(portion: str | None, unit: str | None = None) -> float | None:
    """Extract the numeric amount from a portion string such as ``"150g"``.

    When ``unit`` is given, an amount stated in any other unit (``"1 cup"``,
    ``"2 pieces"``) is rejected and ``None`` is returned.
    """
    if not portion:
        return None
    match = _AMOUNT_PATTERN.search(portion)
    if match is None:
        return None
    stated = match.group(2)
    if unit is not None and stated and _normalize_unit(stated) != _normalize_unit(unit):
        return None
    return float(match.group(1))


@dataclass(frozen=True)
class CalculatorItem:
    """A product or traditional food with a requested quantity in grams."""

    quantity: float
    product_id: UUID | None = None
    food_id: UUID | None = None


@dataclass
class NutritionCalculatorService:
    """Compute display totals for a basket of products and foods."""

    product_repository: "ProductRepository"
    food_repository: "FoodRepository"

    def calculate(self, items: list[CalculatorItem]) -> NutritionTotals:
        """Return rounded totals for the requested quantities."""
        portions = []
        for item in items:
            if item.product_id is not None:
                product = self.product_repository.get(item.product_id)
                if product is None:
                    raise NotFoundError("Product")
                portions.append(
                    Portion(product.nutrition, DEFAULT_SERVING_AMOUNT, item.quantity)
                )
            elif item.food_id is not None:
                food = self.food_repository.get(item.food_id)
                if food is None:
                    raise NotFoundError("Food")
                portions.append(
                    Portion(food.nutrition, food.serving_size.amount, item.quantity)
                )
            else:
                raise ValidationError(
                    "Each item needs a productId or foodId", field="items"
                )
        return round_for_display(aggregate_nutrition(portions))
