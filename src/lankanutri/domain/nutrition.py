"""Nutrition domain models."""

from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_SERVING_AMOUNT = 100.0

_ALIASES = {"glycemic_index": "glycemicIndex"}


def _read(data: Mapping[str, object], key: str) -> float:
    value = data.get(key)
    if value is None and key in _ALIASES:
        value = data.get(_ALIASES[key])
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0


@dataclass(frozen=True)
class NutritionFacts:
    """Nutrient values per reference serving of a food."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    iron: float = 0.0
    calcium: float = 0.0
    glycemic_index: float = 0.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, object] | None) -> "NutritionFacts":
        """Parse a stored nutrition record; missing fields read as zero."""
        data = data or {}
        return cls(
            calories=_read(data, "calories"),
            protein=_read(data, "protein"),
            carbs=_read(data, "carbs"),
            fat=_read(data, "fat"),
            fiber=_read(data, "fiber"),
            iron=_read(data, "iron"),
            calcium=_read(data, "calcium"),
            glycemic_index=_read(data, "glycemic_index"),
        )

    def as_dict(self) -> dict[str, float]:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "fiber": self.fiber,
            "iron": self.iron,
            "calcium": self.calcium,
            "glycemicIndex": self.glycemic_index,
        }


@dataclass(frozen=True)
class NutritionTotals:
    """Aggregated macronutrients for a portion, plate or meal."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0

    def __add__(self, other: "NutritionTotals") -> "NutritionTotals":
        return NutritionTotals(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
            fiber=self.fiber + other.fiber,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, object] | None) -> "NutritionTotals":
        data = data or {}
        return cls(
            calories=_read(data, "calories"),
            protein=_read(data, "protein"),
            carbs=_read(data, "carbs"),
            fat=_read(data, "fat"),
            fiber=_read(data, "fiber"),
        )

    def as_dict(self) -> dict[str, float]:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "fiber": self.fiber,
        }


@dataclass(frozen=True)
class ServingSize:
    """Reference quantity that nutrition facts are expressed per."""

    amount: float = DEFAULT_SERVING_AMOUNT
    unit: str = "g"

    @classmethod
    def from_mapping(cls, data: Mapping[str, object] | None) -> "ServingSize":
        data = data or {}
        amount = _read(data, "amount")
        return cls(
            amount=amount if amount > 0 else DEFAULT_SERVING_AMOUNT,
            unit=str(data.get("unit") or "g"),
        )

    def as_dict(self) -> dict[str, object]:
        return {"amount": self.amount, "unit": self.unit}
