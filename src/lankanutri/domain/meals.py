"""Domain models for meal logging."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from lankanutri.domain.nutrition import NutritionTotals

MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")


@dataclass(frozen=True)
class RecognizedItem:
    """Food item suggested by photo recognition."""

    name: str
    confidence: float = 0.0
    estimated_portion: str = ""


@dataclass(frozen=True)
class ManualItem:
    """Food item entered by the user."""

    name: str
    portion: str = ""
    calories: float = 0.0
    food_id: UUID | None = None


@dataclass(frozen=True)
class MealLog:
    """A logged meal with its aggregated nutrition."""

    id: UUID | None
    user_id: UUID
    meal_type: str
    total_nutrition: NutritionTotals
    recognized_items: list[RecognizedItem] = field(default_factory=list)
    manual_items: list[ManualItem] = field(default_factory=list)
    image: str = ""
    notes: str = ""
    logged_at: datetime | None = None


@dataclass(frozen=True)
class DailyTotals:
    """Nutrition totals for a single day."""

    day: date
    meals: int
    nutrition: NutritionTotals
