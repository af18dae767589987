"""Domain models for goal-based Sri Lankan plates."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from lankanutri.domain.localization import LocalizedText
from lankanutri.domain.nutrition import NutritionTotals


class Goal(StrEnum):
    """Dietary goal that drives plate generation."""

    WEIGHT_LOSS = "weight-loss"
    WEIGHT_GAIN = "weight-gain"
    DIABETES = "diabetes"
    GENERAL_HEALTH = "general-health"


@dataclass(frozen=True)
class PlateItem:
    """A food on a plate with its resolved portion and nutrition snapshot."""

    food_id: UUID | None
    name: str
    portion: str
    nutrition: NutritionTotals


@dataclass(frozen=True)
class Substitution:
    """Suggested swap of one food for a healthier local alternative."""

    original: str
    substitute: str
    reason: str = ""


@dataclass(frozen=True)
class Plate:
    """A generated or curated plate meeting a calorie budget for a goal."""

    id: UUID | None
    name: LocalizedText
    goal: Goal
    items: list[PlateItem]
    total_nutrition: NutritionTotals
    description: LocalizedText = field(default_factory=LocalizedText)
    substitutions: list[Substitution] = field(default_factory=list)
    is_busy_life_friendly: bool = False
    prep_time: int = 0
    image: str = ""
    created_at: datetime | None = None
