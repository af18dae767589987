"""Domain models for daily nutrition tips."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from lankanutri.domain.localization import LocalizedText

TIP_CATEGORIES = (
    "weight-loss",
    "diabetes",
    "general-health",
    "portion-control",
    "cooking-tip",
    "substitution",
    "hydration",
)
TIP_DIFFICULTIES = ("easy", "medium", "hard")


@dataclass(frozen=True)
class DailyTip:
    """A localized daily tip."""

    id: UUID | None
    tip: LocalizedText
    category: str
    date: date
    difficulty: str = "easy"
    cultural_relevance: str = "high"
    related_foods: list[str] = field(default_factory=list)
    is_active: bool = True
