"""Domain models for the curated diet plan catalog."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class DietProgram:
    """A curated diet plan listed in the catalog."""

    id: UUID | None
    name: str
    category: str
    description: str = ""
    duration_days: int = 7
    daily_calories: int | None = None
    meals: list[str] = field(default_factory=list)
    image: str = ""
    is_active: bool = True
    created_at: datetime | None = None
