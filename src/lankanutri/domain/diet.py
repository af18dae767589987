"""Domain models for AI-generated diet plans."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field


class BmiCategory(StrEnum):
    """WHO adult BMI bands."""

    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


class HealthProfile(BaseModel):
    """Health profile snapshot used to personalise a diet plan."""

    weight: float = Field(gt=0, description="Body weight in kilograms")
    height: float = Field(gt=0, description="Height in centimetres")
    age: int = Field(gt=0)
    blood_pressure: str | None = None
    sugar: str | None = None
    body_type: str | None = None
    activity_level: str | None = None


@dataclass(frozen=True)
class DietPlanRecord:
    """A generated diet plan owned by the requesting user."""

    id: UUID | None
    user_id: UUID
    profile: HealthProfile
    plan_text: str
    metadata: dict[str, object] = field(default_factory=dict)
    created_at: datetime | None = None
