"""Domain models for traditional Sri Lankan foods."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from lankanutri.domain.localization import LocalizedText
from lankanutri.domain.nutrition import NutritionFacts, ServingSize

FOOD_TYPES = ("ingredient", "dish", "beverage")
FOOD_CATEGORIES = (
    "rice",
    "grains",
    "vegetables",
    "fruits",
    "proteins",
    "spices",
    "beverages",
    "other",
)


@dataclass(frozen=True)
class TraditionalFood:
    """A traditional food with nutrition per reference serving."""

    id: UUID | None
    name: LocalizedText
    type: str
    category: str
    nutrition: NutritionFacts
    serving_size: ServingSize = field(default_factory=ServingSize)
    description: LocalizedText = field(default_factory=LocalizedText)
    traditional_uses: list[str] = field(default_factory=list)
    health_benefits: list[str] = field(default_factory=list)
    preparation_methods: list[str] = field(default_factory=list)
    image: str = ""
    is_common: bool = True
    is_affordable: bool = True
    created_at: datetime | None = None

    @property
    def is_common_and_affordable(self) -> bool:
        return self.is_common and self.is_affordable
