"""Traditional food catalog service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from lankanutri.domain.foods import FOOD_CATEGORIES, FOOD_TYPES, TraditionalFood
from lankanutri.errors import NotFoundError, ValidationError


class FoodRepository(Protocol):
    """Persistence interface for traditional foods."""

    def list_foods(
        self, category: str | None = None, food_type: str | None = None
    ) -> list[TraditionalFood]:
        """Return foods, optionally filtered by category and type."""

    def get(self, food_id: UUID) -> TraditionalFood | None:
        """Return a food by id, if present."""

    def create(self, food: TraditionalFood) -> TraditionalFood:
        """Persist a food and return it with its id."""


@dataclass
class FoodService:
    """Application service for the traditional food catalog."""

    repository: FoodRepository

    def list_foods(
        self, category: str | None = None, food_type: str | None = None
    ) -> list[TraditionalFood]:
        """Return foods with common ones first, then by English name."""
        foods = self.repository.list_foods(category=category, food_type=food_type)
        return sorted(foods, key=lambda food: (not food.is_common, food.name.en))

    def get_food(self, food_id: UUID) -> TraditionalFood:
        food = self.repository.get(food_id)
        if food is None:
            raise NotFoundError("Food")
        return food

    def create_food(self, food: TraditionalFood) -> TraditionalFood:
        if not food.name.en:
            raise ValidationError("English name is required", field="name")
        if food.type not in FOOD_TYPES:
            raise ValidationError("Invalid food type", field="type")
        if food.category not in FOOD_CATEGORIES:
            raise ValidationError("Invalid food category", field="category")
        return self.repository.create(food)
