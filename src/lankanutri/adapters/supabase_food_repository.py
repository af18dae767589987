"""Supabase repository for traditional foods."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from lankanutri.adapters.supabase_rows import (
    first_row,
    parse_timestamp,
    parse_uuid,
    string_list,
)
from lankanutri.domain.foods import TraditionalFood
from lankanutri.domain.localization import LocalizedText
from lankanutri.domain.nutrition import NutritionFacts, ServingSize
from lankanutri.services.foods import FoodRepository

TABLE = "traditional_foods"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation for the traditional food catalog."""

    client: Client

    def list_foods(
        self, category: str | None = None, food_type: str | None = None
    ) -> list[TraditionalFood]:
        query = self.client.table(TABLE).select("*")
        if category:
            query = query.eq("category", category)
        if food_type:
            query = query.eq("type", food_type)
        response = query.execute()
        return [_parse_food(row) for row in response.data or []]

    def get(self, food_id: UUID) -> TraditionalFood | None:
        response = (
            self.client.table(TABLE)
            .select("*")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def create(self, food: TraditionalFood) -> TraditionalFood:
        response = self.client.table(TABLE).insert(_food_row(food)).execute()
        return _parse_food(first_row(response.data, "create food"))


def _food_row(food: TraditionalFood) -> dict[str, object]:
    return {
        "name": food.name.as_dict(),
        "description": food.description.as_dict(),
        "type": food.type,
        "category": food.category,
        "nutrition": food.nutrition.as_dict(),
        "serving_size": food.serving_size.as_dict(),
        "traditional_uses": food.traditional_uses,
        "health_benefits": food.health_benefits,
        "preparation_methods": food.preparation_methods,
        "image": food.image,
        "is_common": food.is_common,
        "is_affordable": food.is_affordable,
    }


def _parse_food(row: dict[str, object]) -> TraditionalFood:
    return TraditionalFood(
        id=parse_uuid(row.get("id")),
        name=LocalizedText.from_value(row.get("name")),
        description=LocalizedText.from_value(row.get("description")),
        type=str(row.get("type") or "dish"),
        category=str(row.get("category") or "other"),
        nutrition=NutritionFacts.from_mapping(row.get("nutrition")),
        serving_size=ServingSize.from_mapping(row.get("serving_size")),
        traditional_uses=string_list(row.get("traditional_uses")),
        health_benefits=string_list(row.get("health_benefits")),
        preparation_methods=string_list(row.get("preparation_methods")),
        image=str(row.get("image") or ""),
        is_common=bool(row.get("is_common", True)),
        is_affordable=bool(row.get("is_affordable", True)),
        created_at=parse_timestamp(row.get("created_at")),
    )
