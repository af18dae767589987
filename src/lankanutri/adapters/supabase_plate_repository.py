"""Supabase repository for Sri Lankan plates."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from lankanutri.adapters.supabase_rows import first_row, parse_timestamp, parse_uuid
from lankanutri.domain.localization import LocalizedText
from lankanutri.domain.nutrition import NutritionTotals
from lankanutri.domain.plates import Goal, Plate, PlateItem, Substitution
from lankanutri.services.plates import PlateRepository

TABLE = "sri_lankan_plates"


@dataclass
class SupabasePlateRepository(PlateRepository):
    """Supabase implementation for plates."""

    client: Client

    def list_plates(
        self, goal: Goal | None = None, busy_life_only: bool = False
    ) -> list[Plate]:
        query = self.client.table(TABLE).select("*")
        if goal is not None:
            query = query.eq("goal", goal.value)
        if busy_life_only:
            query = query.eq("is_busy_life_friendly", True)
        response = query.order("created_at", desc=True).execute()
        return [_parse_plate(row) for row in response.data or []]

    def get(self, plate_id: UUID) -> Plate | None:
        response = (
            self.client.table(TABLE)
            .select("*")
            .eq("id", str(plate_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plate(response.data[0])

    def create(self, plate: Plate) -> Plate:
        payload = {
            "name": plate.name.as_dict(),
            "description": plate.description.as_dict(),
            "goal": plate.goal.value,
            "items": [
                {
                    "food_id": str(item.food_id) if item.food_id else None,
                    "name": item.name,
                    "portion": item.portion,
                    "nutrition": item.nutrition.as_dict(),
                }
                for item in plate.items
            ],
            "total_nutrition": plate.total_nutrition.as_dict(),
            "substitutions": [
                {
                    "original": sub.original,
                    "substitute": sub.substitute,
                    "reason": sub.reason,
                }
                for sub in plate.substitutions
            ],
            "is_busy_life_friendly": plate.is_busy_life_friendly,
            "prep_time": plate.prep_time,
            "image": plate.image,
        }
        response = self.client.table(TABLE).insert(payload).execute()
        return _parse_plate(first_row(response.data, "create plate"))


def _parse_plate(row: dict[str, object]) -> Plate:
    items = [
        PlateItem(
            food_id=parse_uuid(item.get("food_id")),
            name=str(item.get("name") or ""),
            portion=str(item.get("portion") or ""),
            nutrition=NutritionTotals.from_mapping(item.get("nutrition")),
        )
        for item in row.get("items") or []
    ]
    substitutions = [
        Substitution(
            original=str(sub.get("original") or ""),
            substitute=str(sub.get("substitute") or ""),
            reason=str(sub.get("reason") or ""),
        )
        for sub in row.get("substitutions") or []
    ]
    return Plate(
        id=parse_uuid(row.get("id")),
        name=LocalizedText.from_value(row.get("name")),
        description=LocalizedText.from_value(row.get("description")),
        goal=Goal(str(row["goal"])),
        items=items,
        total_nutrition=NutritionTotals.from_mapping(row.get("total_nutrition")),
        substitutions=substitutions,
        is_busy_life_friendly=bool(row.get("is_busy_life_friendly", False)),
        prep_time=int(row.get("prep_time") or 0),
        image=str(row.get("image") or ""),
        created_at=parse_timestamp(row.get("created_at")),
    )
