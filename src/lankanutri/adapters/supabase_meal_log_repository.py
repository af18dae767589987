"""Supabase repository for meal logs."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from lankanutri.adapters.supabase_rows import first_row, parse_timestamp, parse_uuid
from lankanutri.domain.meals import ManualItem, MealLog, RecognizedItem
from lankanutri.domain.nutrition import NutritionTotals
from lankanutri.services.meal_logs import MealLogRepository

TABLE = "meal_logs"


@dataclass
class SupabaseMealLogRepository(MealLogRepository):
    """Supabase implementation for meal logs."""

    client: Client

    def create(self, meal_log: MealLog) -> MealLog:
        payload = {
            "user_id": str(meal_log.user_id),
            "meal_type": meal_log.meal_type,
            "total_nutrition": meal_log.total_nutrition.as_dict(),
            "recognized_items": [
                {
                    "name": item.name,
                    "confidence": item.confidence,
                    "estimated_portion": item.estimated_portion,
                }
                for item in meal_log.recognized_items
            ],
            "manual_items": [
                {
                    "food_id": str(item.food_id) if item.food_id else None,
                    "name": item.name,
                    "portion": item.portion,
                    "calories": item.calories,
                }
                for item in meal_log.manual_items
            ],
            "image": meal_log.image,
            "notes": meal_log.notes,
            "logged_at": meal_log.logged_at.isoformat() if meal_log.logged_at else None,
        }
        response = self.client.table(TABLE).insert(payload).execute()
        return _parse_meal_log(first_row(response.data, "create meal log"))

    def list_meal_logs(
        self,
        user_id: UUID,
        meal_type: str | None = None,
        since: datetime | None = None,
        limit: int | None = None,
    ) -> list[MealLog]:
        query = self.client.table(TABLE).select("*").eq("user_id", str(user_id))
        if meal_type:
            query = query.eq("meal_type", meal_type)
        if since is not None:
            query = query.gte("logged_at", since.isoformat())
        query = query.order("logged_at", desc=True)
        if limit is not None:
            query = query.limit(limit)
        response = query.execute()
        return [_parse_meal_log(row) for row in response.data or []]


def _parse_meal_log(row: dict[str, object]) -> MealLog:
    return MealLog(
        id=parse_uuid(row.get("id")),
        user_id=UUID(str(row["user_id"])),
        meal_type=str(row.get("meal_type") or ""),
        total_nutrition=NutritionTotals.from_mapping(row.get("total_nutrition")),
        recognized_items=[
            RecognizedItem(
                name=str(item.get("name") or ""),
                confidence=float(item.get("confidence") or 0.0),
                estimated_portion=str(item.get("estimated_portion") or ""),
            )
            for item in row.get("recognized_items") or []
        ],
        manual_items=[
            ManualItem(
                name=str(item.get("name") or ""),
                portion=str(item.get("portion") or ""),
                calories=float(item.get("calories") or 0.0),
                food_id=parse_uuid(item.get("food_id")),
            )
            for item in row.get("manual_items") or []
        ],
        image=str(row.get("image") or ""),
        notes=str(row.get("notes") or ""),
        logged_at=parse_timestamp(row.get("logged_at")),
    )
