"""Supabase repository for daily tips."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from lankanutri.adapters.supabase_rows import (
    first_row,
    parse_date,
    parse_uuid,
    string_list,
)
from lankanutri.domain.localization import LocalizedText
from lankanutri.domain.tips import DailyTip
from lankanutri.services.tips import DailyTipRepository

TABLE = "daily_tips"


@dataclass
class SupabaseDailyTipRepository(DailyTipRepository):
    """Supabase implementation for daily tips."""

    client: Client

    def list_tips(
        self,
        category: str | None = None,
        active_only: bool = True,
        until: date | None = None,
    ) -> list[DailyTip]:
        query = self.client.table(TABLE).select("*")
        if category:
            query = query.eq("category", category)
        if active_only:
            query = query.eq("is_active", True)
        if until is not None:
            query = query.lte("date", until.isoformat())
        response = query.order("date", desc=True).execute()
        return [_parse_tip(row) for row in response.data or []]

    def create(self, tip: DailyTip) -> DailyTip:
        payload = {
            "tip": tip.tip.as_dict(),
            "category": tip.category,
            "date": tip.date.isoformat(),
            "difficulty": tip.difficulty,
            "cultural_relevance": tip.cultural_relevance,
            "related_foods": tip.related_foods,
            "is_active": tip.is_active,
        }
        response = self.client.table(TABLE).insert(payload).execute()
        return _parse_tip(first_row(response.data, "create tip"))


def _parse_tip(row: dict[str, object]) -> DailyTip:
    return DailyTip(
        id=parse_uuid(row.get("id")),
        tip=LocalizedText.from_value(row.get("tip")),
        category=str(row.get("category") or ""),
        date=parse_date(row.get("date")),
        difficulty=str(row.get("difficulty") or "easy"),
        cultural_relevance=str(row.get("cultural_relevance") or "high"),
        related_foods=string_list(row.get("related_foods")),
        is_active=bool(row.get("is_active", True)),
    )
