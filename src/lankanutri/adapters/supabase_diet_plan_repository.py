"""Supabase repository for generated diet plans."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from lankanutri.adapters.supabase_rows import first_row, parse_timestamp, parse_uuid
from lankanutri.domain.diet import DietPlanRecord, HealthProfile
from lankanutri.services.diet import DietPlanRepository

TABLE = "diet_plans"


@dataclass
class SupabaseDietPlanRepository(DietPlanRepository):
    """Supabase implementation for user-owned diet plans."""

    client: Client

    def create(self, record: DietPlanRecord) -> DietPlanRecord:
        payload = {
            "user_id": str(record.user_id),
            "input": record.profile.model_dump(),
            "plan_text": record.plan_text,
            "metadata": record.metadata,
        }
        response = self.client.table(TABLE).insert(payload).execute()
        return _parse_record(first_row(response.data, "create diet plan"))

    def list_for_user(self, user_id: UUID) -> list[DietPlanRecord]:
        response = (
            self.client.table(TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_record(row) for row in response.data or []]


def _parse_record(row: dict[str, object]) -> DietPlanRecord:
    return DietPlanRecord(
        id=parse_uuid(row.get("id")),
        user_id=UUID(str(row["user_id"])),
        profile=HealthProfile.model_validate(row.get("input") or {}),
        plan_text=str(row.get("plan_text") or ""),
        metadata=dict(row.get("metadata") or {}),
        created_at=parse_timestamp(row.get("created_at")),
    )
