"""Supabase repository for the curated diet plan catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from lankanutri.adapters.supabase_rows import (
    first_row,
    parse_timestamp,
    parse_uuid,
    string_list,
)
from lankanutri.domain.programs import DietProgram
from lankanutri.services.programs import DietProgramRepository

TABLE = "diet_programs"


@dataclass
class SupabaseDietProgramRepository(DietProgramRepository):
    """Supabase implementation for curated diet plans."""

    client: Client

    def list_programs(
        self, category: str | None = None, active_only: bool = True
    ) -> list[DietProgram]:
        query = self.client.table(TABLE).select("*")
        if category:
            query = query.eq("category", category)
        if active_only:
            query = query.eq("is_active", True)
        response = query.order("created_at", desc=True).execute()
        return [_parse_program(row) for row in response.data or []]

    def get(self, program_id: UUID) -> DietProgram | None:
        response = (
            self.client.table(TABLE)
            .select("*")
            .eq("id", str(program_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_program(response.data[0])

    def create(self, program: DietProgram) -> DietProgram:
        response = self.client.table(TABLE).insert(_program_row(program)).execute()
        return _parse_program(first_row(response.data, "create diet plan"))

    def update(self, program: DietProgram) -> DietProgram:
        response = (
            self.client.table(TABLE)
            .update(_program_row(program))
            .eq("id", str(program.id))
            .execute()
        )
        return _parse_program(first_row(response.data, "update diet plan"))

    def delete(self, program_id: UUID) -> None:
        self.client.table(TABLE).delete().eq("id", str(program_id)).execute()


def _program_row(program: DietProgram) -> dict[str, object]:
    return {
        "name": program.name,
        "category": program.category,
        "description": program.description,
        "duration_days": program.duration_days,
        "daily_calories": program.daily_calories,
        "meals": program.meals,
        "image": program.image,
        "is_active": program.is_active,
    }


def _parse_program(row: dict[str, object]) -> DietProgram:
    daily_calories = row.get("daily_calories")
    return DietProgram(
        id=parse_uuid(row.get("id")),
        name=str(row.get("name") or ""),
        category=str(row.get("category") or ""),
        description=str(row.get("description") or ""),
        duration_days=int(row.get("duration_days") or 7),
        daily_calories=int(daily_calories) if daily_calories is not None else None,
        meals=string_list(row.get("meals")),
        image=str(row.get("image") or ""),
        is_active=bool(row.get("is_active", True)),
        created_at=parse_timestamp(row.get("created_at")),
    )
