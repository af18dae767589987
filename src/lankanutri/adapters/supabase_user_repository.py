"""Supabase repository for user profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from lankanutri.adapters.supabase_rows import first_row, parse_timestamp
from lankanutri.domain.users import Role, UserProfile
from lankanutri.services.users import UserRepository

TABLE = "profiles"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for profiles keyed by the auth user id."""

    client: Client

    def get(self, user_id: UUID) -> UserProfile | None:
        response = (
            self.client.table(TABLE)
            .select("*")
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def get_by_email(self, email: str) -> UserProfile | None:
        response = (
            self.client.table(TABLE).select("*").eq("email", email).limit(1).execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def list_users(self) -> list[UserProfile]:
        response = (
            self.client.table(TABLE)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_profile(row) for row in response.data or []]

    def create(self, profile: UserProfile) -> UserProfile:
        payload = {"id": str(profile.id), **_profile_row(profile)}
        response = self.client.table(TABLE).insert(payload).execute()
        return _parse_profile(first_row(response.data, "create profile"))

    def update(self, profile: UserProfile) -> UserProfile:
        response = (
            self.client.table(TABLE)
            .update(_profile_row(profile))
            .eq("id", str(profile.id))
            .execute()
        )
        return _parse_profile(first_row(response.data, "update profile"))

    def delete(self, user_id: UUID) -> None:
        self.client.table(TABLE).delete().eq("id", str(user_id)).execute()


def _profile_row(profile: UserProfile) -> dict[str, object]:
    return {
        "name": profile.name,
        "email": profile.email,
        "role": profile.role.value,
        "phone": profile.phone,
        "address": profile.address,
        "avatar": profile.avatar,
    }


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        email=str(row.get("email") or ""),
        role=Role(str(row.get("role") or Role.USER.value)),
        phone=str(row.get("phone") or ""),
        address=str(row.get("address") or ""),
        avatar=str(row.get("avatar") or ""),
        created_at=parse_timestamp(row.get("created_at")),
    )
