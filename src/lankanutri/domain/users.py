"""Domain models for user accounts."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Role(StrEnum):
    """Account role controlling access to admin operations."""

    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class UserProfile:
    """Profile of an authenticated user."""

    id: UUID
    name: str
    email: str
    role: Role = Role.USER
    phone: str = ""
    address: str = ""
    avatar: str = ""
    created_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(frozen=True)
class AuthSession:
    """Issued access token for a signed-in user."""

    user: UserProfile
    access_token: str
