"""User account, authentication and role management service."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from lankanutri.domain.users import AuthSession, Role, UserProfile
from lankanutri.errors import (
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from lankanutri.services.storage import ImageService, ImageUpload

_logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
AVATAR_FOLDER = "avatars"


class AuthGateway(Protocol):
    """Interface for the identity provider issuing bearer tokens."""

    def sign_up(self, email: str, password: str) -> UUID:
        """Register credentials and return the new user id."""

    def sign_in(self, email: str, password: str) -> tuple[UUID, str]:
        """Verify credentials and return the user id and an access token."""

    def verify(self, token: str) -> UUID:
        """Return the user id owning a valid access token."""

    def delete_user(self, user_id: UUID) -> None:
        """Remove the user's credentials."""


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def get(self, user_id: UUID) -> UserProfile | None:
        """Return a profile by user id."""

    def get_by_email(self, email: str) -> UserProfile | None:
        """Return a profile by email."""

    def list_users(self) -> list[UserProfile]:
        """Return all profiles, newest first."""

    def create(self, profile: UserProfile) -> UserProfile:
        """Persist a new profile."""

    def update(self, profile: UserProfile) -> UserProfile:
        """Persist profile changes."""

    def delete(self, user_id: UUID) -> None:
        """Delete a profile."""


def require_admin(actor: UserProfile) -> UserProfile:
    """Return the actor when it holds the admin role."""
    if not actor.is_admin:
        raise PermissionDeniedError("Not authorized as an admin")
    return actor


@dataclass
class UserService:
    """Register, authenticate and manage users."""

    gateway: AuthGateway
    repository: UserRepository
    images: ImageService

    def register(self, name: str, email: str, password: str) -> AuthSession:
        name = name.strip()
        email = email.strip().lower()
        if not name or not email:
            raise ValidationError("Name and email are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                field="password",
            )
        if self.repository.get_by_email(email) is not None:
            raise ValidationError("User already exists", field="email")
        user_id = self.gateway.sign_up(email, password)
        try:
            profile = self.repository.create(
                UserProfile(id=user_id, name=name, email=email, role=Role.USER)
            )
            _, token = self.gateway.sign_in(email, password)
        except Exception:
            _logger.warning("Rolling back sign-up after failure: user=%s", user_id)
            self.gateway.delete_user(user_id)
            self.repository.delete(user_id)
            raise
        _logger.info("Registered user: user=%s", user_id)
        return AuthSession(user=profile, access_token=token)

    def login(self, email: str, password: str) -> AuthSession:
        user_id, token = self.gateway.sign_in(email.strip().lower(), password)
        profile = self.repository.get(user_id)
        if profile is None:
            raise AuthenticationError("Invalid email or password")
        return AuthSession(user=profile, access_token=token)

    def authenticate(self, token: str) -> UserProfile:
        """Resolve a bearer token to the caller's profile."""
        user_id = self.gateway.verify(token)
        profile = self.repository.get(user_id)
        if profile is None:
            raise AuthenticationError("Not authorized, token failed")
        return profile

    def get_profile(self, user_id: UUID) -> UserProfile:
        profile = self.repository.get(user_id)
        if profile is None:
            raise NotFoundError("User")
        return profile

    def update_profile(
        self,
        user: UserProfile,
        changes: dict[str, object],
        avatar: ImageUpload | None = None,
    ) -> UserProfile:
        """Update the caller's own name, phone, address and avatar."""
        current = self.get_profile(user.id)
        url = self.images.store_optional(avatar, AVATAR_FOLDER)
        if url:
            changes = {**changes, "avatar": url}
        return self.repository.update(replace(current, **changes))

    def list_users(self) -> list[UserProfile]:
        return self.repository.list_users()

    def set_role(self, actor: UserProfile, user_id: UUID, role: str) -> UserProfile:
        require_admin(actor)
        try:
            new_role = Role(role)
        except ValueError as exc:
            raise ValidationError("Invalid role", field="role") from exc
        if user_id == actor.id:
            raise ValidationError("You cannot change your own role")
        target = self.get_profile(user_id)
        updated = self.repository.update(replace(target, role=new_role))
        _logger.info(
            "Role changed: user=%s role=%s by=%s", user_id, new_role, actor.id
        )
        return updated

    def delete_user(self, actor: UserProfile, user_id: UUID) -> None:
        require_admin(actor)
        if user_id == actor.id:
            raise ValidationError("You cannot delete your own account")
        self.get_profile(user_id)
        self.gateway.delete_user(user_id)
        self.repository.delete(user_id)
        _logger.info("Deleted user: user=%s by=%s", user_id, actor.id)
