"""Supabase Auth gateway for email/password accounts and bearer tokens."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import AuthError, Client

from lankanutri.errors import AuthenticationError, ValidationError
from lankanutri.services.users import AuthGateway

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseAuthGateway(AuthGateway):
    """Auth gateway backed by Supabase Auth.

    The client should be dedicated to auth calls: signing in stores a user
    session on it, which would otherwise replace the service key on table
    requests.
    """

    client: Client

    def sign_up(self, email: str, password: str) -> UUID:
        try:
            response = self.client.auth.sign_up({"email": email, "password": password})
        except AuthError as exc:
            raise ValidationError(exc.message, field="email") from exc
        if response.user is None:
            raise ValidationError("Registration failed", field="email")
        return UUID(response.user.id)

    def sign_in(self, email: str, password: str) -> tuple[UUID, str]:
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            _logger.info("Sign-in rejected: %s", exc.message)
            raise AuthenticationError("Invalid email or password") from exc
        if response.user is None or response.session is None:
            raise AuthenticationError("Invalid email or password")
        return UUID(response.user.id), response.session.access_token

    def verify(self, token: str) -> UUID:
        try:
            response = self.client.auth.get_user(token)
        except AuthError as exc:
            raise AuthenticationError("Not authorized, token failed") from exc
        if response is None or response.user is None:
            raise AuthenticationError("Not authorized, token failed")
        return UUID(response.user.id)

    def delete_user(self, user_id: UUID) -> None:
        self.client.auth.admin.delete_user(str(user_id))
