"""Application error taxonomy mapped onto HTTP status codes."""

from fastapi import status


class AppError(Exception):
    """Base error carrying a client-facing message and HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ValidationError(AppError):
    """Request payload failed validation."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self, message: str, *, field: str | None = None, detail: str | None = None
    ) -> None:
        super().__init__(message, detail=detail)
        self.field = field


class AuthenticationError(AppError):
    """Missing or invalid bearer token or credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDeniedError(AppError):
    """Authenticated actor lacks the required role."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(AppError):
    """Requested entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity


class ServiceUnavailableError(AppError):
    """A collaborator is not configured for this deployment."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class UpstreamServiceError(AppError):
    """A configured collaborator failed while handling the request."""

    def __init__(
        self,
        message: str,
        *,
        upstream_status: int | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message, detail=detail)
        self.upstream_status = upstream_status
        if upstream_status in {
            status.HTTP_401_UNAUTHORIZED,
            status.HTTP_429_TOO_MANY_REQUESTS,
        }:
            self.status_code = upstream_status
        else:
            self.status_code = status.HTTP_502_BAD_GATEWAY
