"""FastAPI dependencies for container access and bearer authentication."""

from fastapi import Depends, Header, Request, UploadFile

from lankanutri.containers import AppContainer
from lankanutri.domain.users import UserProfile
from lankanutri.errors import AuthenticationError
from lankanutri.services.storage import ImageService, ImageUpload
from lankanutri.services.users import require_admin

BEARER_PREFIX = "bearer "


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def current_user(
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> UserProfile:
    """Resolve the ``Authorization: Bearer`` header to a user profile."""
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        raise AuthenticationError("Not authorized, no token")
    token = authorization[len(BEARER_PREFIX) :].strip()
    if not token:
        raise AuthenticationError("Not authorized, no token")
    return container.user_service.authenticate(token)


def admin_user(user: UserProfile = Depends(current_user)) -> UserProfile:
    """Ensure the caller holds the admin role."""
    return require_admin(user)


async def read_image(
    upload: UploadFile | None, images: ImageService
) -> ImageUpload | None:
    """Read a multipart file into an upload, treating an empty part as absent.

    Oversized files are rejected without buffering more than the size limit.
    """
    if upload is None or not upload.filename:
        return None
    if upload.size is not None:
        images.check_size(upload.size)
    content = await upload.read(images.max_bytes + 1)
    images.check_size(len(content))
    return ImageUpload(
        content=content,
        filename=upload.filename,
        content_type=upload.content_type or "application/octet-stream",
    )
