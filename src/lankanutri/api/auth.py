"""Account endpoints and admin user management."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from lankanutri.api.dependencies import (
    admin_user,
    current_user,
    get_container,
    read_image,
)
from lankanutri.api.schemas import LoginRequest, RegisterRequest, RoleUpdate
from lankanutri.api.serializers import session_to_dict, user_to_dict
from lankanutri.containers import AppContainer
from lankanutri.domain.users import UserProfile

router = APIRouter(prefix="/api/auth", tags=["auth"])
admin_router = APIRouter(prefix="/api/admin/users", tags=["admin"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest, container: AppContainer = Depends(get_container)
) -> dict:
    """Create an account and return its access token."""
    session = container.user_service.register(
        payload.name, payload.email, payload.password
    )
    return session_to_dict(session)


@router.post("/login")
def login(
    payload: LoginRequest, container: AppContainer = Depends(get_container)
) -> dict:
    session = container.user_service.login(payload.email, payload.password)
    return session_to_dict(session)


@router.get("/profile")
def get_profile(user: UserProfile = Depends(current_user)) -> dict:
    return user_to_dict(user)


@router.put("/profile")
async def update_profile(
    name: str | None = Form(default=None),
    phone: str | None = Form(default=None),
    address: str | None = Form(default=None),
    avatar: UploadFile | None = File(default=None),
    user: UserProfile = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict:
    """Update the caller's profile and optional avatar."""
    changes = {
        key: value
        for key, value in {"name": name, "phone": phone, "address": address}.items()
        if value is not None
    }
    profile = container.user_service.update_profile(
        user, changes, avatar=await read_image(avatar, container.image_service)
    )
    return user_to_dict(profile)


@admin_router.get("", dependencies=[Depends(admin_user)])
def list_users(container: AppContainer = Depends(get_container)) -> list[dict]:
    return [user_to_dict(user) for user in container.user_service.list_users()]


@admin_router.put("/{user_id}")
def update_user_role(
    user_id: UUID,
    payload: RoleUpdate,
    actor: UserProfile = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict:
    """Change another user's role."""
    return user_to_dict(container.user_service.set_role(actor, user_id, payload.role))


@admin_router.delete("/{user_id}")
def delete_user(
    user_id: UUID,
    actor: UserProfile = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    container.user_service.delete_user(actor, user_id)
    return {"message": "User removed"}
