"""Standalone image upload endpoint."""

from fastapi import APIRouter, Depends, File, UploadFile

from lankanutri.api.dependencies import current_user, get_container, read_image
from lankanutri.containers import AppContainer
from lankanutri.errors import ValidationError

router = APIRouter(prefix="/api/upload", tags=["upload"])

UPLOAD_FOLDER = "uploads"


@router.post("", dependencies=[Depends(current_user)])
async def upload_image(
    image: UploadFile | None = File(default=None),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Store an image and return its public URL."""
    upload = await read_image(image, container.image_service)
    if upload is None:
        raise ValidationError("No file uploaded", field="image")
    stored = container.image_service.store(upload, UPLOAD_FOLDER)
    return {
        "message": "Image uploaded successfully",
        "url": stored.url,
        "imageUrl": stored.url,
        "path": stored.url,
        "publicId": stored.public_id,
    }
