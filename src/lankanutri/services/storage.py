"""Image storage capability and upload validation."""

import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import Protocol
from uuid import uuid4

from lankanutri.errors import ServiceUnavailableError, ValidationError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded image file."""

    content: bytes
    filename: str
    content_type: str


@dataclass(frozen=True)
class StoredImage:
    """Location of an image in object storage."""

    url: str
    public_id: str


class ImageStorage(Protocol):
    """Interface for object storage of images."""

    @property
    def is_available(self) -> bool:
        """Return true when storage is configured."""

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Store bytes at a path and return a stable public URL."""


@dataclass
class UnavailableImageStorage:
    """Storage variant used when no bucket is configured."""

    hint: str = (
        "Image storage is not configured. "
        "Set SUPABASE_STORAGE_BUCKET in your environment."
    )

    @property
    def is_available(self) -> bool:
        return False

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        raise ServiceUnavailableError(self.hint)


@dataclass
class ImageService:
    """Validate uploads and hand them to object storage."""

    storage: ImageStorage
    max_bytes: int = 5 * 1024 * 1024

    def check_size(self, size: int) -> None:
        if size > self.max_bytes:
            raise ValidationError(
                f"Image exceeds the {self.max_bytes // (1024 * 1024)} MB limit",
                field="image",
            )

    def store(self, upload: ImageUpload, folder: str) -> StoredImage:
        """Upload an image into a folder and return its URL."""
        if not upload.content:
            raise ValidationError("No file uploaded", field="image")
        if not upload.content_type.startswith("image/"):
            raise ValidationError("Only image uploads are allowed", field="image")
        self.check_size(len(upload.content))
        if not self.storage.is_available:
            raise ServiceUnavailableError(
                getattr(self.storage, "hint", "Image storage is not configured.")
            )
        public_id = f"{folder}/{uuid4()}"
        suffix = PurePath(upload.filename or "").suffix.lower()
        url = self.storage.upload(
            f"{public_id}{suffix}", upload.content, upload.content_type
        )
        _logger.info(
            "Stored image: public_id=%s bytes=%s", public_id, len(upload.content)
        )
        return StoredImage(url=url, public_id=public_id)

    def store_optional(self, upload: ImageUpload | None, folder: str) -> str | None:
        """Upload when an image was provided and return its URL."""
        if upload is None:
            return None
        return self.store(upload, folder).url
