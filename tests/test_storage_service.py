"""Tests for image upload validation."""

import pytest

from lankanutri.errors import ServiceUnavailableError, ValidationError
from lankanutri.services.storage import (
    ImageService,
    ImageUpload,
    UnavailableImageStorage,
)
from tests.conftest import FakeImageStorage


def test_store_uploads_into_folder() -> None:
    storage = FakeImageStorage()

    stored = ImageService(storage).store(
        ImageUpload(b"data", "Photo.PNG", "image/png"), "products"
    )

    assert stored.public_id.startswith("products/")
    assert storage.uploads[0][0] == f"{stored.public_id}.png"
    assert stored.url == f"https://storage.test/{stored.public_id}.png"


@pytest.mark.parametrize(
    "upload",
    [
        ImageUpload(b"", "empty.png", "image/png"),
        ImageUpload(b"%PDF", "doc.pdf", "application/pdf"),
        ImageUpload(b"x" * 11, "big.png", "image/png"),
    ],
)
def test_store_rejects_invalid_uploads(upload: ImageUpload) -> None:
    storage = FakeImageStorage()

    with pytest.raises(ValidationError):
        ImageService(storage, max_bytes=10).store(upload, "uploads")
    assert storage.uploads == []


def test_unconfigured_storage_is_unavailable() -> None:
    service = ImageService(UnavailableImageStorage())

    with pytest.raises(ServiceUnavailableError, match="SUPABASE_STORAGE_BUCKET"):
        service.store(ImageUpload(b"data", "a.png", "image/png"), "uploads")


def test_store_optional_skips_missing_upload() -> None:
    assert ImageService(FakeImageStorage()).store_optional(None, "uploads") is None
