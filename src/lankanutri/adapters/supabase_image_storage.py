"""Supabase Storage bucket for uploaded images."""

from dataclasses import dataclass

from supabase import Client

from lankanutri.services.storage import ImageStorage


@dataclass
class SupabaseImageStorage(ImageStorage):
    """Image storage in a public Supabase Storage bucket."""

    client: Client
    bucket: str

    @property
    def is_available(self) -> bool:
        return True

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Upload bytes and return the bucket's public URL for them."""
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(path, content, {"content-type": content_type})
        return bucket.get_public_url(path)
