# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles contest media (fish photos and videos) in Supabase Storage.
# Registrations store the public URL; the storage path is recovered from it
# when the media has to be removed.
# =============================================================================

import logging
import re
from urllib.parse import unquote, urlsplit
from uuid import uuid4

from app.exceptions import StorageUploadError
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: str | None, default: str = "media") -> str:
    """Reduce a client filename to characters that are safe in a storage key."""
    name = _UNSAFE_FILENAME_CHARS.sub("_", (filename or "").strip()).strip("._")
    return name[:100] or default


class StorageService:
    """
    Service for Supabase Storage operations.

    Handles uploading, addressing and removing contest media.
    """

    def __init__(self, db: SupabaseClient, bucket: str):
        self.db = db
        self.bucket_name = bucket

    def build_path(self, user_id: str, filename: str | None) -> str:
        """Storage key: contest/{user_id}/{uuid}-{filename}"""
        return f"contest/{user_id}/{uuid4().hex}-{safe_filename(filename)}"

    def upload_media(
        self,
        user_id: str,
        content: bytes,
        filename: str | None,
        content_type: str,
    ) -> tuple[str, str]:
        """
        Upload a media file and return where it lives.

        Args:
            user_id: Owner of the registration
            content: File bytes
            filename: Original filename
            content_type: MIME type reported by the client

        Returns:
            Tuple of (storage path, public URL)

        Raises:
            StorageUploadError: If upload fails
        """
        path = self.build_path(user_id, filename)
        bucket = self.db.bucket(self.bucket_name)

        try:
            bucket.upload(
                path=path,
                file=content,
                file_options={"content-type": content_type, "upsert": "false"}
            )
            public_url = bucket.get_public_url(path)
        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise StorageUploadError(str(e))

        logger.info(f"Uploaded media to storage: {path}")
        return path, public_url

    def path_from_public_url(self, url: str | None) -> str | None:
        """
        Recover the storage path from a public URL.

        Example:
            https://x.supabase.co/storage/v1/object/public/contest-media/contest/u1/a.jpg
            -> contest/u1/a.jpg

        Returns:
            The path, or None if the URL does not point into our bucket
        """
        if not url:
            return None

        marker = f"/object/public/{self.bucket_name}/"
        url_path = urlsplit(url).path
        if marker not in url_path:
            return None

        path = unquote(url_path.split(marker, 1)[1])
        return path or None

    def delete_files(self, storage_paths: list[str]) -> bool:
        """
        Delete files from storage.

        Failures are logged, not raised: callers use this as the first,
        best-effort phase of deleting a record.

        Returns:
            True if deleted successfully
        """
        if not storage_paths:
            return True

        try:
            self.db.bucket(self.bucket_name).remove(storage_paths)
            logger.info(f"Deleted files from storage: {storage_paths}")
            return True

        except Exception as e:
            logger.error(f"Failed to delete files {storage_paths}: {e}")
            return False
