# app/core/storage_utils.py
import logging

from app.core.config import get_settings
from app.core.supabase_client import storage_bucket

settings = get_settings()
logger = logging.getLogger(__name__)


def upload_to_storage(path: str, file_bytes: bytes, content_type: str) -> str:
    """
    Upsert an object at `path` and return its public URL.

    Example path: "services/<uuid>/cover.png"
    """
    bucket = storage_bucket()
    bucket.upload(
        path,
        file_bytes,
        {"upsert": "true", "content-type": content_type},
    )
    logger.info("Uploaded %d bytes to %s/%s", len(file_bytes), settings.STORAGE_BUCKET, path)
    return bucket.get_public_url(path)


def delete_from_storage(path: str) -> None:
    storage_bucket().remove([path])
    logger.info("Removed %s/%s", settings.STORAGE_BUCKET, path)


def extract_path_from_public_url(url: str) -> str | None:
    """
    Object path relative to the bucket, or None for foreign URLs.

        .../storage/v1/object/public/assets/services/s/cover.png
        -> 'services/s/cover.png'
    """
    marker = f"/storage/v1/object/public/{settings.STORAGE_BUCKET}/"
    _, found, path = url.partition(marker)
    return path if found and path else None


def delete_public_url(url: str) -> None:
    """No-op when the URL does not point into this bucket."""
    path = extract_path_from_public_url(url)
    if path:
        delete_from_storage(path)
