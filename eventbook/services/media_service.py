"""
Event image upload service
"""

import logging
import os
import uuid
from urllib.parse import unquote

from eventbook.core.config import settings
from eventbook.core.errors import MediaUploadError
from eventbook.services.firebase_client import get_storage_bucket

logger = logging.getLogger(__name__)

class MediaService:
    """Stores event images and returns a stable retrieval URL"""

    ALLOWED_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.gif', '.webp', '.svg')

    @staticmethod
    def build_object_name(filename: str, folder: str) -> str:
        """Random object name under folder, keeping the original extension"""
        ext = os.path.splitext(filename or "")[1].lower()
        return f"{folder}/{uuid.uuid4().hex}{ext}"

    @staticmethod
    def upload_image(
        content: bytes,
        filename: str,
        content_type: str = "application/octet-stream",
        folder: str = None
    ) -> str:
        """Upload an image and return its URL.

        Raises MediaUploadError when the provider fails; nothing about the
        event has been written at that point.
        """
        folder = folder or settings.MEDIA_FOLDER
        object_name = MediaService.build_object_name(filename, folder)

        try:
            if settings.MEDIA_BACKEND == "firebase":
                url = MediaService._upload_firebase(content, object_name, content_type)
            else:
                url = MediaService._save_local(content, object_name)
        except Exception as e:
            logger.exception(f"Image upload failed for {filename}")
            raise MediaUploadError(f"Image upload failed: {str(e)}") from e

        logger.info(f"Image uploaded: {url}")
        return url

    @staticmethod
    def delete_image(url: str) -> bool:
        """Remove an image stored by upload_image, e.g. after the event was rejected.

        Returns False when the URL does not belong to the configured backend.
        A provider failure is logged and reported as False; the caller is
        already handling a more relevant error.
        """
        try:
            if settings.MEDIA_BACKEND == "firebase":
                return MediaService._delete_firebase(url)
            return MediaService._delete_local(url)
        except Exception:
            logger.exception(f"Failed to remove image {url}")
            return False

    @staticmethod
    def _upload_firebase(content: bytes, object_name: str, content_type: str) -> str:
        bucket = get_storage_bucket()
        blob = bucket.blob(object_name)
        blob.upload_from_string(content, content_type=content_type)
        blob.make_public()
        return blob.public_url

    @staticmethod
    def _delete_firebase(url: str) -> bool:
        bucket = get_storage_bucket()
        marker = f"/{bucket.name}/"
        if marker not in url:
            return False
        object_name = unquote(url.split(marker, 1)[1])
        bucket.blob(object_name).delete()
        logger.info(f"Image removed: {url}")
        return True

    @staticmethod
    def _save_local(content: bytes, object_name: str) -> str:
        file_path = os.path.join(settings.UPLOAD_DIR, object_name)
        os.makedirs(os.path.dirname(file_path), exist_ok=True)

        with open(file_path, 'wb') as f:
            f.write(content)

        return f"{settings.BASE_URL.rstrip('/')}/uploads/{object_name}"

    @staticmethod
    def _delete_local(url: str) -> bool:
        prefix = f"{settings.BASE_URL.rstrip('/')}/uploads/"
        if not url.startswith(prefix):
            return False
        file_path = os.path.join(settings.UPLOAD_DIR, url[len(prefix):])
        if not os.path.isfile(file_path):
            return False
        os.remove(file_path)
        logger.info(f"Image removed: {url}")
        return True
