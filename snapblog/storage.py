"""
Image storage backends for snapblog.

A backend takes an uploaded file and returns a reference string that is
stored on the post: a local URL path for ``local``, the hosted
``secure_url`` for ``cloudinary``.
"""
import logging
import os
import time
from pathlib import Path

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from django.conf import settings
from django.core.files.storage import FileSystemStorage

from .conf import blog_settings

logger = logging.getLogger(__name__)


class MediaUploadError(Exception):
    """Raised when an uploaded image could not be stored."""


def configure_cloudinary():
    """Push media-host credentials from Django settings into the SDK."""
    cloud_name = getattr(settings, "CLOUDINARY_CLOUD_NAME", None)
    if not cloud_name:
        return
    cloudinary.config(
        cloud_name=cloud_name,
        api_key=getattr(settings, "CLOUDINARY_API_KEY", None),
        api_secret=getattr(settings, "CLOUDINARY_API_SECRET", None),
        secure=True,
    )


def timestamped_name(filename):
    """Return '<epoch millis><ext>' for an uploaded file name."""
    ext = os.path.splitext(filename or "")[1].lower()
    return f"{int(time.time() * 1000)}{ext}"


class LocalMediaStorage:
    """Store uploads on local disk and serve them under UPLOAD_URL."""

    def __init__(self, location=None, base_url=None):
        location = Path(location or blog_settings.UPLOAD_DIR)
        if not location.is_absolute():
            location = Path(getattr(settings, "BASE_DIR", Path.cwd())) / location
        self.location = location
        self.base_url = base_url or blog_settings.UPLOAD_URL
        self.fs = FileSystemStorage(location=str(location), base_url=self.base_url)

    def save(self, upload, user=None):
        """
        Write ``upload`` to disk and return its URL path.

        Raises:
            MediaUploadError: If the file could not be written
        """
        try:
            name = self.fs.save(timestamped_name(upload.name), upload)
        except OSError as e:
            logger.error("Local upload of %s failed: %s", upload.name, e)
            raise MediaUploadError(str(e)) from e

        logger.info("Stored upload %s as %s", upload.name, name)
        return self.base_url + name


class CloudinaryMediaStorage:
    """Upload images to Cloudinary and keep only the hosted URL."""

    def __init__(self, folder=None):
        self.folder = folder or blog_settings.CLOUDINARY_FOLDER

    def save(self, upload, user=None):
        """
        Upload ``upload`` to Cloudinary and return its secure URL.

        Raises:
            MediaUploadError: If the media host rejected the upload
        """
        options = {"folder": self.folder, "resource_type": "image"}
        if user is not None:
            options["context"] = {"uploaded_by": user.username}

        try:
            result = cloudinary.uploader.upload(upload, **options)
        except CloudinaryError as e:
            logger.error("Cloudinary upload of %s failed: %s", upload.name, e)
            raise MediaUploadError(str(e)) from e

        url = result.get("secure_url")
        if not url:
            raise MediaUploadError("Cloudinary response had no secure_url")

        logger.info("Uploaded %s to Cloudinary as %s", upload.name, result.get("public_id"))
        return url


BACKENDS = {
    "local": LocalMediaStorage,
    "cloudinary": CloudinaryMediaStorage,
}


def get_media_storage():
    """Return an instance of the configured media backend."""
    return BACKENDS[blog_settings.MEDIA_BACKEND]()
