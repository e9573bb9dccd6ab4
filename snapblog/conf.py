"""
Configuration settings for snapblog.

Override these in your Django settings.py:

    SNAPBLOG = {
        'MEDIA_BACKEND': 'cloudinary',
        'CLOUDINARY_FOLDER': 'snapblog',
        'MEDIA_MAX_SIZE_MB': 5,
        ...
    }

Cloudinary credentials are read from the top-level Django settings
CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET.
"""
from django.conf import settings

DEFAULTS = {
    # Media
    "MEDIA_BACKEND": "local",  # "local" or "cloudinary"
    "UPLOAD_DIR": "public/uploads",
    "UPLOAD_URL": "/uploads/",
    "ALLOWED_IMAGE_TYPES": ["image/jpeg", "image/png", "image/gif", "image/webp"],
    "MEDIA_MAX_SIZE_MB": 10,
    "CLOUDINARY_FOLDER": "snapblog",

    # Comments
    "COMMENT_MAX_LENGTH": 2000,

    # Posts
    "TITLE_MAX_LENGTH": 200,
}

MEDIA_BACKENDS = ("local", "cloudinary")


class SnapblogSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from snapblog.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid snapblog setting: {name}")

        user_settings = getattr(settings, "SNAPBLOG", {})
        return user_settings.get(name, DEFAULTS[name])

    @property
    def MEDIA_BACKEND(self):
        """Return the configured media backend, validated."""
        user_settings = getattr(settings, "SNAPBLOG", {})
        backend = user_settings.get("MEDIA_BACKEND", DEFAULTS["MEDIA_BACKEND"])
        if backend not in MEDIA_BACKENDS:
            raise ValueError(
                f"Unknown MEDIA_BACKEND {backend!r}; expected one of {MEDIA_BACKENDS}"
            )
        return backend

    @property
    def max_upload_bytes(self):
        return self.MEDIA_MAX_SIZE_MB * 1024 * 1024


blog_settings = SnapblogSettings()
