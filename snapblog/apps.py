"""Django app configuration for snapblog."""
from django.apps import AppConfig


class SnapblogConfig(AppConfig):
    """Configuration for the snapblog app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "snapblog"
    verbose_name = "Snapblog"

    def ready(self):
        """Configure the media host once settings are loaded."""
        from .storage import configure_cloudinary
        configure_cloudinary()
