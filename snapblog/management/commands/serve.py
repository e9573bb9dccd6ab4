"""Run the development server on the configured PORT."""
import logging

from django.conf import settings
from django.core.management import call_command
from django.core.management.base import BaseCommand
from django.db import DatabaseError, connection

logger = logging.getLogger(__name__)


def check_database():
    """
    Try to open a database connection and log the outcome.

    Returns True on success. Failures are logged, never raised, so the
    server still starts.
    """
    try:
        connection.ensure_connection()
    except DatabaseError as e:
        logger.error("Database connection failed: %s", e)
        return False
    logger.info("Connected to database %s", connection.settings_dict.get("NAME"))
    return True


class Command(BaseCommand):
    help = "Check the database connection, then serve the site on 0.0.0.0:$PORT."

    def add_arguments(self, parser):
        parser.add_argument("--port", type=int, default=None, help="Override PORT.")
        parser.add_argument("--host", default="0.0.0.0")
        parser.add_argument("--noreload", action="store_true")

    def handle(self, *args, **options):
        port = options["port"] or getattr(settings, "PORT", 3000)
        check_database()
        logger.info("Server running at http://localhost:%s", port)
        call_command(
            "runserver",
            f"{options['host']}:{port}",
            use_reloader=not options["noreload"],
        )
