"""
WSGI config for the snapblog site.

Serve with e.g.: gunicorn snapblog_site.wsgi -b 0.0.0.0:$PORT
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "snapblog_site.settings")

application = get_wsgi_application()
