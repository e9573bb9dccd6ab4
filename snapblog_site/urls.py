"""
URL configuration for the snapblog site.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path, re_path
from django.views.static import serve

from snapblog.conf import blog_settings

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("snapblog.urls")),
]

# Local uploads are served whatever DEBUG says; a front web server may take this over.
if blog_settings.MEDIA_BACKEND == "local":
    urlpatterns += [
        re_path(
            r"^%s(?P<path>.*)$" % blog_settings.UPLOAD_URL.lstrip("/"),
            serve,
            {"document_root": blog_settings.UPLOAD_DIR},
        ),
    ]

if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
