"""URL configuration for the credenciamento project."""

from django.conf import settings
from django.contrib import admin
from django.http import HttpRequest, HttpResponseRedirect
from django.shortcuts import redirect, reverse  # type: ignore[attr-defined]
from django.urls import path

from api.api import api

admin.site.site_header = f"{settings.SITE_NAME} v{settings.VERSION} Admin"
admin.site.index_title = f"{settings.SITE_NAME} v{settings.VERSION}"
admin.site.site_title = f"{settings.SITE_NAME} v{settings.VERSION} Admin"


def redirect_to_docs(request: HttpRequest) -> HttpResponseRedirect:
    """Redirect to the API documentation."""
    return redirect(reverse("api:openapi-view"))


urlpatterns = [
    path("api/", api.urls),
]

if settings.ADMIN_URL:  # pragma: no cover
    urlpatterns.insert(1, path(settings.ADMIN_URL, admin.site.urls))

if settings.DEBUG:
    urlpatterns.insert(1, path("", redirect_to_docs, name="redirect_to_docs"))  # type: ignore[arg-type]
