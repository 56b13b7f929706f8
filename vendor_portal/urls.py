"""
URL configuration for the vendor_portal project.

The vendor management pages live under ``/vendors/``; the site root simply
redirects there.
"""

from django.urls import include, path

from core.views import health_check, root_view

urlpatterns = [
    path("", root_view, name="root"),
    path("healthz", health_check, name="health-check"),
    path("vendors/", include("vendors.urls")),
]
