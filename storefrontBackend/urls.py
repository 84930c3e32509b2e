"""
URL configuration for storefrontBackend project.

Every API lives under ``/api/``; the OpenAPI schema and its UIs are served from
``/api/schema/``, ``/api/docs/`` and ``/api/redoc/``.
"""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

from marketplace.api.views.health_views import healthcheck


urlpatterns = [
    path("admin/", admin.site.urls),
    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    # API endpoints
    path("api/health/", healthcheck, name="healthcheck"),
    path("api/auth/", include("authentication.urls")),
    path("api/marketplace/", include("marketplace.urls")),
]

# Serve media files (exports) during development
urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
