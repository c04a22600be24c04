"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Authentication endpoints
        token/                     - Obtain JWT pair
        token/refresh/             - Refresh access token
        register/                  - Create account + first handle
        profile/                   - Current user's profile (GET/PATCH)
        password/change/           - Change password
    /api/v1/handles/               - Handle endpoints
        availability/              - Is a handle free
        claim/                     - Claim first handle
        change/                    - Change handle (cooldown enforced)
        suggest/                   - Suggest a free handle
        lookup/{handle}/           - Resolve handle to account
        search/                    - Search by handle or email

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Authentication (JWT, registration, profile)
    path("auth/", include("authentication.urls")),
    # Handles
    path("handles/", include("handles.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Handle Registry Admin"
admin.site.site_title = "Handle Registry"
admin.site.index_title = "Accounts and handles"
