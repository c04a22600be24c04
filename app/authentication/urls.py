"""
URL configuration for authentication app.

URL structure:
    /api/v1/auth/token/             - Obtain JWT pair (email + password)
    /api/v1/auth/token/refresh/     - Refresh access token
    /api/v1/auth/register/          - Create account + first handle
    /api/v1/auth/profile/           - Profile (GET/PATCH)
    /api/v1/auth/password/change/   - Password change
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from authentication.views import ChangePasswordView, ProfileView, RegisterView

app_name = "authentication"

urlpatterns = [
    # JWT
    path("token/", TokenObtainPairView.as_view(), name="token-obtain"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    # Account
    path("register/", RegisterView.as_view(), name="register"),
    path("profile/", ProfileView.as_view(), name="profile"),
    path("password/change/", ChangePasswordView.as_view(), name="password-change"),
]
