"""
Authentication views.

This module provides API views for:
- Registration (account + first handle in one step)
- Profile management (display name; handles live under /api/v1/handles/)
- Password change

Related files:
    - serializers.py: Request/response serialization
    - services.py: Business logic (AuthService)
    - urls.py: URL routing

Note:
    Login and token refresh are SimpleJWT views, wired in urls.py:
    - Login: /api/v1/auth/token/
    - Refresh: /api/v1/auth/token/refresh/
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import (
    PasswordChangeSerializer,
    ProfileSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    UserSerializer,
)
from authentication.services import AuthService
from core.exceptions import BaseApplicationError


class RegisterView(APIView):
    """
    API view for account registration.

    POST: Create an account and claim its first handle

    URL: /api/v1/auth/register/

    Request body:
        {
            "email": "alice@example.com",
            "password1": "...",
            "password2": "...",
            "display_name": "Alice",   // Optional
            "handle": "alice"          // Optional, suggested if omitted
        }
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Register",
        tags=["Auth"],
        request=RegisterSerializer,
        responses={
            201: UserSerializer,
            400: OpenApiResponse(description="Invalid input or handle format"),
            409: OpenApiResponse(description="Email or handle already taken"),
        },
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            user = AuthService.register(
                email=data["email"],
                password=data["password1"],
                display_name=data.get("display_name", ""),
                handle=data.get("handle") or None,
            )
        except BaseApplicationError as e:
            return Response(e.to_dict(), status=e.http_status)

        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


class ProfileView(APIView):
    """
    API view for user profile operations.

    GET: Retrieve current user's profile
    PATCH: Update display name

    URL: /api/v1/auth/profile/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get current user's profile",
        tags=["Auth - Profile"],
        responses={200: ProfileSerializer},
    )
    def get(self, request):
        profile = AuthService.get_or_create_profile(request.user)
        return Response(ProfileSerializer(profile).data)

    @extend_schema(
        summary="Partially update profile",
        description="Handles are changed via /api/v1/handles/change/.",
        tags=["Auth - Profile"],
        request=ProfileUpdateSerializer,
        responses={200: ProfileSerializer},
    )
    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        profile = AuthService.update_profile(request.user, **serializer.validated_data)
        return Response(ProfileSerializer(profile).data)


class ChangePasswordView(APIView):
    """
    API view for password change.

    POST: Replace the current user's password

    URL: /api/v1/auth/password/change/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Change password",
        tags=["Auth"],
        request=PasswordChangeSerializer,
    )
    def post(self, request):
        serializer = PasswordChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        success, message = AuthService.change_password(
            request.user,
            serializer.validated_data["old_password"],
            serializer.validated_data["new_password"],
        )

        if success:
            return Response({"detail": message})
        else:
            return Response({"detail": message}, status=status.HTTP_400_BAD_REQUEST)
