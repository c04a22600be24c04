"""
Handle views.

This module provides API views for:
- Checking whether a handle is free
- Claiming a first handle and changing it later (with cooldown)
- Suggesting a free handle from a display name
- Resolving a handle to its account, and searching accounts

Related files:
    - serializers.py: Request/response serialization
    - services.py: HandleReservationService
    - urls.py: URL routing

Note:
    Service errors (core.exceptions subclasses) are returned as
    ``{"error", "error_code", "details"}`` with the status the error class
    declares: 400 invalid format, 404 unknown handle, 409 taken, 429
    cooldown, 503 storage.
"""

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import BaseApplicationError, NotFoundError
from handles.serializers import (
    HandleAvailabilitySerializer,
    HandleChangeSerializer,
    HandleInputSerializer,
    HandleLookupSerializer,
    HandleSuggestionSerializer,
    PublicProfileSerializer,
)
from handles.services import HandleReservationService
from handles.validators import normalize_handle


def error_response(exc: BaseApplicationError) -> Response:
    """Render a service error with the status its class declares."""
    return Response(exc.to_dict(), status=exc.http_status)


# =============================================================================
# Availability & Lookup
# =============================================================================


class HandleAvailabilityView(APIView):
    """
    API view for checking a handle.

    GET: Whether the handle can be claimed by the current user

    URL: /api/v1/handles/availability/?handle=alice

    Advisory only; a later claim may still lose to a concurrent caller.
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Check handle availability",
        tags=["Handles"],
        parameters=[
            OpenApiParameter("handle", str, required=True, description="Handle to check"),
        ],
        responses={
            200: HandleAvailabilitySerializer,
            400: OpenApiResponse(description="Invalid handle format"),
        },
    )
    def get(self, request):
        raw = request.query_params.get("handle", "")
        account_id = request.user.pk if request.user.is_authenticated else None

        try:
            available = HandleReservationService.is_available(raw, account_id)
        except BaseApplicationError as e:
            return error_response(e)

        return Response({"handle": normalize_handle(raw), "available": available})


class HandleLookupView(APIView):
    """
    API view for resolving a handle.

    GET: The account owning the handle

    URL: /api/v1/handles/lookup/<handle>/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Resolve a handle to its account",
        tags=["Handles"],
        responses={
            200: HandleLookupSerializer,
            404: OpenApiResponse(description="No account holds this handle"),
        },
    )
    def get(self, request, handle):
        handle = normalize_handle(handle)
        account_id = HandleReservationService.lookup_account_by_handle(handle)
        if account_id is None:
            return error_response(
                NotFoundError(
                    "Handle not found",
                    error_code="HANDLE_NOT_FOUND",
                    details={"handle": handle},
                )
            )
        return Response({"handle": handle, "account_id": account_id})


class HandleSuggestView(APIView):
    """
    API view for generating a free handle.

    GET: A free handle derived from a display name

    URL: /api/v1/handles/suggest/?display_name=Jane%20Doe
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="Suggest a free handle",
        tags=["Handles"],
        parameters=[
            OpenApiParameter("display_name", str, required=False),
        ],
        responses={200: HandleSuggestionSerializer},
    )
    def get(self, request):
        display_name = request.query_params.get("display_name", "")
        try:
            handle = HandleReservationService.suggest_handle(display_name)
        except BaseApplicationError as e:
            return error_response(e)
        return Response({"handle": handle})


class AccountSearchView(APIView):
    """
    API view for finding people by handle or exact email.

    GET: Matching public profiles, excluding the caller

    URL: /api/v1/handles/search/?q=@ali
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Search accounts",
        description=(
            "Exact email match for inputs that look like an email; otherwise "
            "exact handle first, then handle prefix matches."
        ),
        tags=["Handles"],
        parameters=[
            OpenApiParameter("q", str, required=True, description="Handle or email"),
        ],
        responses={200: PublicProfileSerializer(many=True)},
    )
    def get(self, request):
        profiles = HandleReservationService.search_accounts(
            request.query_params.get("q", ""),
            exclude_account_id=request.user.pk,
        )
        return Response(PublicProfileSerializer(profiles, many=True).data)


# =============================================================================
# Claim & Change
# =============================================================================


class HandleClaimView(APIView):
    """
    API view for claiming a first handle.

    POST: Reserve a handle for the current user

    URL: /api/v1/handles/claim/

    Request body:
        {
            "handle": "alice"
        }
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Claim a handle",
        tags=["Handles"],
        request=HandleInputSerializer,
        responses={
            200: PublicProfileSerializer,
            400: OpenApiResponse(description="Invalid handle format"),
            409: OpenApiResponse(description="Handle taken, or account already has one"),
            503: OpenApiResponse(description="Storage unavailable, retry later"),
        },
    )
    def post(self, request):
        serializer = HandleInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            profile = HandleReservationService.reserve_initial(
                request.user.pk, serializer.validated_data["handle"]
            )
        except BaseApplicationError as e:
            return error_response(e)

        return Response(PublicProfileSerializer(profile).data)


class HandleChangeView(APIView):
    """
    API view for changing the current user's handle.

    POST: Move to a new handle (at most once per cooldown period)

    URL: /api/v1/handles/change/

    Request body:
        {
            "handle": "alice2"
        }

    Returns 429 with details.days_remaining while the cooldown is active.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Change handle",
        tags=["Handles"],
        request=HandleChangeSerializer,
        responses={
            200: PublicProfileSerializer,
            400: OpenApiResponse(description="Invalid handle format"),
            409: OpenApiResponse(description="Handle taken"),
            429: OpenApiResponse(description="Cooldown active"),
            503: OpenApiResponse(description="Storage unavailable, retry later"),
        },
    )
    def post(self, request):
        serializer = HandleChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            profile = HandleReservationService.reserve_change(
                request.user.pk,
                serializer.validated_data["handle"],
                old_handle=serializer.validated_data.get("old_handle") or None,
            )
        except BaseApplicationError as e:
            return error_response(e)

        return Response(PublicProfileSerializer(profile).data)
