"""
URL configuration for handles app.

URL structure:
    /api/v1/handles/availability/?handle=  - Is a handle free (GET)
    /api/v1/handles/claim/                 - Claim first handle (POST)
    /api/v1/handles/change/                - Change handle (POST)
    /api/v1/handles/suggest/?display_name= - Suggest a free handle (GET)
    /api/v1/handles/lookup/<handle>/       - Handle to account (GET)
    /api/v1/handles/search/?q=             - Search by handle or email (GET)
"""

from django.urls import path

from handles.views import (
    AccountSearchView,
    HandleAvailabilityView,
    HandleChangeView,
    HandleClaimView,
    HandleLookupView,
    HandleSuggestView,
)

app_name = "handles"

urlpatterns = [
    path("availability/", HandleAvailabilityView.as_view(), name="availability"),
    path("claim/", HandleClaimView.as_view(), name="claim"),
    path("change/", HandleChangeView.as_view(), name="change"),
    path("suggest/", HandleSuggestView.as_view(), name="suggest"),
    path("lookup/<str:handle>/", HandleLookupView.as_view(), name="lookup"),
    path("search/", AccountSearchView.as_view(), name="search"),
]
