from calendars.views import (
    CalendarConnectionListView,
    CalendarOAuthCallbackView,
    CalendarOAuthStartView,
    CalendarProviderListView,
    CalendarTokenView,
)
from django.urls import path

urlpatterns = [
    path("providers/", CalendarProviderListView.as_view(), name="calendar_providers"),
    path(
        "oauth/callback/",
        CalendarOAuthCallbackView.as_view(),
        name="calendar_oauth_callback",
    ),
    path(
        "oauth/<str:provider>/start/",
        CalendarOAuthStartView.as_view(),
        name="calendar_oauth_start",
    ),
    path("tokens/", CalendarTokenView.as_view(), name="calendar_tokens"),
    path(
        "connections/",
        CalendarConnectionListView.as_view(),
        name="calendar_connections",
    ),
]
