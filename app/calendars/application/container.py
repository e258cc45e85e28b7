from __future__ import annotations

from urllib.parse import urlencode

from calendars.adapters.django_calendar_token_repo import DjangoCalendarTokenRepository
from calendars.adapters.functions_http_client import CalendarFunctionsHttpClient
from calendars.adapters.in_process_token_submission_client import (
    InProcessTokenSubmissionClient,
)
from calendars.adapters.redirect_navigator import HttpRedirectNavigator
from calendars.adapters.session_pending_flow_store import (
    DjangoSessionPendingOAuthFlowStore,
)
from calendars.application.coordinator import OAuthRedirectCoordinator
from calendars.application.providers import (
    CalendarProviderHandler,
    ProviderClientConfig,
    create_calendar_provider_handler,
    list_calendar_providers,
)
from calendars.application.usecases.complete_oauth_callback import (
    CompleteCalendarOAuthCallbackUseCase,
)
from calendars.application.usecases.store_calendar_token import (
    StoreCalendarTokenUseCase,
)
from calendars.domain.oauth import CalendarProvider
from calendars.ports.calendar_token_repo import CalendarTokenRepositoryPort
from calendars.ports.navigator import NavigatorPort
from calendars.ports.token_submission_client import TokenSubmissionClientPort
from django.conf import settings


def is_calendar_oauth_enabled() -> bool:
    return bool(getattr(settings, "CALENDAR_OAUTH_ENABLED", True))


def _provider_configs() -> dict[CalendarProvider, ProviderClientConfig]:
    return {
        CalendarProvider.GOOGLE: ProviderClientConfig(
            client_id=getattr(settings, "GOOGLE_CALENDAR_CLIENT_ID", None),
            redirect_uri=getattr(settings, "GOOGLE_CALENDAR_REDIRECT_URI", None),
        ),
        CalendarProvider.MICROSOFT: ProviderClientConfig(
            client_id=getattr(settings, "MICROSOFT_CALENDAR_CLIENT_ID", None),
            redirect_uri=getattr(settings, "MICROSOFT_CALENDAR_REDIRECT_URI", None),
            tenant=getattr(settings, "MICROSOFT_CALENDAR_TENANT", None),
        ),
    }


def build_oauth_coordinator(
    *, request, navigator: NavigatorPort | None = None
) -> OAuthRedirectCoordinator:
    return OAuthRedirectCoordinator(
        flow_store=DjangoSessionPendingOAuthFlowStore(request.session),
        navigator=navigator or HttpRedirectNavigator(),
        state_ttl_seconds=getattr(settings, "CALENDAR_OAUTH_STATE_TTL_SECONDS", 600),
    )


def build_provider_handler(
    provider: str, *, request, navigator: NavigatorPort
) -> CalendarProviderHandler:
    return create_calendar_provider_handler(
        provider,
        coordinator=build_oauth_coordinator(request=request, navigator=navigator),
        configs=_provider_configs(),
        origin=request.build_absolute_uri("/"),
    )


def build_provider_handlers(*, request) -> list[CalendarProviderHandler]:
    return list_calendar_providers(
        coordinator=build_oauth_coordinator(request=request),
        configs=_provider_configs(),
        origin=request.build_absolute_uri("/"),
    )


def build_calendar_token_repo() -> CalendarTokenRepositoryPort:
    return DjangoCalendarTokenRepository()


def build_store_calendar_token_usecase() -> StoreCalendarTokenUseCase:
    return StoreCalendarTokenUseCase(token_repo=build_calendar_token_repo())


def build_token_submission_client(*, request) -> TokenSubmissionClientPort:
    endpoint = getattr(settings, "CALENDAR_TOKEN_FUNCTION_URL", None)
    if endpoint:
        auth_headers = {}
        if request.META.get("HTTP_AUTHORIZATION"):
            auth_headers["Authorization"] = request.META["HTTP_AUTHORIZATION"]
        if request.META.get("HTTP_COOKIE"):
            auth_headers["Cookie"] = request.META["HTTP_COOKIE"]
        return CalendarFunctionsHttpClient(
            endpoint=endpoint,
            timeout_seconds=getattr(
                settings, "CALENDAR_TOKEN_FUNCTION_TIMEOUT_SECONDS", 10
            ),
            auth_headers=auth_headers,
        )

    user = getattr(request, "user", None)
    user_id = user.pk if user is not None and user.is_authenticated else None
    return InProcessTokenSubmissionClient(
        usecase=build_store_calendar_token_usecase(), user_id=user_id
    )


def authenticated_path() -> str:
    return getattr(settings, "CALENDAR_AUTHENTICATED_PATH", "/calendar")


def failure_delay_ms() -> int:
    return getattr(settings, "CALENDAR_OAUTH_FAILURE_DELAY_MS", 3000)


def login_redirect_path() -> str:
    """로그인 후 캘린더 화면으로 돌아오도록 next 를 붙인 로그인 경로."""
    query = urlencode({"next": authenticated_path()})
    return f"{settings.LOGIN_URL}?{query}"


def build_complete_oauth_callback_usecase(
    *, request
) -> CompleteCalendarOAuthCallbackUseCase:
    return CompleteCalendarOAuthCallbackUseCase(
        coordinator=build_oauth_coordinator(request=request),
        token_submission_client=build_token_submission_client(request=request),
        authenticated_path=authenticated_path(),
        success_delay_ms=getattr(settings, "CALENDAR_OAUTH_SUCCESS_DELAY_MS", 1000),
        failure_delay_ms=failure_delay_ms(),
    )
