from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from calendars.application.coordinator import OAuthRedirectCoordinator
from calendars.domain.errors import OAuthConfigurationError
from calendars.domain.oauth import (
    MICROSOFT_DEFAULT_TENANT,
    CalendarProvider,
    GoogleCalendarScopes,
    MicrosoftCalendarScopes,
)


@dataclass(frozen=True, slots=True)
class ProviderClientConfig:
    client_id: str | None = None
    redirect_uri: str | None = None
    tenant: str | None = None


class CalendarProviderHandler:
    provider: CalendarProvider
    name: str
    description: str
    scopes: tuple[str, ...] = ()
    client_id_setting: str

    def __init__(
        self,
        *,
        coordinator: OAuthRedirectCoordinator,
        config: ProviderClientConfig,
        origin: str,
    ):
        self._coordinator = coordinator
        self._config = config
        self._origin = origin.rstrip("/")

    def is_configured(self) -> bool:
        return bool((self._config.client_id or "").strip())

    def get_config_error(self) -> str:
        return (
            f"{self.name} integration is not configured. "
            f"Please set {self.client_id_setting} in your environment."
        )

    @property
    def redirect_uri(self) -> str:
        return (
            self._config.redirect_uri
            or f"{self._origin}/oauth/{self.provider.value}/callback"
        )

    def initiate_oauth(self) -> str:
        """플로우를 시작하고 이동한 authorization URL을 반환합니다."""
        if not self.is_configured():
            # 호출자가 is_configured()를 먼저 확인하는 것이 정상 경로
            raise OAuthConfigurationError(f"{self.name} client id not configured")
        return self._coordinator.begin_flow(
            provider=self.provider,
            client_id=self._config.client_id,
            redirect_uri=self.redirect_uri,
            scopes=self.scopes,
            tenant=self._tenant(),
        )

    def _tenant(self) -> str | None:
        return None


class GoogleCalendarProviderHandler(CalendarProviderHandler):
    provider = CalendarProvider.GOOGLE
    name = "Google Calendar"
    description = "Sync events from your Google Calendar"
    scopes = (GoogleCalendarScopes.READONLY, GoogleCalendarScopes.EVENTS)
    client_id_setting = "GOOGLE_CALENDAR_CLIENT_ID"


class MicrosoftCalendarProviderHandler(CalendarProviderHandler):
    provider = CalendarProvider.MICROSOFT
    name = "Microsoft Outlook"
    description = "Connect your Outlook/Office 365 calendar"
    scopes = (
        MicrosoftCalendarScopes.CALENDARS_READ,
        MicrosoftCalendarScopes.CALENDARS_READWRITE,
        MicrosoftCalendarScopes.USER_READ,
        MicrosoftCalendarScopes.OFFLINE_ACCESS,
    )
    client_id_setting = "MICROSOFT_CALENDAR_CLIENT_ID"

    def _tenant(self) -> str | None:
        return self._config.tenant or MICROSOFT_DEFAULT_TENANT


_HANDLERS: dict[CalendarProvider, type[CalendarProviderHandler]] = {
    CalendarProvider.GOOGLE: GoogleCalendarProviderHandler,
    CalendarProvider.MICROSOFT: MicrosoftCalendarProviderHandler,
}


def create_calendar_provider_handler(
    provider: str | CalendarProvider,
    *,
    coordinator: OAuthRedirectCoordinator,
    configs: Mapping[CalendarProvider, ProviderClientConfig],
    origin: str,
) -> CalendarProviderHandler:
    """provider 식별자로 핸들러를 고릅니다. 모르는 값이면 UnknownCalendarProviderError."""
    key = CalendarProvider.parse(provider)
    handler_cls = _HANDLERS[key]
    return handler_cls(
        coordinator=coordinator,
        config=configs.get(key) or ProviderClientConfig(),
        origin=origin,
    )


def list_calendar_providers(
    *,
    coordinator: OAuthRedirectCoordinator,
    configs: Mapping[CalendarProvider, ProviderClientConfig],
    origin: str,
) -> list[CalendarProviderHandler]:
    return [
        create_calendar_provider_handler(
            provider, coordinator=coordinator, configs=configs, origin=origin
        )
        for provider in CalendarProvider
    ]
