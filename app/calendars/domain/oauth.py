from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

from calendars.domain.errors import UnknownCalendarProviderError


class CalendarProvider(str, Enum):
    GOOGLE = "google"
    MICROSOFT = "microsoft"

    @classmethod
    def parse(cls, value: "str | CalendarProvider") -> "CalendarProvider":
        try:
            return cls(value)
        except ValueError as e:
            raise UnknownCalendarProviderError(value) from e


GOOGLE_AUTHORIZATION_ENDPOINT = "https://accounts.google.com/o/oauth2/v2/auth"
MICROSOFT_AUTHORIZATION_ENDPOINT = (
    "https://login.microsoftonline.com/{tenant}/oauth2/v2.0/authorize"
)
MICROSOFT_DEFAULT_TENANT = "common"


class GoogleCalendarScopes:
    # https://developers.google.com/identity/protocols/oauth2/scopes#calendar
    READONLY = "https://www.googleapis.com/auth/calendar.readonly"
    FULL = "https://www.googleapis.com/auth/calendar"
    EVENTS = "https://www.googleapis.com/auth/calendar.events"
    EVENTS_READONLY = "https://www.googleapis.com/auth/calendar.events.readonly"


class MicrosoftCalendarScopes:
    # https://learn.microsoft.com/en-us/graph/permissions-reference
    CALENDARS_READ = "Calendars.Read"
    CALENDARS_READWRITE = "Calendars.ReadWrite"
    CALENDARS_READ_SHARED = "Calendars.Read.Shared"
    CALENDARS_READWRITE_SHARED = "Calendars.ReadWrite.Shared"
    OFFLINE_ACCESS = "offline_access"
    USER_READ = "User.Read"


@dataclass(frozen=True, slots=True)
class AuthorizationRequest:
    provider: CalendarProvider
    client_id: str | None
    redirect_uri: str
    scopes: tuple[str, ...]
    state: str
    tenant: str | None = None
    nonce: str | None = None


@dataclass(frozen=True, slots=True)
class PendingOAuthFlow:
    """
    리다이렉트 직전에 브라우저 단위 임시 저장소에 남겨두는 진행 중 플로우.

    state 자체를 키로 쓰므로 여러 탭에서 동시에 시작한 플로우가 서로를 덮어쓰지 않습니다.
    """

    state: str
    provider: CalendarProvider
    created_at: datetime

    def is_expired(self, *, now: datetime, ttl_seconds: int) -> bool:
        return self.created_at + timedelta(seconds=max(1, int(ttl_seconds))) <= now


@dataclass(frozen=True, slots=True)
class CallbackResponse:
    provider: CalendarProvider
    params: dict[str, str] = field(default_factory=dict)

    @property
    def access_token(self) -> str | None:
        return self.params.get("access_token") or None

    @property
    def error(self) -> str | None:
        return self.params.get("error") or None

    @property
    def error_message(self) -> str | None:
        if not self.error:
            return None
        return self.params.get("error_description") or self.error


@dataclass(frozen=True, slots=True)
class TokenSubmission:
    provider: str
    access_token: str
    scope: str
    expires_in: str

    def to_payload(self) -> dict[str, str]:
        return {
            "provider": self.provider,
            "accessToken": self.access_token,
            "scope": self.scope,
            "expiresIn": self.expires_in,
        }


@dataclass(frozen=True, slots=True)
class StoredCalendarToken:
    user_id: int
    provider: str
    scope: str
    expires_at_ms: int
    connected_at: datetime
