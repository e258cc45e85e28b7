from __future__ import annotations

from datetime import datetime

from calendars.domain.oauth import StoredCalendarToken
from calendars.models import CalendarConnection
from calendars.ports.calendar_token_repo import CalendarTokenRepositoryPort
from django.utils import timezone


class DjangoCalendarTokenRepository(CalendarTokenRepositoryPort):
    def upsert(
        self,
        *,
        user_id: int,
        provider: str,
        access_token: str,
        scope: str,
        expires_at_ms: int,
        connected_at: datetime,
    ) -> StoredCalendarToken:
        if timezone.is_naive(connected_at):
            connected_at = timezone.make_aware(connected_at)

        # (user, provider) 유니크 제약 + update_or_create(내부적으로 select_for_update)로 upsert
        obj, _ = CalendarConnection.objects.update_or_create(
            user_id=user_id,
            provider=provider,
            defaults={
                "access_token": access_token,
                "scope": scope,
                "expires_at": expires_at_ms,
                "connected_at": connected_at,
            },
        )
        return _to_domain(obj)

    def list_for_user(self, *, user_id: int) -> list[StoredCalendarToken]:
        return [
            _to_domain(obj)
            for obj in CalendarConnection.objects.filter(user_id=user_id)
        ]


def _to_domain(obj: CalendarConnection) -> StoredCalendarToken:
    return StoredCalendarToken(
        user_id=int(obj.user_id),
        provider=obj.provider,
        scope=obj.scope,
        expires_at_ms=int(obj.expires_at),
        connected_at=obj.connected_at,
    )
