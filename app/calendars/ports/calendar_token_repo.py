from __future__ import annotations

from datetime import datetime
from typing import Protocol

from calendars.domain.oauth import StoredCalendarToken


class CalendarTokenRepositoryPort(Protocol):
    def upsert(
        self,
        *,
        user_id: int,
        provider: str,
        access_token: str,
        scope: str,
        expires_at_ms: int,
        connected_at: datetime,
    ) -> StoredCalendarToken: ...

    def list_for_user(self, *, user_id: int) -> list[StoredCalendarToken]: ...
