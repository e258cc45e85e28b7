from __future__ import annotations

import logging
from datetime import datetime, timezone

from calendars.domain.oauth import CalendarProvider, StoredCalendarToken
from calendars.ports.calendar_token_repo import CalendarTokenRepositoryPort
from common.application.result import Err, Ok, Result
from common.masking import mask_secrets

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN_SECONDS = 3600
# expires_at(epoch ms) 컬럼은 BigIntegerField
MAX_EXPIRES_AT_MS = 2**63 - 1


class StoreCalendarTokenUseCase:
    """
    캘린더 OAuth access token 저장 (토큰 저장 함수).

    - user_id는 인증 컨텍스트에서만 받습니다(바디의 값은 쓰지 않음)
    - (user, provider) 당 1건: 다시 연결하면 덮어씁니다
    """

    def __init__(self, *, token_repo: CalendarTokenRepositoryPort):
        self._token_repo = token_repo

    def execute(
        self,
        *,
        user_id: int | None,
        provider: str | None,
        access_token: str | None,
        scope: str | None = None,
        expires_in: str | int | None = None,
        now: datetime | None = None,
    ) -> Result[StoredCalendarToken]:
        if user_id is None:
            logger.info("calendar_token_store_unauthorized")
            return Err(
                code="UNAUTHORIZED",
                message="Unauthorized. Please log in to connect your calendar.",
            )

        if not provider or not access_token:
            return Err(
                code="VALIDATION_ERROR",
                message="Missing required fields: provider and accessToken",
            )

        if provider not in {p.value for p in CalendarProvider}:
            return Err(
                code="INVALID_PROVIDER",
                message=f"Unsupported calendar provider: {provider}",
            )

        expires_in_seconds = _parse_expires_in(expires_in)
        if expires_in_seconds is None:
            return Err(
                code="INVALID_EXPIRES_IN",
                message="expiresIn must be a non-negative integer (seconds)",
            )

        now = now or datetime.now(timezone.utc)
        expires_at_ms = int(now.timestamp() * 1000) + expires_in_seconds * 1000
        if expires_at_ms > MAX_EXPIRES_AT_MS:
            return Err(
                code="INVALID_EXPIRES_IN",
                message="expiresIn is out of range",
            )

        logger.info("calendar_token_store provider=%s user_id=%s", provider, user_id)
        try:
            stored = self._token_repo.upsert(
                user_id=int(user_id),
                provider=provider,
                access_token=access_token,
                scope=scope or "",
                expires_at_ms=expires_at_ms,
                connected_at=now,
            )
        except Exception as e:
            logger.error(
                "calendar_token_store_failed provider=%s user_id=%s reason=%s",
                provider,
                user_id,
                mask_secrets(str(e)),
            )
            return Err(
                code="STORE_FAILED",
                message="Failed to connect calendar. Please try again.",
            )
        return Ok(stored)


def _parse_expires_in(value: str | int | None) -> int | None:
    if value is None or value == "":
        return DEFAULT_EXPIRES_IN_SECONDS
    try:
        seconds = int(str(value).strip())
    except ValueError:
        return None
    if seconds < 0:
        return None
    return seconds


def acknowledgement_payload(stored: StoredCalendarToken) -> dict:
    return {
        "success": True,
        "message": f"{stored.provider} calendar connected successfully",
        "provider": stored.provider,
        "connectedAt": stored.connected_at.isoformat(),
    }
