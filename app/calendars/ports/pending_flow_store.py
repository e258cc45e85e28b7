from __future__ import annotations

from datetime import datetime
from typing import Protocol

from calendars.domain.oauth import PendingOAuthFlow


class PendingOAuthFlowStorePort(Protocol):
    """브라우저 단위 임시 저장소 (state -> PendingOAuthFlow)."""

    def save(self, flow: PendingOAuthFlow) -> None: ...

    def pop(self, state: str) -> PendingOAuthFlow | None:
        """state에 해당하는 플로우를 꺼내면서 삭제합니다(1회용)."""
        ...

    def purge_expired(self, *, now: datetime, ttl_seconds: int) -> int: ...
