from __future__ import annotations

from datetime import datetime

from calendars.domain.oauth import CalendarProvider, PendingOAuthFlow
from calendars.ports.pending_flow_store import PendingOAuthFlowStorePort

SESSION_KEY = "oauth2-flows"


class DjangoSessionPendingOAuthFlowStore(PendingOAuthFlowStorePort):
    """
    Django 세션(signed cookie 엔진이면 브라우저에 저장됨)을 브라우저 단위 임시 저장소로 사용.

    세션에는 {state: {"provider": ..., "created_at": ISO-8601}} 형태의 JSON만 둡니다.
    """

    def __init__(self, session):
        self._session = session

    def save(self, flow: PendingOAuthFlow) -> None:
        flows = self._load()
        flows[flow.state] = {
            "provider": flow.provider.value,
            "created_at": flow.created_at.isoformat(),
        }
        self._store(flows)

    def pop(self, state: str) -> PendingOAuthFlow | None:
        flows = self._load()
        raw = flows.pop(state, None)
        if raw is None:
            return None
        self._store(flows)
        return _to_domain(state, raw)

    def purge_expired(self, *, now: datetime, ttl_seconds: int) -> int:
        flows = self._load()
        kept = {}
        for state, raw in flows.items():
            flow = _to_domain(state, raw)
            if flow is not None and not flow.is_expired(
                now=now, ttl_seconds=ttl_seconds
            ):
                kept[state] = raw
        removed = len(flows) - len(kept)
        if removed:
            self._store(kept)
        return removed

    def _load(self) -> dict:
        flows = self._session.get(SESSION_KEY)
        return dict(flows) if isinstance(flows, dict) else {}

    def _store(self, flows: dict) -> None:
        if flows:
            self._session[SESSION_KEY] = flows
        else:
            self._session.pop(SESSION_KEY, None)
        self._session.modified = True


def _to_domain(state: str, raw) -> PendingOAuthFlow | None:
    # 손상된 항목은 만료된 것으로 취급해 purge 대상이 되게 함
    try:
        return PendingOAuthFlow(
            state=state,
            provider=CalendarProvider(raw["provider"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
    except (KeyError, TypeError, ValueError):
        return None
