from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

from calendars.domain.authorization_url import build_authorization_url
from calendars.domain.fragment import parse_fragment
from calendars.domain.oauth import (
    AuthorizationRequest,
    CalendarProvider,
    CallbackResponse,
    PendingOAuthFlow,
)
from calendars.domain.oauth_state import generate_state
from calendars.ports.navigator import NavigatorPort
from calendars.ports.pending_flow_store import PendingOAuthFlowStorePort
from common.application.result import Err, Ok, Result
from common.masking import short_hash

logger = logging.getLogger(__name__)


class OAuthRedirectCoordinator:
    """
    authorization URL 생성과 브라우저 이동을 묶고, 돌아온 콜백의 state를 대조합니다.

    - begin_flow: state 생성 -> URL 생성 -> 진행 중 플로우 저장 -> 이동
    - complete_flow: fragment 파싱 -> state 대조(1회 소비, TTL 검사)
    """

    def __init__(
        self,
        *,
        flow_store: PendingOAuthFlowStorePort,
        navigator: NavigatorPort,
        state_ttl_seconds: int,
    ):
        self._flow_store = flow_store
        self._navigator = navigator
        self._state_ttl_seconds = state_ttl_seconds

    def begin_flow(
        self,
        *,
        provider: CalendarProvider,
        client_id: str | None,
        redirect_uri: str,
        scopes: Sequence[str],
        tenant: str | None = None,
        now: datetime | None = None,
    ) -> str:
        now = now or datetime.now(timezone.utc)
        self._flow_store.purge_expired(now=now, ttl_seconds=self._state_ttl_seconds)

        state = generate_state()
        # Microsoft nonce는 URL에만 실리고 저장/검증하지 않습니다(응답에 id_token이 없음).
        nonce = generate_state() if provider is CalendarProvider.MICROSOFT else None
        url = build_authorization_url(
            AuthorizationRequest(
                provider=provider,
                client_id=client_id,
                redirect_uri=redirect_uri,
                scopes=tuple(scopes),
                state=state,
                tenant=tenant,
                nonce=nonce,
            )
        )

        self._flow_store.save(
            PendingOAuthFlow(state=state, provider=provider, created_at=now)
        )
        logger.info(
            "calendar_oauth_flow_started provider=%s state_hash=%s",
            provider.value,
            short_hash(state),
        )
        self._navigator.navigate(url)
        return url

    def complete_flow(
        self, fragment: str | None, *, now: datetime | None = None
    ) -> Result[CallbackResponse | None]:
        """
        콜백 fragment를 검증합니다.

        - state 없음: Ok(None) (일반 페이지 로드)
        - 저장된 state와 불일치: Err(STATE_MISMATCH), 다른 진행 중 플로우는 건드리지 않음
        - 만료: 해당 플로우 삭제 후 Err(STATE_EXPIRED)
        - 일치: 해당 플로우 삭제 후 Ok(CallbackResponse)
        """
        params = parse_fragment(fragment)
        state = params.get("state")
        if not state:
            return Ok(None)

        now = now or datetime.now(timezone.utc)
        flow = self._flow_store.pop(state)
        if flow is None:
            logger.warning(
                "calendar_oauth_state_mismatch state_hash=%s possible_csrf=true",
                short_hash(state),
            )
            return Err(
                code="STATE_MISMATCH",
                message="OAuth response could not be verified",
            )

        if flow.is_expired(now=now, ttl_seconds=self._state_ttl_seconds):
            logger.warning(
                "calendar_oauth_state_expired provider=%s state_hash=%s",
                flow.provider.value,
                short_hash(state),
            )
            return Err(code="STATE_EXPIRED", message="OAuth request has expired")

        self._flow_store.purge_expired(now=now, ttl_seconds=self._state_ttl_seconds)
        return Ok(CallbackResponse(provider=flow.provider, params=params))
