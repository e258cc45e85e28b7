from __future__ import annotations

import logging

from calendars.application.container import (
    authenticated_path,
    build_calendar_token_repo,
    build_complete_oauth_callback_usecase,
    build_provider_handler,
    build_provider_handlers,
    build_store_calendar_token_usecase,
    failure_delay_ms,
    is_calendar_oauth_enabled,
    login_redirect_path,
)
from calendars.application.usecases.complete_oauth_callback import (
    STATUS_ERROR,
    CallbackOutcome,
)
from calendars.application.usecases.store_calendar_token import (
    acknowledgement_payload,
)
from calendars.domain.errors import (
    OAuthConfigurationError,
    UnknownCalendarProviderError,
)
from calendars.ports.navigator import NavigatorPort
from common.application.result import Err, Ok, Result

logger = logging.getLogger(__name__)

_FEATURE_DISABLED = Err(code="FEATURE_DISABLED", message="Calendar OAuth is disabled")


class CalendarOAuthService:
    @staticmethod
    def list_providers(*, request) -> list[dict]:
        return [
            {
                "id": handler.provider.value,
                "name": handler.name,
                "description": handler.description,
                "configured": handler.is_configured(),
                "config_error": (
                    None if handler.is_configured() else handler.get_config_error()
                ),
            }
            for handler in build_provider_handlers(request=request)
        ]

    @staticmethod
    def start_oauth(
        *, request, provider: str, navigator: NavigatorPort
    ) -> Result[dict]:
        """
        "Connect" 버튼 처리.

        - 미설정 provider는 리다이렉트 없이 설정 안내 메시지로 실패
        - 성공 시 navigator 가 authorization URL 로 이동할 준비가 된 상태
        """
        if not is_calendar_oauth_enabled():
            return _FEATURE_DISABLED
        try:
            handler = build_provider_handler(
                provider, request=request, navigator=navigator
            )
        except UnknownCalendarProviderError as e:
            return Err(code="UNKNOWN_PROVIDER", message=str(e))

        if not handler.is_configured():
            logger.info(
                "calendar_oauth_not_configured provider=%s", handler.provider.value
            )
            return Err(code="CONFIG_MISSING", message=handler.get_config_error())

        try:
            authorization_url = handler.initiate_oauth()
        except OAuthConfigurationError as e:
            logger.error(
                "calendar_oauth_initiate_failed provider=%s reason=%s",
                handler.provider.value,
                e,
            )
            return Err(
                code="CONFIG_MISSING",
                message=f"Failed to connect to {handler.name}. Please try again.",
            )
        return Ok(
            {
                "provider": handler.provider.value,
                "authorization_url": authorization_url,
            }
        )

    @staticmethod
    def complete_oauth(*, request, fragment: str | None) -> Result[CallbackOutcome]:
        if not is_calendar_oauth_enabled():
            return _FEATURE_DISABLED
        usecase = build_complete_oauth_callback_usecase(request=request)
        return Ok(usecase.execute(fragment=fragment))

    @staticmethod
    def callback_page_context(*, provider: str) -> dict:
        # API 응답을 해석하지 못한 경우 페이지 스크립트가 쓰는 이동 경로/지연
        return {
            "provider": provider,
            "fallback_path": authenticated_path(),
            "fallback_delay_ms": failure_delay_ms(),
        }

    @staticmethod
    def unauthenticated_callback() -> CallbackOutcome:
        """
        로그인 세션이 없거나 만료된 채 콜백 페이지가 호출된 경우.
        진행 중 플로우는 건드리지 않고(TTL 로 정리됨) 로그인 화면으로 돌려보냅니다.
        """
        logger.info("calendar_oauth_callback_unauthenticated")
        return CallbackOutcome(
            status=STATUS_ERROR,
            message="Your session has expired. Please log in and connect your calendar again.",
            error_code="UNAUTHORIZED",
            redirect_to=login_redirect_path(),
            redirect_after_ms=failure_delay_ms(),
        )

    @staticmethod
    def store_token(*, user_id: int | None, data: dict) -> Result[dict]:
        usecase = build_store_calendar_token_usecase()
        result = usecase.execute(
            user_id=user_id,
            provider=data.get("provider"),
            access_token=data.get("accessToken"),
            scope=data.get("scope"),
            expires_in=data.get("expiresIn"),
        )
        if isinstance(result, Err):
            return result
        return Ok(acknowledgement_payload(result.value))

    @staticmethod
    def list_connections(*, user_id: int) -> list[dict]:
        return [
            {
                "provider": token.provider,
                "scope": token.scope,
                "expiresAt": token.expires_at_ms,
                "connectedAt": token.connected_at.isoformat(),
            }
            for token in build_calendar_token_repo().list_for_user(user_id=user_id)
        ]
