from __future__ import annotations

import logging
from dataclasses import dataclass

from calendars.application.coordinator import OAuthRedirectCoordinator
from calendars.domain.errors import TokenSubmissionError
from calendars.domain.oauth import TokenSubmission
from calendars.ports.token_submission_client import TokenSubmissionClientPort
from common.application.result import Err
from common.masking import mask_secrets

logger = logging.getLogger(__name__)

STATUS_IDLE = "idle"
STATUS_SUCCESS = "success"
STATUS_ERROR = "error"

DEFAULT_EXPIRES_IN = "3600"


@dataclass(frozen=True, slots=True)
class CallbackOutcome:
    status: str
    message: str = ""
    error_code: str | None = None
    provider: str | None = None
    redirect_to: str | None = None
    redirect_after_ms: int | None = None
    acknowledgement: dict | None = None


class CompleteCalendarOAuthCallbackUseCase:
    """
    콜백 페이지 로드 시 1회 실행되는 완료 흐름.

    parse -> state 검증 -> provider 에러/응답 형식 확인 -> 토큰 저장 -> 이동 예약.
    어떤 실패든 사용자는 결국 authenticated_path 로 돌아갑니다.
    """

    def __init__(
        self,
        *,
        coordinator: OAuthRedirectCoordinator,
        token_submission_client: TokenSubmissionClientPort,
        authenticated_path: str = "/calendar",
        success_delay_ms: int = 1000,
        failure_delay_ms: int = 3000,
    ):
        self._coordinator = coordinator
        self._client = token_submission_client
        self._authenticated_path = authenticated_path
        self._success_delay_ms = success_delay_ms
        self._failure_delay_ms = failure_delay_ms

    def execute(self, *, fragment: str | None) -> CallbackOutcome:
        verified = self._coordinator.complete_flow(fragment)
        if isinstance(verified, Err):
            return self._failed(code=verified.code, message=verified.message)

        response = verified.value
        if response is None:
            return CallbackOutcome(status=STATUS_IDLE)

        provider = response.provider.value
        if response.error:
            logger.info(
                "calendar_oauth_provider_error provider=%s error=%s",
                provider,
                mask_secrets(response.error),
            )
            return self._failed(
                code="PROVIDER_ERROR",
                message=response.error_message or response.error,
                provider=provider,
            )

        if not response.access_token:
            return self._failed(
                code="MALFORMED_RESPONSE",
                message="Access token not found in OAuth response",
                provider=provider,
            )

        submission = TokenSubmission(
            provider=provider,
            access_token=response.access_token,
            scope=response.params.get("scope") or "",
            expires_in=response.params.get("expires_in") or DEFAULT_EXPIRES_IN,
        )
        try:
            acknowledgement = self._client.submit(submission)
        except TokenSubmissionError as e:
            logger.warning(
                "calendar_token_submission_failed provider=%s code=%s reason=%s",
                provider,
                e.code,
                mask_secrets(str(e)),
            )
            return self._failed(
                code="SUBMISSION_FAILED",
                message="Failed to connect calendar. Please try again.",
                provider=provider,
            )

        logger.info("calendar_oauth_connected provider=%s", provider)
        return CallbackOutcome(
            status=STATUS_SUCCESS,
            message="Calendar connected successfully!",
            provider=provider,
            redirect_to=self._authenticated_path,
            redirect_after_ms=self._success_delay_ms,
            acknowledgement=acknowledgement,
        )

    def _failed(
        self, *, code: str, message: str, provider: str | None = None
    ) -> CallbackOutcome:
        return CallbackOutcome(
            status=STATUS_ERROR,
            message=message,
            error_code=code,
            provider=provider,
            redirect_to=self._authenticated_path,
            redirect_after_ms=self._failure_delay_ms,
        )
