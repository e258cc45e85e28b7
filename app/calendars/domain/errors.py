from __future__ import annotations


class CalendarOAuthError(Exception):
    """캘린더 OAuth 연결 흐름에서 발생하는 예외의 공통 부모."""


class OAuthConfigurationError(CalendarOAuthError):
    """client_id 등 필수 설정이 비어 있어 리다이렉트를 시작할 수 없음."""


class UnknownCalendarProviderError(CalendarOAuthError, ValueError):
    def __init__(self, provider: object):
        super().__init__(f"Unknown calendar provider: {provider}")
        self.provider = provider


class TokenSubmissionError(CalendarOAuthError):
    """토큰 저장 함수 호출 실패. 재시도는 호출자가 결정합니다."""

    def __init__(self, message: str, *, code: str = "SUBMISSION_FAILED"):
        super().__init__(message)
        self.code = code
