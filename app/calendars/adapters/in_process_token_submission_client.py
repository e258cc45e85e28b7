from __future__ import annotations

from calendars.application.usecases.store_calendar_token import (
    StoreCalendarTokenUseCase,
    acknowledgement_payload,
)
from calendars.domain.errors import TokenSubmissionError
from calendars.domain.oauth import TokenSubmission
from calendars.ports.token_submission_client import TokenSubmissionClientPort
from common.application.result import Err


class InProcessTokenSubmissionClient(TokenSubmissionClientPort):
    """같은 프로세스의 토큰 저장 유스케이스를 요청 사용자 신원으로 직접 호출합니다."""

    def __init__(self, *, usecase: StoreCalendarTokenUseCase, user_id: int | None):
        self._usecase = usecase
        self._user_id = user_id

    def submit(self, submission: TokenSubmission) -> dict:
        result = self._usecase.execute(
            user_id=self._user_id,
            provider=submission.provider,
            access_token=submission.access_token,
            scope=submission.scope,
            expires_in=submission.expires_in,
        )
        if isinstance(result, Err):
            raise TokenSubmissionError(result.message, code=result.code)
        return acknowledgement_payload(result.value)
