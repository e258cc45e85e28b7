from __future__ import annotations

from typing import Protocol

from calendars.domain.oauth import TokenSubmission


class TokenSubmissionClientPort(Protocol):
    def submit(self, submission: TokenSubmission) -> dict:
        """
        토큰 저장 함수를 1회 호출하고 응답(acknowledgement)을 반환합니다.

        실패 시 TokenSubmissionError 를 올립니다. 자동 재시도는 하지 않습니다.
        """
        ...
