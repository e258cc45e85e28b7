from __future__ import annotations

import json
import urllib.error
import urllib.request

from calendars.domain.errors import TokenSubmissionError
from calendars.domain.oauth import TokenSubmission
from calendars.ports.token_submission_client import TokenSubmissionClientPort


class CalendarFunctionsHttpClient(TokenSubmissionClientPort):
    """
    원격 토큰 저장 함수(HTTP)에 JSON 바디를 POST 합니다.

    사용자 신원은 바디가 아니라 전달받은 인증 헤더(Authorization/Cookie)로만 전달됩니다.
    """

    def __init__(
        self,
        *,
        endpoint: str,
        timeout_seconds: float = 10,
        auth_headers: dict[str, str] | None = None,
    ):
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds
        self._auth_headers = dict(auth_headers or {})

    def submit(self, submission: TokenSubmission) -> dict:
        data = json.dumps(submission.to_payload()).encode("utf-8")
        req = urllib.request.Request(
            self.endpoint,
            data=data,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
                **self._auth_headers,
            },
            method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_seconds) as resp:
                payload = json.loads(resp.read().decode("utf-8") or "{}")
        except urllib.error.HTTPError as e:
            # 응답 바디는 예외 메시지에 싣지 않음(토큰이 되돌아올 수 있음)
            raise TokenSubmissionError(f"token_submission_failed: http_{e.code}") from e
        except Exception as e:
            raise TokenSubmissionError("token_submission_failed") from e

        if not isinstance(payload, dict) or not payload.get("success"):
            raise TokenSubmissionError("token_submission_failed: rejected")
        return payload
