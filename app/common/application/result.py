from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err:
    """
    서비스/유스케이스 실패.

    code 는 뷰에서 HTTP 상태로 바뀌고(CONFIG_MISSING -> 400, SUBMISSION_FAILED -> 502 ...),
    message 는 응답 바디에 그대로 실립니다. 토큰이나 state 원문은 message 에 넣지 않고
    필요하면 details(로그 전용)에만 둡니다.
    """

    code: str
    message: str
    details: Optional[dict] = None

    def as_payload(self) -> dict[str, str]:
        return {"error_code": self.code, "message": self.message}


Result = Ok[T] | Err
