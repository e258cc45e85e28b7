from __future__ import annotations

import secrets

# 32 bytes -> 256 bits, base64url(패딩 없음) 43자
STATE_NBYTES = 32


def generate_state() -> str:
    """
    CSRF 방지용 state 값을 생성합니다.

    secrets 모듈(OS CSPRNG)만 사용하며, 안전한 난수원을 쓸 수 없으면 예외를 그대로
    올려 플로우가 약한 난수로 진행되지 않도록 합니다.
    """
    return secrets.token_urlsafe(STATE_NBYTES)
