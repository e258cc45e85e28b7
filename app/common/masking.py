from __future__ import annotations

import hashlib
import re

_SECRET_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"Bearer\s+[A-Za-z0-9\-\._~\+/]+=*", re.IGNORECASE),
    # key=value / key: value / "key": "value" 형태 (URL fragment, JSON 바디 포함)
    re.compile(
        r"[\"']?\b(access_token|accessToken|refresh_token|id_token|client_secret|"
        r"state|nonce)\b[\"']?\s*[:=]\s*[\"']?[^\s,&\"'}]+",
        re.IGNORECASE,
    ),
]

_MAX_LENGTH = 500


def mask_secrets(text: str) -> str:
    """
    로그/응답에 토큰이나 state 원문이 섞이지 않도록 보수적으로 마스킹합니다.
    """
    if not text:
        return text
    masked = text
    for pat in _SECRET_PATTERNS:
        masked = pat.sub("[REDACTED]", masked)
    if len(masked) > _MAX_LENGTH:
        masked = masked[:_MAX_LENGTH] + "...[TRUNCATED]"
    return masked


def short_hash(value: str | None) -> str:
    """state 같은 값을 로그에서 상관관계 추적용으로만 쓰기 위한 짧은 해시."""
    if not value:
        return "-"
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:8]
