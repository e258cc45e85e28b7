from __future__ import annotations

import urllib.parse


def parse_fragment(fragment: str | None) -> dict[str, str]:
    """
    URL fragment(`#` 뒤)를 평평한 key/value dict로 디코딩합니다.

    - `&` 로 구분된 `key=value` 쌍, 첫 번째 `=` 기준으로 분리
    - key/value 모두 퍼센트 디코딩 (`+`는 공백으로 바꾸지 않음)
    - `=`가 없거나 key가 빈 조각은 무시, 모르는 key는 그대로 통과
    """
    if not fragment:
        return {}
    if fragment.startswith("#"):
        fragment = fragment[1:]

    params: dict[str, str] = {}
    for piece in fragment.split("&"):
        key, sep, value = piece.partition("=")
        if not sep or not key:
            continue
        params[urllib.parse.unquote(key)] = urllib.parse.unquote(value)
    return params
