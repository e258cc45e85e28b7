from __future__ import annotations

import urllib.parse
from typing import Iterable

from calendars.domain.errors import OAuthConfigurationError
from calendars.domain.oauth import (
    GOOGLE_AUTHORIZATION_ENDPOINT,
    MICROSOFT_AUTHORIZATION_ENDPOINT,
    MICROSOFT_DEFAULT_TENANT,
    AuthorizationRequest,
    CalendarProvider,
)


def build_authorization_url(request: AuthorizationRequest) -> str:
    """
    implicit grant(response_type=token)용 authorization URL을 만듭니다.

    순수 함수이며 실제 이동(리다이렉트)은 호출자가 합니다.
    """
    if not request.client_id:
        raise OAuthConfigurationError(
            f"{request.provider.value} client_id is not configured"
        )
    if not request.redirect_uri:
        raise ValueError("redirect_uri is required")
    if not request.state:
        raise ValueError("state is required")
    scope = join_scopes(request.scopes)
    if not scope:
        raise ValueError("at least one scope is required")

    if request.provider is CalendarProvider.GOOGLE:
        return _build_google_authorization_url(request, scope=scope)
    return _build_microsoft_authorization_url(request, scope=scope)


def join_scopes(scopes: Iterable[str]) -> str:
    seen: list[str] = []
    for s in scopes or ():
        s = str(s).strip()
        if s and s not in seen:
            seen.append(s)
    return " ".join(seen)


def _encode(query: dict[str, str]) -> str:
    # 공백은 %20, '/' ':' 포함 모든 예약 문자를 퍼센트 인코딩
    return urllib.parse.urlencode(query, quote_via=urllib.parse.quote)


def _build_google_authorization_url(request: AuthorizationRequest, *, scope: str) -> str:
    query = {
        "client_id": request.client_id,
        "redirect_uri": request.redirect_uri,
        "response_type": "token",
        "scope": scope,
        "state": request.state,
        "include_granted_scopes": "true",
    }
    return f"{GOOGLE_AUTHORIZATION_ENDPOINT}?{_encode(query)}"


def _build_microsoft_authorization_url(
    request: AuthorizationRequest, *, scope: str
) -> str:
    tenant = (request.tenant or "").strip() or MICROSOFT_DEFAULT_TENANT
    base = MICROSOFT_AUTHORIZATION_ENDPOINT.format(
        tenant=urllib.parse.quote(tenant, safe="")
    )
    query = {
        "client_id": request.client_id,
        "redirect_uri": request.redirect_uri,
        "response_type": "token",
        "scope": scope,
        "state": request.state,
        "response_mode": "fragment",
    }
    if request.nonce:
        query["nonce"] = request.nonce
    return f"{base}?{_encode(query)}"
