"""
JWT Cookie Utilities

로그인/회원가입 응답에 access/refresh JWT 를 HttpOnly Cookie 로 싣고, 로그아웃 시 지웁니다.
쿠키 이름/속성은 settings.JWT_AUTH_* 로 조정합니다.
"""

from django.conf import settings
from rest_framework.response import Response


def access_cookie_name() -> str:
    return getattr(settings, "JWT_AUTH_COOKIE", "access_token")


def refresh_cookie_name() -> str:
    return getattr(settings, "JWT_AUTH_REFRESH_COOKIE", "refresh_token")


def _cookie_options() -> dict:
    return {
        "path": getattr(settings, "JWT_AUTH_COOKIE_PATH", "/"),
        "domain": getattr(settings, "JWT_AUTH_COOKIE_DOMAIN", None),
        "samesite": getattr(settings, "JWT_AUTH_COOKIE_SAMESITE", "Lax"),
    }


def set_jwt_cookies(
    response: Response, access_token: str, refresh_token: str
) -> Response:
    httponly = getattr(settings, "JWT_AUTH_COOKIE_HTTP_ONLY", True)
    secure = getattr(settings, "JWT_AUTH_COOKIE_SECURE", not settings.DEBUG)
    lifetimes = settings.SIMPLE_JWT

    for name, value, lifetime_key in (
        (access_cookie_name(), access_token, "ACCESS_TOKEN_LIFETIME"),
        (refresh_cookie_name(), refresh_token, "REFRESH_TOKEN_LIFETIME"),
    ):
        response.set_cookie(
            key=name,
            value=value,
            httponly=httponly,
            secure=secure,
            max_age=int(lifetimes[lifetime_key].total_seconds()),
            **_cookie_options(),
        )
    return response


def delete_jwt_cookies(response: Response) -> Response:
    options = _cookie_options()
    for name in (access_cookie_name(), refresh_cookie_name()):
        response.delete_cookie(key=name, **options)
    return response
