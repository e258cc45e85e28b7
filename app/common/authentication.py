"""
JWT Cookie Authentication

캘린더 연결은 브라우저 이동(GET /oauth/<provider>/start/)으로 시작하고, 콜백 페이지의
fetch 도 쿠키만 실어 보냅니다. 그래서 Authorization 헤더가 없으면 HttpOnly 쿠키의
access token 으로 인증합니다.
"""

import logging
from functools import wraps

from common.jwt_cookies import access_cookie_name
from django.conf import settings
from django.contrib.auth.views import redirect_to_login
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication

logger = logging.getLogger(__name__)


class JWTCookieAuthentication(JWTAuthentication):
    def authenticate(self, request):
        from_header = super().authenticate(request)
        if from_header is not None:
            return from_header

        raw_token = request.COOKIES.get(access_cookie_name()) or None
        if raw_token is None:
            return None

        token = self.get_validated_token(raw_token)
        return self.get_user(token), token


def jwt_login_required(view_func):
    """
    DRF 밖의 일반 Django 페이지용 로그인 게이트.

    JWT(헤더 또는 쿠키)가 없거나 만료/위조되었으면 settings.LOGIN_URL 로 보내고
    (?next=현재 경로), 유효하면 request.user 를 채운 뒤 뷰를 실행합니다.
    """

    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        try:
            authenticated = JWTCookieAuthentication().authenticate(request)
        except AuthenticationFailed as e:
            logger.info("page_auth_rejected path=%s reason=%s", request.path, e)
            authenticated = None

        if authenticated is None:
            return redirect_to_login(request.path, settings.LOGIN_URL)

        request.user = authenticated[0]
        return view_func(request, *args, **kwargs)

    return _wrapped
