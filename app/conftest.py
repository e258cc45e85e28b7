# app/conftest.py
"""
공용 pytest fixtures
"""
import pytest
from rest_framework.test import APIClient


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(
        username="user@example.com",
        email="user@example.com",
        password="testpass123",
    )


@pytest.fixture
def authed_client(user):
    """
    인증된 APIClient. 같은 client 를 쓰는 동안 세션 쿠키(진행 중 OAuth state)가 유지됩니다.
    """
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def jwt_cookie_client(client, user):
    """브라우저처럼 access token 쿠키만 가진 Django test client."""
    from common.jwt_cookies import access_cookie_name
    from rest_framework_simplejwt.tokens import AccessToken

    client.cookies[access_cookie_name()] = str(AccessToken.for_user(user))
    return client


@pytest.fixture
def calendar_oauth_settings(settings):
    """두 provider 모두 설정된 상태."""
    settings.CALENDAR_OAUTH_ENABLED = True
    settings.GOOGLE_CALENDAR_CLIENT_ID = "google-client-id"
    settings.GOOGLE_CALENDAR_REDIRECT_URI = ""
    settings.MICROSOFT_CALENDAR_CLIENT_ID = "microsoft-client-id"
    settings.MICROSOFT_CALENDAR_REDIRECT_URI = ""
    settings.MICROSOFT_CALENDAR_TENANT = "common"
    settings.CALENDAR_TOKEN_FUNCTION_URL = ""
    settings.CALENDAR_OAUTH_STATE_TTL_SECONDS = 600
    return settings
