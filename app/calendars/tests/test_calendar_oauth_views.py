import urllib.parse

import pytest
from calendars.adapters.session_pending_flow_store import SESSION_KEY
from calendars.models import CalendarConnection
from rest_framework import status
from rest_framework.test import APIClient


def _state_of(url: str) -> str:
    return urllib.parse.parse_qs(urllib.parse.urlparse(url).query)["state"][0]


@pytest.mark.django_db
class TestCalendarOAuthStart:
    def test_requires_authentication(self, calendar_oauth_settings):
        resp = APIClient().get("/api/v1/calendars/oauth/google/start/")
        assert resp.status_code == status.HTTP_401_UNAUTHORIZED

    def test_unknown_provider(self, authed_client, calendar_oauth_settings):
        resp = authed_client.post("/api/v1/calendars/oauth/apple/start/")
        assert resp.status_code == status.HTTP_404_NOT_FOUND
        assert resp.data["error_code"] == "UNKNOWN_PROVIDER"

    def test_not_configured_returns_config_error_without_redirect(
        self, authed_client, calendar_oauth_settings
    ):
        calendar_oauth_settings.GOOGLE_CALENDAR_CLIENT_ID = ""

        resp = authed_client.get("/api/v1/calendars/oauth/google/start/")

        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.data["error_code"] == "CONFIG_MISSING"
        assert "GOOGLE_CALENDAR_CLIENT_ID" in resp.data["message"]
        assert SESSION_KEY not in authed_client.session

    def test_feature_disabled(self, authed_client, calendar_oauth_settings):
        calendar_oauth_settings.CALENDAR_OAUTH_ENABLED = False
        resp = authed_client.post("/api/v1/calendars/oauth/google/start/")
        assert resp.status_code == status.HTTP_404_NOT_FOUND
        assert resp.data["error_code"] == "FEATURE_DISABLED"

    def test_get_redirects_to_google(self, authed_client, calendar_oauth_settings):
        resp = authed_client.get("/api/v1/calendars/oauth/google/start/")

        assert resp.status_code == status.HTTP_302_FOUND
        location = resp["Location"]
        parsed = urllib.parse.urlparse(location)
        assert parsed.netloc == "accounts.google.com"
        qs = urllib.parse.parse_qs(parsed.query)
        assert qs["client_id"] == ["google-client-id"]
        assert qs["redirect_uri"] == ["http://testserver/oauth/google/callback"]
        assert qs["response_type"] == ["token"]

        flows = authed_client.session[SESSION_KEY]
        assert flows[_state_of(location)]["provider"] == "google"

    def test_post_returns_microsoft_authorization_url(
        self, authed_client, calendar_oauth_settings
    ):
        resp = authed_client.post("/api/v1/calendars/oauth/microsoft/start/")

        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["provider"] == "microsoft"
        parsed = urllib.parse.urlparse(resp.data["authorization_url"])
        assert parsed.netloc == "login.microsoftonline.com"
        assert parsed.path == "/common/oauth2/v2.0/authorize"


@pytest.mark.django_db
class TestCalendarOAuthCallback:
    def _start(self, client, provider="google") -> str:
        resp = client.post(f"/api/v1/calendars/oauth/{provider}/start/")
        assert resp.status_code == status.HTTP_200_OK
        return _state_of(resp.data["authorization_url"])

    def test_connect_google_end_to_end(self, authed_client, user, calendar_oauth_settings):
        url = authed_client.post("/api/v1/calendars/oauth/google/start/").data[
            "authorization_url"
        ]
        qs = urllib.parse.parse_qs(urllib.parse.urlparse(url).query)
        assert qs["client_id"] and qs["redirect_uri"] and qs["state"]
        assert qs["scope"] == [
            "https://www.googleapis.com/auth/calendar.readonly "
            "https://www.googleapis.com/auth/calendar.events"
        ]
        state = qs["state"][0]

        fragment = urllib.parse.urlencode(
            {
                "access_token": "tok123",
                "token_type": "Bearer",
                "expires_in": "3600",
                "scope": qs["scope"][0],
                "state": state,
            },
            quote_via=urllib.parse.quote,
        )
        resp = authed_client.post(
            "/api/v1/calendars/oauth/callback/",
            data={"fragment": fragment},
            format="json",
        )

        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["status"] == "success"
        assert resp.data["redirect_to"] == "/calendar"
        assert resp.data["redirect_after_ms"] == 1000
        assert resp.data["acknowledgement"]["success"] is True

        record = CalendarConnection.objects.get(user=user, provider="google")
        assert record.access_token == "tok123"
        assert record.scope == qs["scope"][0]
        assert SESSION_KEY not in authed_client.session

    def test_state_is_single_use(self, authed_client, calendar_oauth_settings):
        state = self._start(authed_client)
        fragment = f"access_token=tok&state={state}"

        first = authed_client.post(
            "/api/v1/calendars/oauth/callback/", {"fragment": fragment}, format="json"
        )
        replay = authed_client.post(
            "/api/v1/calendars/oauth/callback/", {"fragment": fragment}, format="json"
        )

        assert first.data["status"] == "success"
        assert replay.status_code == status.HTTP_400_BAD_REQUEST
        assert replay.data["error_code"] == "STATE_MISMATCH"
        assert CalendarConnection.objects.count() == 1

    def test_mismatched_state_keeps_pending_flow(
        self, authed_client, calendar_oauth_settings
    ):
        state = self._start(authed_client)

        resp = authed_client.post(
            "/api/v1/calendars/oauth/callback/",
            {"fragment": "access_token=tok&state=forged"},
            format="json",
        )

        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.data["status"] == "error"
        assert resp.data["redirect_to"] == "/calendar"
        assert "forged" not in str(resp.data)
        assert state in authed_client.session[SESSION_KEY]
        assert not CalendarConnection.objects.exists()

    def test_no_fragment_is_idle(self, authed_client, calendar_oauth_settings):
        resp = authed_client.post(
            "/api/v1/calendars/oauth/callback/", {"fragment": ""}, format="json"
        )
        assert resp.status_code == status.HTTP_200_OK
        assert resp.data["status"] == "idle"
        assert resp.data["redirect_to"] is None

    def test_provider_error(self, authed_client, calendar_oauth_settings):
        state = self._start(authed_client, "microsoft")
        resp = authed_client.post(
            "/api/v1/calendars/oauth/callback/",
            {"fragment": f"error=access_denied&state={state}"},
            format="json",
        )
        assert resp.status_code == status.HTTP_400_BAD_REQUEST
        assert resp.data["error_code"] == "PROVIDER_ERROR"
        assert resp.data["provider"] == "microsoft"

    def test_remote_function_failure(
        self, authed_client, calendar_oauth_settings, monkeypatch
    ):
        from calendars.adapters.functions_http_client import CalendarFunctionsHttpClient
        from calendars.domain.errors import TokenSubmissionError

        calendar_oauth_settings.CALENDAR_TOKEN_FUNCTION_URL = (
            "https://functions.example.com/store-token"
        )

        def boom(self, submission):
            raise TokenSubmissionError("token_submission_failed: http_500")

        monkeypatch.setattr(CalendarFunctionsHttpClient, "submit", boom)

        state = self._start(authed_client)
        resp = authed_client.post(
            "/api/v1/calendars/oauth/callback/",
            {"fragment": f"access_token=tok&state={state}"},
            format="json",
        )

        assert resp.status_code == status.HTTP_502_BAD_GATEWAY
        assert resp.data["error_code"] == "SUBMISSION_FAILED"
        assert resp.data["redirect_after_ms"] == 3000


@pytest.mark.django_db
class TestCalendarProviderList:
    def test_lists_configuration_state(self, authed_client, calendar_oauth_settings):
        calendar_oauth_settings.MICROSOFT_CALENDAR_CLIENT_ID = ""

        resp = authed_client.get("/api/v1/calendars/providers/")

        assert resp.status_code == status.HTTP_200_OK
        by_id = {p["id"]: p for p in resp.data}
        assert by_id["google"]["configured"] is True
        assert by_id["google"]["config_error"] is None
        assert by_id["microsoft"]["configured"] is False
        assert "MICROSOFT_CALENDAR_CLIENT_ID" in by_id["microsoft"]["config_error"]


@pytest.mark.django_db
class TestCallbackWithoutSession:
    def test_unauthenticated_callback_sends_user_to_login(
        self, calendar_oauth_settings
    ):
        resp = APIClient().post(
            "/api/v1/calendars/oauth/callback/",
            {"fragment": "access_token=tok&state=S"},
            format="json",
        )

        assert resp.status_code == status.HTTP_401_UNAUTHORIZED
        assert resp.data["status"] == "error"
        assert resp.data["error_code"] == "UNAUTHORIZED"
        assert resp.data["redirect_to"] == "/login?next=%2Fcalendar"
        assert resp.data["redirect_after_ms"] == 3000
        assert "tok" not in resp.data["message"]
        assert not CalendarConnection.objects.exists()

    def test_expired_cookie_is_treated_as_signed_out(self, calendar_oauth_settings):
        client = APIClient()
        client.cookies["access_token"] = "expired-or-forged"

        resp = client.post(
            "/api/v1/calendars/oauth/callback/",
            {"fragment": "access_token=tok&state=S"},
            format="json",
        )

        assert resp.status_code == status.HTTP_401_UNAUTHORIZED
        assert resp.data["redirect_to"].startswith("/login?")


@pytest.mark.django_db
class TestBrowserPages:
    def test_callback_page_renders_for_signed_in_user(self, jwt_cookie_client):
        resp = jwt_cookie_client.get("/oauth/google/callback")

        assert resp.status_code == 200
        assert b"/api/v1/calendars/oauth/callback/" in resp.content
        assert b'var fallbackPath = "/calendar"' in resp.content

    def test_callback_page_unknown_provider_is_404(self, jwt_cookie_client):
        assert jwt_cookie_client.get("/oauth/apple/callback").status_code == 404

    def test_callback_page_redirects_signed_out_user_to_login(self, client):
        resp = client.get("/oauth/google/callback")

        assert resp.status_code == 302
        assert resp["Location"].startswith("/login?")
        assert "next=/oauth/google/callback" in resp["Location"]

    def test_calendar_page_redirects_signed_out_user_to_login(self, client):
        resp = client.get("/calendar")

        assert resp.status_code == 302
        assert resp["Location"].startswith("/login?")

    def test_invalid_cookie_redirects_to_login(self, client):
        client.cookies["access_token"] = "not-a-jwt"
        assert client.get("/calendar").status_code == 302

    def test_calendar_page_renders_for_signed_in_user(self, jwt_cookie_client):
        resp = jwt_cookie_client.get("/calendar")

        assert resp.status_code == 200
        assert b"/api/v1/calendars/oauth/google/start/" in resp.content
